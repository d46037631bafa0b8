"""Data models for migration scans.

Pydantic models for the scan configuration, per-file findings, the
cumulative analysis state and the final recommendation. All of them
serialize with ``model_dump(mode="json")``.
"""

from pathlib import Path
from typing import Any, Literal, get_args

from pydantic import BaseModel, Field, PrivateAttr, computed_field

from ngmigration.errors import FrozenStateError

# 880 lines is roughly one engineer-month of coding
BASELINE_REWRITE_THRESHOLD: int = 880
THRESHOLD_GROWTH_FACTOR: float = 1.25

AntiPatternCategory = Literal[
    "legacy_global_scope",
    "dynamic_template_compilation",
    "missing_unit_tests",
    "legacy_script_file",
    "unconverted_controller",
]
FrameworkMarker = Literal[
    "legacy_framework",
    "modern_framework",
    "ui_router",
    "legacy_router",
    "modern_router",
    "custom_elements_bridge",
]
FileClass = Literal[
    "unit_test",
    "typed_script",
    "component_directive",
]
FindingCategory = AntiPatternCategory | FrameworkMarker | FileClass

# Report and threshold order
ANTI_PATTERN_ORDER: tuple[AntiPatternCategory, ...] = get_args(AntiPatternCategory)

Classification = Literal[
    "already-modern",
    "rewrite-recommended",
    "incrementally-upgradable",
    "needs-preparation",
]
FrameworkGeneration = Literal["modern", "hybrid", "legacy"]


class ScanConfiguration(BaseModel):
    """Immutable settings for one scan, built once from user input."""

    root: Path = Field(description="Absolute path of the application root")
    ignore_patterns: tuple[str, ...] = Field(
        default=(),
        description="Ignore-file patterns merged with the built-in defaults",
    )
    inspect_extensions: tuple[str, ...] = Field(
        default=(".js", ".ts", ".html"),
        description="Extensions scanned by detectors and counted for lines of code",
    )
    manifest_names: tuple[str, ...] = Field(
        default=("package.json", "bower.json"),
        description="Dependency manifests inspected for framework version markers",
    )
    ignore_filename: str = Field(default=".gitignore", description="Ignore file at the root")
    exclude_tests_from_global_scope: bool = Field(
        default=True,
        description="Do not flag $rootScope usage inside spec/test files",
    )
    max_workers: int = Field(default=4, ge=1, description="Scanner worker pool size")

    model_config = {"frozen": True}


class Finding(BaseModel):
    """A single positive detector outcome for one file."""

    category: FindingCategory = Field(description="What was detected")
    file_path: str = Field(description="Path relative to the scan root")
    evidence_label: str | None = Field(
        default=None,
        description="Human-readable evidence; only labelled findings reach the report",
    )

    model_config = {"frozen": True}


class FrozenEvidence(dict):
    """Read-only evidence map installed when an AnalysisState is frozen."""

    def _readonly(self, *args: Any, **kwargs: Any) -> None:
        raise FrozenStateError("Cannot modify evidence: analysis state is frozen")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly


class AnalysisState(BaseModel):
    """Cumulative analysis of a tree, written only by FindingsAggregator.

    The state is frozen once traversal completes; any later assignment
    raises FrozenStateError.
    """

    # Flags
    uses_legacy_global_scope: bool = False
    uses_dynamic_template_compilation: bool = False
    has_unit_tests: bool = False
    uses_ui_router: bool = Field(default=False, description="Third-party 'ui.router'")
    uses_legacy_router: bool = Field(default=False, description="Built-in 'ngRoute'")
    uses_modern_router: bool = Field(default=False, description="'@angular/router'")
    uses_custom_elements_bridge: bool = False
    targets_legacy_framework: bool = False
    targets_modern_framework: bool = False

    # Counts
    script_file_count: int = 0
    typed_file_count: int = 0
    legacy_controller_count: int = 0
    component_directive_count: int = 0
    total_file_count: int = Field(default=0, description="Files in the resolved set")
    relevant_file_count: int = Field(
        default=0, description="Source files inspected, manifests excluded"
    )

    lines_of_code: int = 0
    file_evidence: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Evidence labels per file, in detection order",
    )

    _is_frozen: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and self.is_frozen:
            raise FrozenStateError(f"Cannot set {name}: analysis state is frozen")
        super().__setattr__(name, value)

    @property
    def is_frozen(self) -> bool:
        return self._is_frozen

    def freeze(self) -> "AnalysisState":
        """Mark the state read-only and return it.

        The evidence map is swapped for a read-only copy so it cannot be
        changed in place either.
        """
        if not self._is_frozen:
            self.file_evidence = FrozenEvidence(self.file_evidence)
            self._is_frozen = True
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def anti_patterns(self) -> list[AntiPatternCategory]:
        """Anti-pattern categories present in the tree, in report order.

        Missing unit tests only counts when there is code to test.
        """
        present = {
            "legacy_global_scope": self.uses_legacy_global_scope,
            "dynamic_template_compilation": self.uses_dynamic_template_compilation,
            "missing_unit_tests": not self.has_unit_tests and self.relevant_file_count > 0,
            "legacy_script_file": self.script_file_count > 0,
            "unconverted_controller": self.legacy_controller_count > 0,
        }
        return [category for category in ANTI_PATTERN_ORDER if present[category]]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rewrite_threshold(self) -> float:
        """Lines-of-code ceiling below which a rewrite beats migration.

        Each present anti-pattern category grows the baseline exactly once.
        """
        threshold = float(BASELINE_REWRITE_THRESHOLD)
        for _ in self.anti_patterns:
            threshold *= THRESHOLD_GROWTH_FACTOR
        return threshold


class Recommendation(BaseModel):
    """Final migration recommendation for a scanned application."""

    classification: Classification
    framework_generation: FrameworkGeneration
    narrative: str = Field(description="Human-readable explanation")
    preparation_report: str | None = Field(
        default=None,
        description="Per-category instructions followed by per-file evidence",
    )
    upgrade_hint: str | None = Field(
        default=None, description="Routing or custom-elements hint for ngUpgrade"
    )
    rewrite_threshold: float
    lines_of_code: int

    model_config = {"frozen": True}


class SkippedFile(BaseModel):
    """A file dropped from the scan because of a recoverable error."""

    path: str
    reason: str


class ScanResult(BaseModel):
    """Everything produced by one run of the pipeline."""

    configuration: ScanConfiguration
    state: AnalysisState
    recommendation: Recommendation
    skipped_files: list[SkippedFile] = Field(default_factory=list)
