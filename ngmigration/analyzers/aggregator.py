"""Aggregation of per-file findings into the analysis state.

FindingsAggregator is the only writer of AnalysisState. Writes are
serialized by a lock so findings may be applied from several threads.
"""

from collections.abc import Iterable
from threading import Lock

from ngmigration.errors import FrozenStateError
from ngmigration.models.migration import AnalysisState, Finding

# Finding category -> boolean flag it sets
FLAG_CATEGORIES: dict[str, str] = {
    "legacy_global_scope": "uses_legacy_global_scope",
    "dynamic_template_compilation": "uses_dynamic_template_compilation",
    "unit_test": "has_unit_tests",
    "ui_router": "uses_ui_router",
    "legacy_router": "uses_legacy_router",
    "modern_router": "uses_modern_router",
    "custom_elements_bridge": "uses_custom_elements_bridge",
    "legacy_framework": "targets_legacy_framework",
    "modern_framework": "targets_modern_framework",
}

# Finding category -> counter it increments
COUNTER_CATEGORIES: dict[str, str] = {
    "legacy_script_file": "script_file_count",
    "typed_script": "typed_file_count",
    "unconverted_controller": "legacy_controller_count",
    "component_directive": "component_directive_count",
}


class FindingsAggregator:
    """Apply findings to one AnalysisState until it is frozen."""

    def __init__(self, state: AnalysisState | None = None):
        self.state = state if state is not None else AnalysisState()
        self._lock = Lock()

    def _check_writable(self) -> None:
        if self.state.is_frozen:
            raise FrozenStateError("Analysis state is frozen; no further findings accepted")

    def apply(self, findings: Iterable[Finding]) -> None:
        """Apply the findings of one file.

        Flags are idempotent, counters increment, and every labelled finding
        appends its label to the file's evidence list.

        Raises:
            FrozenStateError: If the state was already frozen.
            ValueError: If a finding carries a category that cannot be applied.
        """
        with self._lock:
            self._check_writable()
            state = self.state
            for finding in findings:
                category = finding.category
                if category in FLAG_CATEGORIES:
                    setattr(state, FLAG_CATEGORIES[category], True)
                elif category in COUNTER_CATEGORIES:
                    attr = COUNTER_CATEGORIES[category]
                    setattr(state, attr, getattr(state, attr) + 1)
                else:
                    raise ValueError(f"Cannot apply finding of category {category!r}")

                if finding.evidence_label is not None:
                    evidence = state.file_evidence
                    evidence[finding.file_path] = (
                        *evidence.get(finding.file_path, ()),
                        finding.evidence_label,
                    )

    def record_file_counts(self, total: int, relevant: int) -> None:
        """Record how many files were resolved and how many were scanned."""
        with self._lock:
            self._check_writable()
            self.state.total_file_count = total
            self.state.relevant_file_count = relevant

    def record_lines_of_code(self, lines_of_code: int) -> None:
        """Record the LineCounter total."""
        with self._lock:
            self._check_writable()
            self.state.lines_of_code = lines_of_code

    def freeze(self) -> AnalysisState:
        """Freeze the state at the end of traversal and return it."""
        with self._lock:
            return self.state.freeze()
