"""Content and path detectors for AngularJS applications.

Every detector is a pure function ``(path, content) -> list[Finding]``; none
depends on another's output, so they can run in any order or in parallel.
Detection is plain text matching, never parsing.
"""

import re
from collections.abc import Callable
from pathlib import PurePosixPath

from ngmigration.analyzers.constants import (
    MARKUP_EXTENSION,
    SCRIPT_EXTENSION,
    TYPED_SCRIPT_EXTENSION,
    is_test_file,
)
from ngmigration.models.migration import Finding, FrameworkMarker, ScanConfiguration

Detector = Callable[[str, str], list[Finding]]

ROOT_SCOPE_PATTERN = re.compile(r"\$rootScope\b")
COMPILE_PATTERN = re.compile(r"\$compile\s*\(")
CUSTOM_ELEMENTS_PATTERN = re.compile(r"NgElementConstructor|['\"]@angular/elements['\"]")
CONTROLLER_PATTERN = re.compile(r"\.controller\s*\(")
COMPONENT_PATTERN = re.compile(r"\.component\s*\(")

# Priority order: first match wins
ROUTER_PATTERNS: tuple[tuple[FrameworkMarker, re.Pattern[str]], ...] = (
    ("ui_router", re.compile(r"['\"]ui\.router['\"]")),
    ("legacy_router", re.compile(r"['\"]ngRoute['\"]")),
    ("modern_router", re.compile(r"['\"]@angular/router['\"]")),
)

# Dependency declarations in package.json / bower.json
MODERN_MANIFEST_PATTERNS = (
    re.compile(r"\"@angular/core\"\s*:"),
    re.compile(r"\"angular2\"\s*:"),  # pre-release package name
)
LEGACY_MANIFEST_PATTERN = re.compile(r"\"angular\"\s*:")

# <script src="https://ajax.googleapis.com/ajax/libs/angularjs/1.8.2/angular.min.js">
LEGACY_CDN_PATTERN = re.compile(
    r"<script[^>]*\bsrc\s*=\s*[\"'](?:https?:)?//[^\"']*angular(?:\.min)?\.js[\"']",
    re.IGNORECASE,
)

SOURCE_EXTENSIONS: tuple[str, ...] = (SCRIPT_EXTENSION, TYPED_SCRIPT_EXTENSION, MARKUP_EXTENSION)


def _suffix(path: str) -> str:
    return PurePosixPath(path).suffix.lower()


def is_scannable(path: str, config: ScanConfiguration) -> bool:
    """Whether a file is passed to the detectors at all."""
    return (
        _suffix(path) in config.inspect_extensions
        or PurePosixPath(path).name in config.manifest_names
    )


def build_detectors(config: ScanConfiguration) -> list[Detector]:
    """Build the fixed detector battery for a scan configuration.

    Args:
        config: Scan configuration (extensions, manifests, test handling).

    Returns:
        Detectors in a fixed order.
    """
    source_extensions = tuple(ext for ext in config.inspect_extensions if ext in SOURCE_EXTENSIONS)
    manifest_names = config.manifest_names

    def is_source(path: str) -> bool:
        return _suffix(path) in source_extensions

    def detect_global_scope(path: str, content: str) -> list[Finding]:
        if not is_source(path):
            return []
        if config.exclude_tests_from_global_scope and is_test_file(path):
            return []
        if ROOT_SCOPE_PATTERN.search(content):
            return [Finding(category="legacy_global_scope", file_path=path,
                            evidence_label="$rootScope usage")]
        return []

    def detect_dynamic_compilation(path: str, content: str) -> list[Finding]:
        if is_source(path) and COMPILE_PATTERN.search(content):
            return [Finding(category="dynamic_template_compilation", file_path=path,
                            evidence_label="$compile usage")]
        return []

    def detect_unit_test(path: str, content: str) -> list[Finding]:
        if is_source(path) and is_test_file(path):
            return [Finding(category="unit_test", file_path=path)]
        return []

    def detect_router(path: str, content: str) -> list[Finding]:
        if not is_source(path):
            return []
        for marker, pattern in ROUTER_PATTERNS:
            if pattern.search(content):
                return [Finding(category=marker, file_path=path)]
        return []

    def detect_custom_elements(path: str, content: str) -> list[Finding]:
        if is_source(path) and CUSTOM_ELEMENTS_PATTERN.search(content):
            return [Finding(category="custom_elements_bridge", file_path=path)]
        return []

    def detect_framework_version(path: str, content: str) -> list[Finding]:
        findings: list[Finding] = []
        if PurePosixPath(path).name in manifest_names:
            if any(pattern.search(content) for pattern in MODERN_MANIFEST_PATTERNS):
                findings.append(Finding(category="modern_framework", file_path=path))
            if LEGACY_MANIFEST_PATTERN.search(content):
                findings.append(Finding(category="legacy_framework", file_path=path))
        elif _suffix(path) == MARKUP_EXTENSION and is_source(path):
            if LEGACY_CDN_PATTERN.search(content):
                findings.append(Finding(category="legacy_framework", file_path=path))
        return findings

    def detect_scripting_language(path: str, content: str) -> list[Finding]:
        if not is_source(path):
            return []
        suffix = _suffix(path)
        if suffix == SCRIPT_EXTENSION:
            return [Finding(category="legacy_script_file", file_path=path,
                            evidence_label="JavaScript file (convert to TypeScript)")]
        if suffix == TYPED_SCRIPT_EXTENSION:
            return [Finding(category="typed_script", file_path=path)]
        return []

    def detect_components(path: str, content: str) -> list[Finding]:
        if not is_source(path):
            return []
        findings: list[Finding] = []
        if CONTROLLER_PATTERN.search(content):
            findings.append(Finding(category="unconverted_controller", file_path=path,
                                    evidence_label=".controller() registration"))
        if COMPONENT_PATTERN.search(content):
            findings.append(Finding(category="component_directive", file_path=path))
        return findings

    return [
        detect_global_scope,
        detect_dynamic_compilation,
        detect_unit_test,
        detect_router,
        detect_custom_elements,
        detect_framework_version,
        detect_scripting_language,
        detect_components,
    ]


def scan_file(path: str, content: str, detectors: list[Detector]) -> list[Finding]:
    """Run every detector over one file.

    Args:
        path: Path relative to the scan root.
        content: File content.
        detectors: Battery from build_detectors.

    Returns:
        All findings, grouped by detector in battery order.
    """
    findings: list[Finding] = []
    for detector in detectors:
        findings.extend(detector(path, content))
    return findings
