"""Analyzers for AngularJS migration scans."""

from ngmigration.analyzers.aggregator import FindingsAggregator
from ngmigration.analyzers.configuration import build_configuration
from ngmigration.analyzers.constants import is_test_file
from ngmigration.analyzers.detectors import (
    Detector,
    build_detectors,
    is_scannable,
    scan_file,
)
from ngmigration.analyzers.files import read_source, resolve_files
from ngmigration.analyzers.ignore import (
    DEFAULT_IGNORES,
    load_ignore_patterns,
    parse_ignore_file,
    should_ignore,
)
from ngmigration.analyzers.pipeline import run_scan, scan_repository
from ngmigration.analyzers.recommendation import (
    build_preparation_report,
    classify_generation,
    recommend,
)
from ngmigration.analyzers.sloc import count_lines, count_source_lines

__all__ = [
    # Pipeline
    "scan_repository",
    "run_scan",
    "build_configuration",
    # Path resolution
    "DEFAULT_IGNORES",
    "load_ignore_patterns",
    "parse_ignore_file",
    "should_ignore",
    "resolve_files",
    "read_source",
    # Line counting
    "count_lines",
    "count_source_lines",
    # Detection
    "Detector",
    "build_detectors",
    "is_scannable",
    "is_test_file",
    "scan_file",
    # Aggregation and recommendation
    "FindingsAggregator",
    "build_preparation_report",
    "classify_generation",
    "recommend",
]
