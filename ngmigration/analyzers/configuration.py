"""Construction of the immutable scan configuration."""

import os
from pathlib import Path

from ngmigration.analyzers.ignore import DEFAULT_IGNORE_FILENAME, load_ignore_patterns
from ngmigration.errors import InvalidRootError
from ngmigration.models.migration import ScanConfiguration


def default_max_workers() -> int:
    """Worker pool size used when the caller does not choose one."""
    return min(8, os.cpu_count() or 1)


def build_configuration(
    root: str | Path,
    ignore_filename: str = DEFAULT_IGNORE_FILENAME,
    extra_ignores: list[str] | None = None,
    max_workers: int | None = None,
    exclude_tests_from_global_scope: bool = True,
) -> ScanConfiguration:
    """Build the configuration for scanning one application.

    Args:
        root: Application root directory.
        ignore_filename: Ignore file looked up at the root.
        extra_ignores: Additional ignore patterns.
        max_workers: Scanner pool size (default: up to 8, one per CPU).
        exclude_tests_from_global_scope: Skip $rootScope checks in test files.

    Returns:
        Frozen ScanConfiguration.

    Raises:
        InvalidRootError: If root does not exist or is not a directory.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise InvalidRootError(root)

    patterns = load_ignore_patterns(root_path, ignore_filename, extra_ignores)

    return ScanConfiguration(
        root=root_path,
        ignore_patterns=patterns,
        ignore_filename=ignore_filename,
        exclude_tests_from_global_scope=exclude_tests_from_global_scope,
        max_workers=max_workers or default_max_workers(),
    )
