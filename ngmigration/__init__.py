"""ngmigration - AngularJS to Angular migration assistant."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ngmigration.models.migration import ScanResult

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"


def scan(root: str) -> "ScanResult":
    """Scan an AngularJS application and return the full scan result.

    This is the programmatic entry point; the CLI wraps the same pipeline.
    """
    from ngmigration.analyzers.pipeline import scan_repository
    return scan_repository(root)
