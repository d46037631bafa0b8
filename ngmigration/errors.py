"""Exception types raised while scanning an application."""

from pathlib import Path


class MigrationScanError(Exception):
    """Base class for all scan errors."""

    pass


class InvalidRootError(MigrationScanError, ValueError):
    """Raised when the scan root does not exist or is not a directory."""

    def __init__(self, path: str | Path):
        super().__init__(f"Not a directory: {path}")
        self.path = Path(path)


class FileReadError(MigrationScanError):
    """Raised when a single file in the tree cannot be read.

    Recoverable: the pipeline skips the file and keeps scanning.
    """

    def __init__(self, path: str | Path, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class IgnoreFileParseError(MigrationScanError):
    """Raised when an ignore file exists but cannot be parsed."""

    def __init__(self, path: str | Path, reason: str):
        super().__init__(f"Cannot parse ignore file {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class FrozenStateError(MigrationScanError):
    """Raised on an attempt to mutate analysis state after traversal ended."""

    pass
