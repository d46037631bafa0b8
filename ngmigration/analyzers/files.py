"""File discovery for migration scans.

Resolves the set of leaf files under an application root that survive the
ignore patterns, and reads them for the detectors and the line counter.
"""

from collections.abc import Callable
from pathlib import Path, PurePosixPath

from ngmigration.analyzers.ignore import create_should_ignore_func
from ngmigration.errors import FileReadError, InvalidRootError
from ngmigration.logging import logger


def resolve_files(root: str | Path, patterns: tuple[str, ...] | set[str]) -> list[str]:
    """List every non-ignored file under root.

    Entries are visited in name order within each directory, so the result
    is stable for an unchanged tree. Ignored directories are not descended
    into and symlinked directories are not followed.

    Args:
        root: Application root directory.
        patterns: Ignore patterns from load_ignore_patterns.

    Returns:
        POSIX-style paths relative to root, files only.

    Raises:
        InvalidRootError: If root does not exist or is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise InvalidRootError(root)

    is_ignored = create_should_ignore_func(patterns)
    return _walk(root, PurePosixPath(), is_ignored)


def _walk(
    directory: Path,
    rel_dir: PurePosixPath,
    is_ignored: Callable[[str], bool],
) -> list[str]:
    """Collect files below one directory; the relative prefix is passed down."""
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning("  Cannot list %s: %s", directory, e)
        return []

    files: list[str] = []
    for entry in entries:
        rel_path = rel_dir / entry.name
        if is_ignored(rel_path.as_posix()):
            continue
        if entry.is_dir():
            if entry.is_symlink():
                logger.debug("  Not following symlinked directory %s", rel_path)
                continue
            files.extend(_walk(entry, rel_path, is_ignored))
        elif entry.is_file():
            files.append(rel_path.as_posix())
    return files


def read_source(root: Path, rel_path: str) -> str:
    """Read one file of the resolved set as text.

    Undecodable bytes are replaced rather than treated as failures.

    Raises:
        FileReadError: If the file cannot be opened or read.
    """
    path = root / rel_path
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileReadError(rel_path, e.strerror or str(e)) from e
