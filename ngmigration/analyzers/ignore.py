"""Ignore pattern management for migration scans.

Combines built-in defaults with the patterns of an ignore file at the
application root (``.gitignore`` unless configured otherwise).

Configuration:
    - DEFAULT_IGNORES: dependency, version-control and end-to-end test dirs
    - Ignore file: per-app customization using gitignore glob syntax
"""

from collections.abc import Callable
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath

from ngmigration.errors import IgnoreFileParseError
from ngmigration.logging import logger

# Always excluded
DEFAULT_IGNORES: frozenset[str] = frozenset({
    # Dependencies
    "node_modules",
    "bower_components",
    "jspm_packages",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # End-to-end tests
    "e2e",
})

DEFAULT_IGNORE_FILENAME = ".gitignore"


def get_default_ignores() -> set[str]:
    """Get a mutable copy of default ignore patterns."""
    return set(DEFAULT_IGNORES)


def parse_ignore_file(ignore_file: Path) -> list[str]:
    """Parse an ignore file into glob patterns.

    Supports gitignore-style syntax:
    - Lines starting with # are comments
    - Empty lines are ignored
    - Lines starting with ! are negations (dropped, no un-ignore support)
    - Trailing slashes are stripped

    Args:
        ignore_file: Path to the ignore file.

    Returns:
        Patterns in file order, empty if the file doesn't exist.

    Raises:
        IgnoreFileParseError: If the file exists but cannot be read or decoded.
    """
    if not ignore_file.is_file():
        return []

    try:
        content = ignore_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreFileParseError(ignore_file, str(e)) from e

    patterns: list[str] = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("!"):
            logger.debug("  Negation patterns not supported: %s", line)
            continue
        pattern = line.rstrip("/")
        if pattern and pattern not in patterns:
            patterns.append(pattern)
    return patterns


def load_ignore_patterns(
    repo_path: Path,
    ignore_filename: str = DEFAULT_IGNORE_FILENAME,
    extra_patterns: list[str] | None = None,
) -> tuple[str, ...]:
    """Load all applicable ignore patterns for an application.

    Combines patterns from:
    1. Default ignores (always applied)
    2. The ignore file at the root (if it exists and parses)
    3. Extra patterns supplied by the caller

    Args:
        repo_path: Path to the application root.
        ignore_filename: Name of the ignore file at the root.
        extra_patterns: Additional patterns, e.g. from the command line.

    Returns:
        Sorted, deduplicated tuple of patterns.
    """
    patterns = get_default_ignores()

    ignore_file = repo_path / ignore_filename
    try:
        custom_patterns = parse_ignore_file(ignore_file)
    except IgnoreFileParseError as e:
        logger.warning("  %s; using default ignores only", e)
        custom_patterns = []

    if custom_patterns:
        patterns.update(custom_patterns)
        logger.debug("  Loaded %d patterns from %s", len(custom_patterns), ignore_filename)

    if extra_patterns:
        patterns.update(p.rstrip("/") for p in extra_patterns if p.strip())

    return tuple(sorted(patterns))


def _match_leading(parts: tuple[str, ...], pattern_parts: list[str]) -> bool:
    """Whether the pattern segments match a leading run of path segments.

    ``*`` never crosses a ``/``; a ``**`` segment spans any number of segments.
    """
    if not pattern_parts:
        return True
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        return any(_match_leading(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_leading(parts[1:], rest)


def _matches(rel_path: PurePosixPath, pattern: str) -> bool:
    """Match one gitignore-style glob against a relative path.

    Patterns without a slash match any single path component. Patterns with
    a slash are anchored at the root and match the path or one of its
    parent directories; a leading ``**/`` lets them match at any depth.
    """
    anchored = pattern.startswith("/")
    pattern = pattern.lstrip("/")
    if not pattern:
        return False

    if not anchored and "/" not in pattern:
        return any(fnmatchcase(part, pattern) for part in rel_path.parts)

    pattern_parts = [part for part in pattern.split("/") if part]
    return _match_leading(rel_path.parts, pattern_parts)


def should_ignore(rel_path: str | PurePosixPath, patterns: tuple[str, ...] | set[str]) -> bool:
    """Check if a path relative to the root should be ignored.

    Args:
        rel_path: POSIX-style path relative to the application root.
        patterns: Ignore patterns.

    Returns:
        True if any pattern matches the path or one of its parents.
    """
    path = PurePosixPath(rel_path)
    if path.is_absolute() or ".." in path.parts:
        # Outside the root
        return True
    return any(_matches(path, pattern) for pattern in patterns)


def create_should_ignore_func(
    patterns: tuple[str, ...] | set[str],
) -> Callable[[str], bool]:
    """Create a callable for checking if relative paths should be ignored.

    Useful for passing to filter() while walking a tree.
    """

    def _should_ignore(rel_path: str) -> bool:
        return should_ignore(rel_path, patterns)

    return _should_ignore
