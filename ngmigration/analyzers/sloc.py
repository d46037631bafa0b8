"""Source lines of code counting.

A source line is any line that is neither blank nor made up only of
comments. Comment syntax is chosen by file extension.
"""

from collections.abc import Callable, Iterable
from pathlib import Path, PurePosixPath

from ngmigration.analyzers.files import read_source
from ngmigration.errors import FileReadError
from ngmigration.logging import logger

# extension -> (line comment prefix, block comment start, block comment end)
COMMENT_SYNTAX: dict[str, tuple[str | None, str, str]] = {
    ".js": ("//", "/*", "*/"),
    ".ts": ("//", "/*", "*/"),
    ".html": (None, "<!--", "-->"),
}

LINE_COUNT_EXTENSIONS: tuple[str, ...] = (".js", ".ts", ".html")

# String delimiters tracked on lines of languages with line comments
QUOTES = ("'", '"', "`")


def _code_on_line(
    line: str,
    syntax: tuple[str | None, str, str],
    in_block: bool,
) -> tuple[str, bool]:
    """Strip comments from one line.

    Comment markers inside quoted strings are code. Quotes are only tracked
    for script languages; strings are assumed not to span lines.

    Returns:
        The code left on the line and whether a block comment is still open.
    """
    line_prefix, block_start, block_end = syntax
    code: list[str] = []
    quote: str | None = None
    i = 0

    while i < len(line):
        if in_block:
            end = line.find(block_end, i)
            if end == -1:
                break
            in_block = False
            i = end + len(block_end)
            continue

        ch = line[i]
        if quote:
            if ch == "\\":
                code.append(line[i:i + 2])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif line_prefix and line.startswith(line_prefix, i):
            break
        elif block_start and line.startswith(block_start, i):
            in_block = True
            i += len(block_start)
            continue
        elif line_prefix and ch in QUOTES:
            quote = ch

        code.append(ch)
        i += 1

    return "".join(code), in_block


def count_source_lines(text: str, suffix: str) -> int:
    """Count source lines in the text of one file.

    Args:
        text: File content.
        suffix: File extension including the dot (e.g. ".ts").

    Returns:
        Number of non-blank, non-comment lines.
    """
    syntax = COMMENT_SYNTAX.get(suffix.lower(), (None, "", ""))
    count = 0
    in_block = False

    for line in text.splitlines():
        code, in_block = _code_on_line(line, syntax, in_block)
        if code.strip():
            count += 1

    return count


def count_lines(
    root: Path,
    files: Iterable[str],
    extensions: tuple[str, ...] = LINE_COUNT_EXTENSIONS,
    on_error: Callable[[FileReadError], None] | None = None,
) -> int:
    """Sum source lines over the files with a recognized extension.

    Unreadable files are skipped and contribute 0.

    Args:
        root: Application root.
        files: Relative paths from resolve_files.
        extensions: Extensions to count.
        on_error: Called with each FileReadError that caused a skip.

    Returns:
        Total source lines of code, 0 for an empty set.
    """
    total = 0
    for rel_path in files:
        suffix = PurePosixPath(rel_path).suffix.lower()
        if suffix not in extensions:
            continue
        try:
            text = read_source(root, rel_path)
        except FileReadError as e:
            logger.warning("  Skipping %s in line count: %s", rel_path, e.reason)
            if on_error is not None:
                on_error(e)
            continue
        total += count_source_lines(text, suffix)
    return total
