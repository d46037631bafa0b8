"""Shared constants for analyzers.

File classes and patterns used by several analyzer modules.
"""

import re
from pathlib import PurePosixPath

SCRIPT_EXTENSION = ".js"
TYPED_SCRIPT_EXTENSION = ".ts"
MARKUP_EXTENSION = ".html"

# Patterns for identifying test files by name
TEST_FILE_PATTERNS = [
    re.compile(r"[._-](?:spec|test)\.[jt]s$", re.IGNORECASE),  # app.spec.ts, app_test.js
    re.compile(r"[a-z0-9](?:Spec|Test)\.[jt]s$"),  # appSpec.js, AppTest.ts
]


def is_test_file(file_path: str) -> bool:
    """Check if a file path names a unit test (spec) file.

    Only the file name is inspected, not its directory.

    Args:
        file_path: Path to the file.

    Returns:
        True if the file is a test file, False otherwise.
    """
    if not file_path:
        return False
    name = PurePosixPath(file_path).name
    return any(pattern.search(name) for pattern in TEST_FILE_PATTERNS)
