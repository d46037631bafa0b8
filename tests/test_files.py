"""Tests for file resolution and scan configuration."""

import os
from pathlib import Path

import pytest

from ngmigration.analyzers.configuration import build_configuration
from ngmigration.analyzers.files import read_source, resolve_files
from ngmigration.analyzers.ignore import load_ignore_patterns
from ngmigration.errors import FileReadError, InvalidRootError


class TestResolveFiles:
    """Tests for resolve_files."""

    def test_lists_relative_leaf_files(self, temp_dir: Path, write_tree) -> None:
        """Should return POSIX paths relative to root, files only."""
        write_tree(temp_dir, {
            "index.html": "<html></html>",
            "src/app.js": "angular.module('a', []);",
            "src/nested/util.ts": "export const x = 1;",
        })
        (temp_dir / "empty_dir").mkdir()

        files = resolve_files(temp_dir, load_ignore_patterns(temp_dir))

        assert files == ["index.html", "src/app.js", "src/nested/util.ts"]

    def test_sibling_directories_do_not_leak_paths(self, temp_dir: Path, write_tree) -> None:
        """Each directory's files carry that directory's own prefix."""
        write_tree(temp_dir, {
            "a/one.js": "",
            "a/deep/two.js": "",
            "b/three.js": "",
            "c.js": "",
        })

        files = resolve_files(temp_dir, ())

        assert files == ["a/deep/two.js", "a/one.js", "b/three.js", "c.js"]

    def test_excludes_default_ignored_directories(self, temp_dir: Path, write_tree) -> None:
        """node_modules, .git and e2e content never appears."""
        write_tree(temp_dir, {
            "src/app.js": "",
            "node_modules/angular/angular.js": "",
            ".git/HEAD": "ref: refs/heads/main",
            "e2e/app.e2e-spec.ts": "",
        })

        files = resolve_files(temp_dir, load_ignore_patterns(temp_dir))

        assert files == ["src/app.js"]

    def test_applies_ignore_file_patterns(self, temp_dir: Path, write_tree) -> None:
        """Patterns from the ignore file exclude files and directories."""
        write_tree(temp_dir, {
            ".gitignore": "dist/\n*.min.js\n",
            "dist/bundle.js": "",
            "src/app.js": "",
            "src/lib.min.js": "",
        })

        files = resolve_files(temp_dir, load_ignore_patterns(temp_dir))

        assert files == [".gitignore", "src/app.js"]

    def test_slashed_glob_keeps_nested_files(self, temp_dir: Path, write_tree) -> None:
        """src/*.js ignores direct children only."""
        write_tree(temp_dir, {
            ".gitignore": "src/*.js\n",
            "src/bundle.js": "",
            "src/deep/x.js": "",
        })

        files = resolve_files(temp_dir, load_ignore_patterns(temp_dir))

        assert files == [".gitignore", "src/deep/x.js"]

    def test_no_path_matches_an_ignore_pattern(self, temp_dir: Path, write_tree) -> None:
        """Invariant: nothing resolved matches the patterns used."""
        from ngmigration.analyzers.ignore import should_ignore

        write_tree(temp_dir, {
            ".gitignore": "tmp\n",
            "tmp/a.js": "",
            "src/tmp/b.js": "",
            "src/c.js": "",
        })
        patterns = load_ignore_patterns(temp_dir)

        files = resolve_files(temp_dir, patterns)

        assert files
        assert not any(should_ignore(f, patterns) for f in files)

    def test_does_not_follow_directory_symlinks(self, temp_dir: Path, write_tree) -> None:
        """Symlinked directories are not traversed."""
        write_tree(temp_dir, {"src/app.js": ""})
        try:
            os.symlink(temp_dir / "src", temp_dir / "link", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        assert resolve_files(temp_dir, ()) == ["src/app.js"]

    def test_raises_for_missing_root(self, temp_dir: Path) -> None:
        """A missing root is fatal."""
        with pytest.raises(InvalidRootError):
            resolve_files(temp_dir / "missing", ())

    def test_raises_for_file_root(self, temp_dir: Path) -> None:
        """A file as root is fatal."""
        target = temp_dir / "app.js"
        target.write_text("")

        with pytest.raises(InvalidRootError) as exc_info:
            resolve_files(target, ())

        assert exc_info.value.path == target

    def test_empty_directory(self, temp_dir: Path) -> None:
        """An empty root yields an empty set."""
        assert resolve_files(temp_dir, ()) == []


class TestReadSource:
    """Tests for read_source."""

    def test_reads_text(self, temp_dir: Path) -> None:
        """Should return the file content."""
        (temp_dir / "app.js").write_text("var x = 1;\n")
        assert read_source(temp_dir, "app.js") == "var x = 1;\n"

    def test_replaces_undecodable_bytes(self, temp_dir: Path) -> None:
        """Invalid UTF-8 does not make the file unreadable."""
        (temp_dir / "app.js").write_bytes(b"var x = '\xff';\n")
        assert "var x" in read_source(temp_dir, "app.js")

    def test_missing_file_raises_file_read_error(self, temp_dir: Path) -> None:
        """Should wrap OSError in FileReadError with the relative path."""
        with pytest.raises(FileReadError) as exc_info:
            read_source(temp_dir, "gone.js")

        assert exc_info.value.path == Path("gone.js")


class TestBuildConfiguration:
    """Tests for build_configuration."""

    def test_resolves_root_and_patterns(self, temp_dir: Path) -> None:
        """Should produce an absolute root and merged patterns."""
        (temp_dir / ".gitignore").write_text("coverage\n")

        config = build_configuration(temp_dir)

        assert config.root == temp_dir.resolve()
        assert "coverage" in config.ignore_patterns
        assert "node_modules" in config.ignore_patterns
        assert config.max_workers >= 1

    def test_is_immutable(self, temp_dir: Path) -> None:
        """Configuration is frozen after construction."""
        config = build_configuration(temp_dir)

        with pytest.raises(Exception):
            config.max_workers = 2  # type: ignore[misc]

    def test_invalid_root(self, temp_dir: Path) -> None:
        """Should raise InvalidRootError for a missing root."""
        with pytest.raises(InvalidRootError):
            build_configuration(temp_dir / "nope")

    def test_invalid_root_is_value_error(self, temp_dir: Path) -> None:
        """InvalidRootError stays catchable as ValueError."""
        with pytest.raises(ValueError):
            build_configuration(temp_dir / "nope")
