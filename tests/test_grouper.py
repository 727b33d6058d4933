"""Tests for suite grouping."""

from pathlib import Path

from suiterunner.core.grouper import group_files, suite_key
from suiterunner.core.locator import SourceRoot


class TestSuiteKey:
    """Tests for suite_key."""

    def test_nested_directory(self):
        """Test that the logical name replaces the physical root."""
        root = SourceRoot("lib", Path("/srv/project/lib"))
        key = suite_key(root, Path("/srv/project/lib/test/foo/a_test.py"))
        assert key == "lib-test-foo"

    def test_file_in_root(self):
        """Test that a file directly in the root is keyed by the name alone."""
        root = SourceRoot("app", Path("/srv/app"))
        assert suite_key(root, Path("/srv/app/a_test.py")) == "app"

    def test_same_directory_same_key(self):
        """Test that keys depend only on the directory."""
        root = SourceRoot("lib", Path("/srv/lib"))
        first = suite_key(root, Path("/srv/lib/test/x/one.py"))
        second = suite_key(root, Path("/srv/lib/test/x/two.py"))
        assert first == second
        assert suite_key(root, Path("/srv/lib/test/x/one.py")) == first

    def test_custom_separator(self):
        """Test joining with another character."""
        root = SourceRoot("lib", Path("/srv/lib"))
        assert suite_key(root, Path("/srv/lib/test/a/b/c.py"), separator=".") == "lib.test.a.b"

    def test_root_path_repeated_inside(self):
        """Test that only the leading root is replaced."""
        root = SourceRoot("lib", Path("/srv/lib"))
        key = suite_key(root, Path("/srv/lib/test/srv/lib/t.py"))
        assert key == "lib-test-srv-lib"


class TestGroupFiles:
    """Tests for group_files."""

    def test_buckets_keep_enumeration_order(self, lib_root, write_module):
        """Test bucket creation order and file order inside buckets."""
        test_dir = lib_root.test_path
        files = [
            write_module(test_dir, "b/one.py"),
            write_module(test_dir, "a/two.py"),
            write_module(test_dir, "b/three.py"),
            write_module(test_dir, "four.py"),
        ]

        buckets = group_files(lib_root, files)

        assert list(buckets) == ["lib-test-b", "lib-test-a", "lib-test"]
        assert buckets["lib-test-b"] == [files[0], files[2]]
        assert buckets["lib-test-a"] == [files[1]]
        assert buckets["lib-test"] == [files[3]]

    def test_skips_entries_that_are_not_files(self, lib_root, write_module):
        """Test that directories and missing paths are silently dropped."""
        test_dir = lib_root.test_path
        real = write_module(test_dir, "foo/real.py")
        directory = test_dir / "foo" / "package.py"
        directory.mkdir()
        missing = test_dir / "foo" / "gone.py"

        buckets = group_files(lib_root, [directory, real, missing])
        assert buckets == {"lib-test-foo": [real]}

    def test_skips_unreadable_files(self, lib_root, write_module, monkeypatch):
        """Test that unreadable files are silently dropped."""
        import suiterunner.core.grouper as grouper

        test_dir = lib_root.test_path
        readable = write_module(test_dir, "ok.py")
        locked = write_module(test_dir, "locked.py")
        monkeypatch.setattr(grouper.os, "access", lambda path, mode: Path(path) != locked)

        buckets = group_files(lib_root, [readable, locked])
        assert buckets == {"lib-test": [readable]}

    def test_no_files(self, lib_root):
        """Test grouping nothing."""
        assert group_files(lib_root, []) == {}
