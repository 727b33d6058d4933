"""Tests for source file enumeration."""

from suiterunner.core.enumerator import enumerate_source_files


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


class TestEnumerateSourceFiles:
    """Tests for enumerate_source_files."""

    def test_files_before_subdirectories(self, tmp_path):
        """Test the deterministic depth-first order."""
        _touch(tmp_path / "b" / "two.py")
        _touch(tmp_path / "a" / "deep" / "three.py")
        _touch(tmp_path / "a" / "one.py")
        _touch(tmp_path / "zero.py")

        files = enumerate_source_files(tmp_path)
        relative = [f.relative_to(tmp_path).as_posix() for f in files]

        assert relative == ["zero.py", "a/one.py", "a/deep/three.py", "b/two.py"]

    def test_pattern_filters_names(self, tmp_path):
        """Test that only matching file names are listed."""
        _touch(tmp_path / "module.py")
        _touch(tmp_path / "notes.txt")
        _touch(tmp_path / "data.json")

        files = enumerate_source_files(tmp_path)
        assert [f.name for f in files] == ["module.py"]

        files = enumerate_source_files(tmp_path, pattern="*.txt")
        assert [f.name for f in files] == ["notes.txt"]

    def test_skips_excluded_and_hidden_directories(self, tmp_path):
        """Test that caches and hidden directories are not entered."""
        _touch(tmp_path / "__pycache__" / "cached.py")
        _touch(tmp_path / ".hidden" / "secret.py")
        _touch(tmp_path / "vendor" / "lib.py")
        _touch(tmp_path / "kept.py")

        files = enumerate_source_files(tmp_path, exclude_dirs=["__pycache__", "vendor"])
        assert [f.name for f in files] == ["kept.py"]

    def test_returns_absolute_paths(self, tmp_path, monkeypatch):
        """Test that relative roots still produce absolute paths."""
        _touch(tmp_path / "pkg" / "mod.py")
        monkeypatch.chdir(tmp_path)

        files = enumerate_source_files("pkg")
        assert files[0].is_absolute()

    def test_empty_directory(self, tmp_path):
        """Test that an empty tree yields nothing."""
        assert enumerate_source_files(tmp_path) == []
