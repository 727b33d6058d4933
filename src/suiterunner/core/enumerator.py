"""Recursive source file enumeration."""

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable

DEFAULT_EXCLUDE_DIRS = ("__pycache__",)


def enumerate_source_files(
    root: Path | str,
    pattern: str = "*.py",
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> list[Path]:
    """List the files under root whose names match pattern.

    The order is deterministic: names are sorted, and a directory's own files
    come before the files of its subdirectories. Hidden directories and
    directories named in exclude_dirs are not entered.

    Args:
        root: Directory to search
        pattern: fnmatch-style pattern for file names
        exclude_dirs: Directory names to skip

    Returns:
        Absolute paths of the matching files
    """
    root = Path(root).absolute()
    excluded = set(exclude_dirs)
    files: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if d not in excluded and not d.startswith(".")
        )
        for name in sorted(filenames):
            if fnmatch(name, pattern):
                files.append(Path(dirpath) / name)

    return files
