"""Group candidate files into suites by directory."""

import logging
import os
from pathlib import Path
from typing import Iterable

from suiterunner.core.locator import SourceRoot

logger = logging.getLogger(__name__)


def suite_key(root: SourceRoot, file_path: Path | str, separator: str = "-") -> str:
    """Name the suite a file belongs to.

    The file's directory is taken relative to the root, the root's logical
    name is put in front, and the segments are joined with separator:
    ``<lib>/test/foo/a_test.py`` becomes ``lib-test-foo``.
    """
    directory = Path(file_path).absolute().parent
    relative = directory.relative_to(root.path)
    return separator.join([root.name, *relative.parts])


def group_files(
    root: SourceRoot, files: Iterable[Path], separator: str = "-"
) -> dict[str, list[Path]]:
    """Bucket files by suite key.

    Buckets appear in the order their first file was seen and keep the files
    in the order given. Anything that is not a readable regular file is left
    out.
    """
    buckets: dict[str, list[Path]] = {}
    for file_path in files:
        file_path = Path(file_path)
        if not (file_path.is_file() and os.access(file_path, os.R_OK)):
            logger.debug("Skipping unreadable entry %s", file_path)
            continue

        key = suite_key(root, file_path, separator)
        buckets.setdefault(key, []).append(file_path)

    return buckets
