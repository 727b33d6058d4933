"""Source root validation."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from suiterunner.exceptions import MissingDirectoryError, UnreadableDirectoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceRoot:
    """A directory tree searched for tests, paired with its logical name.

    ``path`` is both the symbol-map root and the base that suite keys are
    computed from; test files are only enumerated below ``test_path``.
    """

    name: str
    path: Path
    test_directory: str = "test"

    def __post_init__(self):
        # Enumerated files are absolute, so keys need an absolute base
        object.__setattr__(self, "path", Path(self.path).absolute())

    @property
    def test_path(self) -> Path:
        """Directory holding this root's tests."""
        if self.test_directory in ("", "."):
            return self.path
        return self.path / self.test_directory

    @property
    def display_test_path(self) -> str:
        """Test directory written relative to the logical name, e.g. ``lib/test``."""
        if self.test_directory in ("", "."):
            return self.name
        return f"{self.name}/{self.test_directory}"


@dataclass(frozen=True)
class DirectoryStatus:
    """Result of probing a directory."""

    exists: bool
    readable: bool

    @property
    def ok(self) -> bool:
        return self.exists and self.readable


def validate_directory(path: Path | str) -> DirectoryStatus:
    """Probe whether path is an existing directory we can list and enter."""
    path = Path(path)
    exists = path.is_dir()
    readable = exists and os.access(path, os.R_OK | os.X_OK)
    return DirectoryStatus(exists=exists, readable=readable)


def validate_root(root: SourceRoot) -> None:
    """Check that a source root and its test directory are usable.

    Raises:
        MissingDirectoryError: If the root or its test directory does not exist
        UnreadableDirectoryError: If either directory cannot be read
    """
    status = validate_directory(root.path)
    if not status.exists:
        raise MissingDirectoryError(
            f"The {root.name} path '{root.path}' does not exist.",
            remedy=f"Check the {root.name}_path setting in your configuration.",
        )
    if not status.readable:
        raise UnreadableDirectoryError(f"The {root.name} path '{root.path}' is not readable.")

    if root.test_path == root.path:
        return

    status = validate_directory(root.test_path)
    if not status.exists:
        raise MissingDirectoryError(
            f"The {root.display_test_path} directory is missing from the {root.name}/ directory.",
            remedy=f"You should create the directory {root.display_test_path}.",
        )
    if not status.readable:
        raise UnreadableDirectoryError(
            f"The {root.name} test path '{root.test_path}' is not readable."
        )

    logger.debug("Validated %s root at %s", root.name, root.test_path)
