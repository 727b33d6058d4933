"""Shared fixtures for building source trees on disk."""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from suiterunner.core.locator import SourceRoot
from suiterunner.core.models import SuiteResult
from suiterunner.report.base import Reporter
from suiterunner.resolver import SymbolResolver

PASSING_CASE = """
import unittest


class FooTest(unittest.TestCase):
    def setUp(self):
        self.value = 1

    def test_value(self):
        self.assertEqual(self.value, 1)

    def tearDown(self):
        self.value = None
"""

HELPER_MODULE = """
class Helper:
    def help(self):
        return "help"
"""


class RecordingReporter(Reporter):
    """Reporter that keeps every result it is given."""

    def __init__(self):
        self.results: list[SuiteResult] = []

    def render(self, result: SuiteResult) -> None:
        self.results.append(result)

    @property
    def keys(self) -> list[str]:
        return [r.key for r in self.results]


@pytest.fixture
def write_module() -> Callable[[Path, str, str], Path]:
    """Return a helper writing dedented Python source below a directory."""

    def _write(base: Path, relative: str, source: str = "") -> Path:
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def lib_root(tmp_path) -> SourceRoot:
    """A lib source root with an empty test directory."""
    path = tmp_path / "lib"
    (path / "test").mkdir(parents=True)
    return SourceRoot("lib", path)


@pytest.fixture
def app_root(tmp_path) -> SourceRoot:
    """An app source root with an empty test directory."""
    path = tmp_path / "app"
    (path / "test").mkdir(parents=True)
    return SourceRoot("app", path)


@pytest.fixture
def resolver():
    """A resolver that is always detached after the test."""
    resolver = SymbolResolver()
    yield resolver
    resolver.unregister()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
