"""Decide which declared classes are runnable test cases.

A class is eligible when all of these hold, checked in order:

1. It resolves to a class (its module imports and defines it).
2. Its constructor is not restricted. Restricted means the class opted out
   with ``__test__ = False``, overrides ``__new__`` (singletons), or needs
   constructor arguments. Restricted classes are never instantiated.
3. It is a concrete ``unittest.TestCase`` with at least one test method, an
   instance can be built with no arguments, and ``unittest`` can build one
   instance per test method the way the suite will.

Anything that fails a check is simply not a test; nothing here raises.
"""

import inspect
import logging
import unittest
from pathlib import Path
from typing import Iterable

from suiterunner.exceptions import SymbolResolutionError
from suiterunner.resolver import SymbolResolver

logger = logging.getLogger(__name__)

_loader = unittest.TestLoader()


def not_a_test(cls: type) -> type:
    """Class decorator marking a TestCase subclass as never runnable on its own."""
    cls.__test__ = False
    return cls


def has_restricted_constructor(cls: type) -> bool:
    """Return True if cls must not be instantiated by the runner."""
    if vars(cls).get("__test__", True) is False:
        return True
    if cls.__new__ is not object.__new__:
        return True

    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return True

    try:
        signature.bind()
    except TypeError:
        return True
    return False


def collect_test_methods(cls: type) -> list[str]:
    """Names of the test methods unittest would collect from cls."""
    return list(_loader.getTestCaseNames(cls))


def implements_test_case(cls: type) -> bool:
    """Return True if cls satisfies the test case contract."""
    if not issubclass(cls, unittest.TestCase):
        return False
    if inspect.isabstract(cls):
        return False
    return bool(collect_test_methods(cls))


def is_eligible(symbol: object) -> bool:
    """Return True if symbol is a class that can run as a test case."""
    if not inspect.isclass(symbol):
        return False
    if has_restricted_constructor(symbol):
        return False
    if not implements_test_case(symbol):
        return False

    try:
        instance = symbol()
        # The suite builds one instance per test method, by name
        tests = list(_loader.loadTestsFromTestCase(symbol))
    except Exception as e:
        logger.debug("Could not instantiate %s: %s", symbol.__qualname__, e)
        return False
    return isinstance(instance, unittest.TestCase) and bool(tests)


class CandidateFilter:
    """Selects the files of a bucket that hold at least one eligible class."""

    def __init__(self, resolver: SymbolResolver):
        self.resolver = resolver

    def eligible_types(self, file_path: Path | str) -> list[type]:
        """Return the eligible classes declared in a file, in declaration order."""
        eligible = []
        for name in self.resolver.reverse_lookup(file_path):
            try:
                symbol = self.resolver.resolve(name)
            except SymbolResolutionError as e:
                logger.debug("Skipping %s: %s", name, e)
                continue

            if is_eligible(symbol):
                eligible.append(symbol)
            else:
                logger.debug("%s is not a runnable test case", name)
        return eligible

    def select(self, files: Iterable[Path]) -> dict[Path, list[type]]:
        """Map each file with eligible classes to those classes.

        Files keep their input order and appear at most once.
        """
        selected: dict[Path, list[type]] = {}
        for file_path in files:
            file_path = Path(file_path)
            if file_path in selected:
                continue
            eligible = self.eligible_types(file_path)
            if eligible:
                selected[file_path] = eligible
        return selected

