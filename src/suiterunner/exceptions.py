"""Exceptions raised by SuiteRunner."""

from typing import Optional


class SuiteRunnerError(Exception):
    """Base class for all SuiteRunner errors."""

    pass


class SetupError(SuiteRunnerError):
    """A fatal problem found before any suite runs.

    Attributes:
        remedy: Optional hint telling the user how to fix the problem
    """

    def __init__(self, message: str, remedy: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.remedy = remedy


class MissingDirectoryError(SetupError):
    """Raised when a source root or its test directory does not exist."""

    pass


class UnreadableDirectoryError(SetupError):
    """Raised when a source root or its test directory cannot be read."""

    pass


class ResolverRegistrationError(SetupError):
    """Raised when the symbol resolver cannot be attached to the import system."""

    pass


class SymbolResolutionError(SuiteRunnerError):
    """Raised when a declared symbol cannot be imported or found."""

    pass
