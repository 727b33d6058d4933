"""Core discovery and execution functionality."""

from suiterunner.core.locator import SourceRoot, validate_root

__all__ = ["SourceRoot", "validate_root"]
