"""
SuiteRunner - directory-driven test suite discovery and execution.

This package provides tools to:
- Discover test modules under a library tree and an optional application tree
- Group them into suites named after their directory
- Keep only the classes that are runnable test cases
- Run each suite and report the results on a console or as HTML
"""

__version__ = "0.1.0"
__author__ = "SuiteRunner Team"
