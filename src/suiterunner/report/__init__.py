"""Reporters that render suite results."""

from suiterunner.report.base import Reporter, is_console_context, select_reporter
from suiterunner.report.html import HtmlReporter
from suiterunner.report.text import TextReporter

__all__ = ["Reporter", "TextReporter", "HtmlReporter", "is_console_context", "select_reporter"]
