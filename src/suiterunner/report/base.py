"""Reporter contract and selection."""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from suiterunner.core.models import SuiteResult

# Set by web servers for CGI requests
WEB_CONTEXT_VARIABLES = ("GATEWAY_INTERFACE", "REQUEST_METHOD")


class Reporter(ABC):
    """Renders the result of one suite."""

    @abstractmethod
    def render(self, result: SuiteResult) -> None:
        """Render a finished suite."""
        pass


def is_console_context(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True unless the process is serving a web request."""
    if environ is None:
        environ = os.environ
    return not any(name in environ for name in WEB_CONTEXT_VARIABLES)


def select_reporter(
    fmt: str = "auto",
    output_dir: Optional[Path] = None,
    title: str = "Test Results",
    environ: Optional[Mapping[str, str]] = None,
) -> Reporter:
    """Build the reporter for a format name.

    ``auto`` picks the console reporter when running from a terminal or script
    and the HTML reporter when running as a web request.
    """
    from suiterunner.report.html import HtmlReporter
    from suiterunner.report.text import TextReporter

    fmt = fmt.lower()
    if fmt == "auto":
        fmt = "text" if is_console_context(environ) else "html"

    if fmt == "text":
        return TextReporter()
    if fmt == "html":
        return HtmlReporter(output_dir=output_dir, title=title)
    raise ValueError(f"Unknown report format: {fmt}")
