"""HTML reporter using Jinja2 templates."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

from jinja2 import Environment, FileSystemLoader, select_autoescape

from suiterunner.core.models import SuiteResult
from suiterunner.report.base import Reporter

logger = logging.getLogger(__name__)


class HtmlReporter(Reporter):
    """Renders each suite as a standalone HTML page."""

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        stream: Optional[TextIO] = None,
        title: str = "Test Results",
    ):
        """Initialize the HTML reporter.

        Args:
            output_dir: Directory receiving one ``<suite key>.html`` per suite;
                when unset pages are written to stream
            stream: Stream for pages when no output_dir is given (default: stdout)
            title: Report heading
        """
        self.output_dir = Path(output_dir) if output_dir else None
        self.stream = stream
        self.title = title
        self.written: list[Path] = []

        # Set up Jinja2 environment
        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

        # Add custom filters
        self.env.filters["duration_format"] = self._format_duration
        self.env.filters["datetime_format"] = self._format_datetime
        self.env.filters["percentage"] = self._format_percentage

    def render(self, result: SuiteResult) -> None:
        html_content = self.render_page(result)

        if self.output_dir is None:
            stream = self.stream or sys.stdout
            stream.write(html_content)
            stream.flush()
            return

        self.output_dir.mkdir(parents=True, exist_ok=True)
        report_path = self.output_dir / f"{result.key}.html"
        report_path.write_text(html_content, encoding="utf-8")
        self.written.append(report_path)
        logger.debug("Wrote %s", report_path)

    def render_page(self, result: SuiteResult) -> str:
        """Render the HTML page for one suite."""
        template = self.env.get_template("suite.html")
        return template.render(**self._prepare_context(result))

    def _prepare_context(self, result: SuiteResult) -> dict[str, Any]:
        """Prepare context for template rendering."""
        pass_rate = (result.passed / result.total * 100) if result.total > 0 else 0

        return {
            "title": self.title,
            "suite_title": result.title,
            "generated_at": datetime.now(),
            "started_at": result.started_at,
            # Statistics
            "total": result.total,
            "passed": result.passed,
            "failed": result.failed,
            "errors": result.errors,
            "skipped": result.skipped,
            "pass_rate": pass_rate,
            "success": result.success,
            "duration_ms": result.duration_ms,
            # Test results
            "files": result.files,
            "outcomes": [o.to_dict() for o in result.outcomes],
            "problems": [o.to_dict() for o in result.problems],
        }

    @staticmethod
    def _format_duration(ms: int) -> str:
        """Format duration in milliseconds to human-readable string."""
        if ms < 1000:
            return f"{ms}ms"
        elif ms < 60000:
            return f"{ms / 1000:.2f}s"
        else:
            minutes = ms // 60000
            seconds = (ms % 60000) / 1000
            return f"{minutes}m {seconds:.1f}s"

    @staticmethod
    def _format_datetime(dt: Any) -> str:
        """Format datetime object or string."""
        if isinstance(dt, str):
            try:
                dt = datetime.fromisoformat(dt)
            except ValueError:
                return dt

        if isinstance(dt, datetime):
            return dt.strftime("%Y-%m-%d %H:%M:%S")

        return str(dt)

    @staticmethod
    def _format_percentage(value: float) -> str:
        """Format a number as percentage."""
        return f"{value:.1f}%"
