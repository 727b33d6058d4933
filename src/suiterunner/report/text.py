"""Console reporter built on rich."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from suiterunner.core.models import SuiteResult, TestOutcome, TestStatus
from suiterunner.report.base import Reporter

STATUS_STYLES = {
    TestStatus.PASSED: ("green", "✓"),
    TestStatus.EXPECTED_FAILURE: ("green", "x"),
    TestStatus.FAILED: ("red", "✗"),
    TestStatus.ERROR: ("red", "E"),
    TestStatus.UNEXPECTED_SUCCESS: ("red", "u"),
    TestStatus.SKIPPED: ("yellow", "s"),
}


class TextReporter(Reporter):
    """Prints each suite as a table followed by its failures."""

    def __init__(self, console: Optional[Console] = None, show_passed: bool = False):
        """Initialize the reporter.

        Args:
            console: Console to print to (default: stdout)
            show_passed: List passing tests as well as problems
        """
        self.console = console or Console()
        self.show_passed = show_passed

    def render(self, result: SuiteResult) -> None:
        self.console.rule(f"[bold]{escape(result.title)}[/bold]")

        if not result.files:
            self.console.print("[dim]No test cases found[/dim]")

        listed = [o for o in result.outcomes if self.show_passed or o.status != TestStatus.PASSED]
        if listed:
            table = Table(show_header=False, box=None)
            table.add_column("Status")
            table.add_column("Test")
            table.add_column("Duration", justify="right", style="dim")
            for outcome in listed:
                style, mark = STATUS_STYLES[outcome.status]
                table.add_row(
                    f"[{style}]{mark}[/{style}]",
                    escape(self._name(outcome)),
                    f"{outcome.duration_ms}ms",
                )
            self.console.print(table)

        for outcome in result.problems:
            self.console.print(
                Panel(
                    Text(outcome.traceback or outcome.message),
                    title=f"[red]{escape(outcome.test_id)}[/red]",
                    border_style="red",
                    expand=False,
                )
            )

        summary = (
            f"Test cases run: {result.total}, Passes: {result.passed}, "
            f"Failures: {result.failed}, Exceptions: {result.errors}, Skipped: {result.skipped}"
        )
        if result.success:
            self.console.print(f"[green]OK[/green]\n{summary}")
        else:
            self.console.print(f"[red]FAILURES!!![/red]\n{summary}")

    @staticmethod
    def _name(outcome: TestOutcome) -> str:
        if outcome.class_name:
            return f"{outcome.class_name}.{outcome.test_name}"
        return outcome.test_name
