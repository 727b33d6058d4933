"""Command-line interface for SuiteRunner."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from suiterunner import __version__
from suiterunner.config import SuiteRunnerConfig, create_example_config
from suiterunner.exceptions import SetupError


console = Console()


def print_banner() -> None:
    """Print the SuiteRunner banner."""
    console.print(
        Panel.fit(
            "[bold blue]SuiteRunner[/bold blue] - Directory-driven test suites",
            subtitle=f"v{__version__}",
        )
    )


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_config(config_path: Optional[str]) -> tuple[SuiteRunnerConfig, Path]:
    """Load the configuration and return it with the directory it is relative to.

    Exits with status 1 when no configuration can be loaded.
    """
    try:
        if config_path:
            config = SuiteRunnerConfig.from_file(config_path)
            base_dir = Path(config_path).resolve().parent
        else:
            found = SuiteRunnerConfig.find()
            if found is None:
                raise FileNotFoundError(
                    "No configuration file found. Create suiterunner.json or run 'suiterunner init'"
                )
            config = SuiteRunnerConfig.from_file(found)
            base_dir = found.parent
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print("Run [bold]suiterunner init[/bold] to create a configuration file")
        sys.exit(1)
    except ValueError as e:
        # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        sys.exit(1)

    return config, base_dir


def report_setup_error(error: SetupError) -> None:
    """Print a fatal setup problem and its remedy."""
    console.print(f"[red]Error:[/red] {escape(error.message)}")
    if error.remedy:
        console.print(escape(error.remedy))


@click.group()
@click.version_option(version=__version__, prog_name="suiterunner")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False),
    help="Path to configuration file (default: suiterunner.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, config: Optional[str], verbose: bool) -> None:
    """SuiteRunner - discover and run test suites grouped by directory.

    Searches the lib test tree, and the app test tree when one is configured,
    and runs one suite per directory.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config
    configure_logging(verbose)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="suiterunner.json",
    help="Output path for configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@click.pass_context
def init(ctx: click.Context, output: str, force: bool) -> None:
    """Initialize a new SuiteRunner configuration file."""
    print_banner()

    output_path = Path(output)
    if output_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {output_path}"
        )
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        create_example_config(output_path)
        console.print(f"[green]Created configuration file:[/green] {output_path}")
        console.print("\nNext steps:")
        console.print("  1. Point paths.lib_path (and optionally paths.app_path) at your sources")
        console.print("  2. Put test modules under lib/test and app/test")
        console.print("  3. Run [bold]suiterunner run[/bold] to execute tests")
    except OSError as e:
        console.print(f"[red]Error creating configuration:[/red] {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--reporter",
    "-r",
    type=click.Choice(["auto", "text", "html"], case_sensitive=False),
    default=None,
    help="Reporter to use (default: from configuration)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Write HTML reports to this directory instead of stdout",
)
@click.pass_context
def run(ctx: click.Context, reporter: Optional[str], output_dir: Optional[str]) -> None:
    """Discover and run every test suite."""
    from suiterunner.core.runner import SuiteRunner
    from suiterunner.report import select_reporter

    config, base_dir = load_config(ctx.obj.get("config_path"))

    fmt = reporter or config.report.format
    if output_dir:
        report_dir: Optional[Path] = Path(output_dir).resolve()
    else:
        report_dir = config.get_absolute_paths(base_dir).get("report_output_dir")
    chosen = select_reporter(fmt, output_dir=report_dir, title=config.report.title)

    runner = SuiteRunner.from_config(config, base_dir, reporter=chosen)
    try:
        runner.setup()
        runner.run_all()
    except SetupError as e:
        report_setup_error(e)
        sys.exit(1)
    finally:
        runner.close()

    if ctx.obj.get("verbose"):
        total = sum(r.total for r in runner.results)
        console.print(f"[dim]Ran {len(runner.results)} suites, {total} tests[/dim]")

    # Exit with appropriate code
    if not runner.success:
        sys.exit(1)


@main.command(name="list")
@click.pass_context
def list_suites(ctx: click.Context) -> None:
    """Show the suites that would run, without running them."""
    from suiterunner.core.runner import SuiteRunner

    print_banner()
    config, base_dir = load_config(ctx.obj.get("config_path"))
    runner = SuiteRunner.from_config(config, base_dir)

    table = Table(title="Discovered Test Suites")
    table.add_column("Suite", style="cyan")
    table.add_column("Files")
    table.add_column("Test Cases", justify="right")

    try:
        for root in runner.roots:
            for suite in runner.discover(root):
                names = [p.name for p in suite.files]
                cases = sum(len(c) for c in suite.cases.values())
                table.add_row(
                    escape(suite.key),
                    escape(", ".join(names)) if names else "[dim]-[/dim]",
                    str(cases),
                )
    except SetupError as e:
        report_setup_error(e)
        sys.exit(1)
    finally:
        runner.close()

    console.print(table)


if __name__ == "__main__":
    main()
