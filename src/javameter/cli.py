"""Command-line interface for javameter"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .collect import JavaMetricsCollector
from .config import load_config
from .exceptions import JavameterError
from .formatters import ReportMetadata, get_formatter
from .logging_config import setup_logging
from .scanning import JavaFileCollector
from .syntax import JavaLanguageLevel

app = typer.Typer(
    name="javameter",
    help="javameter - structural and comment metrics for Java source code",
    add_completion=False,
    rich_markup_mode="rich",
)

# Status messages go to stderr so reports on stdout can be piped.
console = Console(stderr=True)


@app.command()
def collect(
    paths: List[Path] = typer.Argument(
        ...,
        help="Java source files or directories to collect metrics from",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Report format: text (default), json, xml",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to this file instead of stdout",
        dir_okay=False,
    ),
    language_level: Optional[int] = typer.Option(
        None,
        "--language-level",
        "-l",
        help="Java release whose syntax is accepted (8-21, default 21)",
    ),
    preview: Optional[bool] = typer.Option(
        None,
        "--preview/--no-preview",
        help="Accept the preview features of the language level",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
):
    """
    Collect metrics from Java source files and print a report.

    [bold cyan]Examples:[/bold cyan]

      javameter collect src/main/java

      javameter collect src --language-level 11 --format xml --output metrics.xml

      javameter collect Point.java module-info.java --format json | jq .summary
    """
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_config(
            config_file=config,
            language_level=language_level,
            enable_preview=preview,
            report_format=fmt,
            verbose=verbose,
            quiet=quiet,
        )
        logger.debug(f"Loaded settings: {settings}")

        collector = JavaMetricsCollector(
            JavaLanguageLevel.for_number(settings.language_level), settings.enable_preview
        )
        files = JavaFileCollector(collector, settings)
        num_files = files.collect_paths(paths)

    except JavameterError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Collection interrupted by user")
        console.print("\n[yellow]Collection interrupted[/yellow]")
        raise typer.Exit(130)

    console.print(f"Collected metrics from {num_files} files")
    if files.failed_files:
        console.print(f"[yellow]Skipped {len(files.failed_files)} files with errors[/yellow]")

    if collector.metrics.is_empty:
        return

    formatter = get_formatter(settings.report_format)
    metadata = ReportMetadata.now(__version__)
    if output is not None:
        output.write_text(formatter.format(collector.metrics, metadata), encoding="utf-8")
        console.print(f"Report written to [blue]{output}[/blue]")
    else:
        formatter.render(collector.metrics, metadata)


@app.command()
def version():
    """Show the javameter version."""
    console.print(f"[bold cyan]javameter[/bold cyan] version [green]{__version__}[/green]")


def main():
    app()


if __name__ == "__main__":
    main()
