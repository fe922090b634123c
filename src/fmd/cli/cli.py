"""
fmd CLI Application.

Main entry point for the ``fmd`` command: find Markdown files under one or
more directories whose metadata matches a set of filters, and print their
paths.

Filters of the same kind are ORed; different kinds are ANDed:

    fmd -t work -t urgent -T meeting notes/
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.text import Text

from .. import __version__
from ..core.query import FilterSpec, PredicateKind, build_query
from ..core.runner import ParallelRunner
from ..core.walker import FileWalker
from ..exceptions import ConfigurationError, FilterValidationError, FmdError
from ..utils.config import ConfigManager, FmdSettings
from ..utils.logging_config import setup_logging
from .output import emit_paths

# Diagnostics only; stdout carries matched paths
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_CONFIG = 1

app = typer.Typer(
    name="fmd",
    help="Find Markdown files by metadata: tags, title, author, fields and dates.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def print_error(label: str, error: Exception) -> None:
    """Print one error line to stderr without interpreting markup in the message."""
    err_console.print(Text.assemble((f"{label}: ", "bold red"), str(error)), soft_wrap=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"fmd {__version__}")
        raise typer.Exit()


def collect_filters(
    names: List[str],
    tags: List[str],
    titles: List[str],
    authors: List[str],
    fields: List[str],
    date_after: Optional[str],
    date_before: Optional[str],
    ignore_case: bool
) -> List[FilterSpec]:
    """Turn command-line options into filter specifications."""
    specs: List[FilterSpec] = []
    specs.extend(FilterSpec(PredicateKind.NAME, name, ignore_case) for name in names)
    specs.extend(FilterSpec(PredicateKind.TAG, tag) for tag in tags)
    specs.extend(FilterSpec(PredicateKind.TITLE, title) for title in titles)
    specs.extend(FilterSpec(PredicateKind.AUTHOR, author) for author in authors)
    specs.extend(FilterSpec(PredicateKind.FIELD, field) for field in fields)
    if date_after is not None:
        specs.append(FilterSpec(PredicateKind.DATE_AFTER, date_after))
    if date_before is not None:
        specs.append(FilterSpec(PredicateKind.DATE_BEFORE, date_before))
    return specs


def load_settings(config_path: Optional[Path]) -> FmdSettings:
    """Resolve configuration, honouring an explicit --config-path."""
    return ConfigManager(config_file=config_path).settings()


@app.command()
def find(
    dirs: Optional[List[Path]] = typer.Argument(
        None, help="Directories to search (default: current directory)"
    ),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", "-t", help="Match files carrying this tag (repeatable, ORed)"
    ),
    titles: Optional[List[str]] = typer.Option(
        None, "--title", "-T", help="Case-insensitive regex matched against the title (repeatable)"
    ),
    authors: Optional[List[str]] = typer.Option(
        None, "--author", "-a", help="Case-insensitive substring of the author field (repeatable)"
    ),
    names: Optional[List[str]] = typer.Option(
        None, "--name", "-n", help="Regex matched against the file name (repeatable)"
    ),
    fields: Optional[List[str]] = typer.Option(
        None, "--field", "-f", help="KEY:PATTERN substring match on any field (repeatable)"
    ),
    ignore_case: bool = typer.Option(
        False, "--ignore-case", "-i", help="Case-insensitive file name matching"
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", "-d", min=1, help="Maximum directory depth (1 = top level only)"
    ),
    glob: Optional[str] = typer.Option(
        None, "--glob", help="Glob for candidate files (default: **/*.md)"
    ),
    head: Optional[int] = typer.Option(
        None, "--head", min=1, help="Lines to scan when a file has no frontmatter (default: 10)"
    ),
    full_text: bool = typer.Option(
        False, "--full-text", help="Scan entire files for tags and headings"
    ),
    date_after: Optional[str] = typer.Option(
        None, "--date-after", help="Match files dated on or after YYYY-MM-DD"
    ),
    date_before: Optional[str] = typer.Option(
        None, "--date-before", help="Match files dated on or before YYYY-MM-DD"
    ),
    null: bool = typer.Option(
        False, "--null", "-0", help="Separate output paths with NUL instead of newline"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-j", min=1, help="Worker threads (default: CPU count)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show per-file warnings and debug logging"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config-path", "-c", help="Path to an fmd.config.json file"
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Print the paths of Markdown files whose metadata matches every filter kind."""
    setup_logging(verbose, console=err_console)

    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        print_error("Configuration Error", e)
        raise typer.Exit(EXIT_CONFIG)

    setup_logging(
        verbose,
        log_format=settings.log_format,
        log_file=settings.log_file,
        level=settings.log_level,
        console=err_console,
    )

    specs = collect_filters(
        names or [], tags or [], titles or [], authors or [], fields or [],
        date_after, date_before, ignore_case or settings.ignore_case
    )

    try:
        query = build_query(
            specs,
            head_limit=head if head is not None else settings.head_lines,
            full_text=full_text or settings.full_text,
        )
        walker = FileWalker(
            glob=glob or settings.glob,
            max_depth=depth if depth is not None else settings.max_depth,
            excluded_dirs=settings.excluded_dirs,
        )
        runner = ParallelRunner(max_workers=workers or settings.workers)
    except (FilterValidationError, ValueError) as e:
        print_error("Error", e)
        raise typer.Exit(EXIT_USAGE)

    candidates = walker.walk(dirs or [Path(".")])
    result = runner.run(query, candidates)

    if verbose:
        for warning in sorted(result.warnings, key=lambda w: str(w.path)):
            logger.warning(str(warning))

    matches = sorted(result.matches, key=str)
    emit_paths(matches, null_separator=null or settings.null_separator)
    logger.debug(
        f"{len(matches)} of {result.candidates_evaluated} file(s) matched "
        f"in {result.execution_time:.3f}s"
    )


def handle_cli_error(error: Exception) -> None:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
    """
    if isinstance(error, ConfigurationError):
        print_error("Configuration Error", error)
    elif isinstance(error, FmdError):
        print_error("Error", error)
    elif isinstance(error, PermissionError):
        print_error("Permission Denied", error)
    else:
        print_error("Error", error)
    logger.debug("Error details", exc_info=error)


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)


if __name__ == "__main__":
    cli_main()
