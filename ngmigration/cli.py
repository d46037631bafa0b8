"""CLI interface for ngmigration.

Scans an AngularJS application and prints a migration recommendation.
"""

import os
import sys
from pathlib import Path

import click

from ngmigration import __version__
from ngmigration.analyzers.ignore import DEFAULT_IGNORE_FILENAME
from ngmigration.errors import InvalidRootError
from ngmigration.logging import set_verbosity
from ngmigration.models.migration import ScanResult

CLASSIFICATION_COLORS = {
    "already-modern": "green",
    "rewrite-recommended": "yellow",
    "incrementally-upgradable": "green",
    "needs-preparation": "red",
}


@click.group()
@click.version_option(version=__version__, prog_name="ngmigration")
def cli() -> None:
    """ngmigration - AngularJS to Angular migration assistant."""
    pass


def _prompt_directory() -> str:
    """Ask for a directory until the answer is one (default: cwd)."""
    while True:
        directory = click.prompt(
            "Enter the directory you would like me to scan",
            default=os.getcwd(),
        )
        if Path(directory).expanduser().is_dir():
            return directory
        click.secho("Not a directory.", fg="red", err=True)


def _print_result(result: ScanResult) -> None:
    recommendation = result.recommendation
    state = result.state

    click.secho("\nRecommendation", bold=True, fg="blue")
    click.secho(
        recommendation.classification,
        bold=True,
        fg=CLASSIFICATION_COLORS[recommendation.classification],
    )
    click.echo(recommendation.narrative)
    if recommendation.upgrade_hint:
        click.echo(recommendation.upgrade_hint)

    click.echo(
        f"\nFiles: {state.total_file_count} resolved, {state.relevant_file_count} inspected, "
        f"{state.lines_of_code} lines of code (rewrite threshold {state.rewrite_threshold:.0f})"
    )

    if recommendation.preparation_report:
        click.secho("\nPreparation Report", bold=True, fg="blue")
        click.echo(recommendation.preparation_report)

    for skipped in result.skipped_files:
        click.secho(f"Skipped {skipped.path}: {skipped.reason}", fg="yellow", err=True)


@cli.command()
@click.argument("directory", required=False, type=click.Path(file_okay=False))
@click.option(
    "--ignore-file",
    default=DEFAULT_IGNORE_FILENAME,
    show_default=True,
    help="Ignore file at the application root",
)
@click.option(
    "--exclude",
    multiple=True,
    help="Additional ignore pattern. Can specify multiple.",
)
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Scanner threads")
@click.option("--json", "as_json", is_flag=True, help="Output the full scan result as JSON")
@click.option("--no-progress", is_flag=True, help="Hide the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def scan(
    directory: str | None,
    ignore_file: str,
    exclude: tuple[str, ...],
    workers: int | None,
    as_json: bool,
    no_progress: bool,
    verbose: bool,
) -> None:
    """Scan an AngularJS application and recommend a migration path.

    DIRECTORY: Application root. Prompts for it when omitted.
    """
    from ngmigration.analyzers.pipeline import scan_repository

    set_verbosity(verbose)

    if directory is None:
        click.secho("Welcome to the ngMigration Assistant!", bold=True, fg="blue")
        click.echo(
            "I will scan your AngularJS application and recommend a migration path to Angular."
        )
        directory = _prompt_directory()

    try:
        result = scan_repository(
            directory,
            ignore_filename=ignore_file,
            extra_ignores=list(exclude),
            max_workers=workers,
            show_progress=not no_progress,
        )
    except InvalidRootError as e:
        click.secho(str(e), fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(result.model_dump_json(indent=2))
    else:
        _print_result(result)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
