"""smart-find command line entry point."""

import logging
import os
import sys
from typing import Optional, Tuple

import click

from smartfind import __version__
from smartfind.config import ConfigurationError, load_config
from smartfind.models.search_query import SearchMode
from smartfind.models.search_results import Resolution, SearchResults
from smartfind.presenter import Presenter
from smartfind.search.dispatcher import Dispatcher, InvalidInputError


EXAMPLES = """\b
Examples:
  smart-find "*.ts"                    # instant glob
  smart-find containing TODO           # instant content search
  smart-find "dropbox zoom workshop"   # AI parallel search
"""


def _report(results: SearchResults) -> None:
    """Write progress notes and degradation warnings to stderr."""
    for error in results.errors:
        click.echo(f"Warning: {error}", err=True)

    if results.resolution in (Resolution.INSTANT, Resolution.RULE) and results.command:
        click.echo(f"Instant: {results.command.to_shell()}", err=True)
        return

    if results.command:
        click.echo(f"Programmatic: {results.command.to_shell()}", err=True)

    if results.resolution == Resolution.FULL:
        click.echo(f"   Natural found: {results.semantic_count} files", err=True)
        click.echo(f"   Programmatic found: {results.programmatic_count} files", err=True)
        click.echo(f"   Final ranked: {results.get_match_count()} files", err=True)


@click.command(epilog=EXAMPLES)
@click.version_option(version=__version__, prog_name="smart-find")
@click.argument("query", nargs=-1)
@click.option("--list", "-l", "list_only", is_flag=True, help="Print results without the interactive picker.")
@click.option("--fast", "-f", is_flag=True, help="Skip semantic search and AI ranking (faster).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Configuration file (default: discovered .smartfind.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log pipeline details to stderr.")
def cli(query: Tuple[str, ...], list_only: bool, fast: bool, config_path: Optional[str], verbose: bool) -> None:
    """Find files with a natural language QUERY."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    text = " ".join(query).strip()
    if not text:
        raise click.UsageError("A search query is required.")

    try:
        parsed = load_config(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    dispatcher = Dispatcher(parsed.config)
    mode = SearchMode.FAST if fast else SearchMode.FULL

    try:
        results = dispatcher.run(text, mode)
    except InvalidInputError as e:
        raise click.UsageError(str(e))

    _report(results)

    if not results.has_results():
        click.echo("No files found", err=True)
        return

    presenter = Presenter(parsed.config.presentation)
    if list_only or not presenter.can_select():
        # Paths may hold undecodable bytes; write them back as they were read.
        click.echo(os.fsencode(results.results.to_lines()))
        return

    presenter.open(presenter.select(results.results))


if __name__ == "__main__":
    cli()
