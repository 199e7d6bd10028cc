"""
Command-line interface for the std score calculator.

This module provides the main entry point for the stdscore CLI.
"""

import logging

import click
from tqdm import tqdm

from stdscore import __version__
from stdscore.config import LOCATOR_NAMES, MAX_PRECISION, NAME_STRATEGIES, load_name_tables, load_settings
from stdscore.errors import ConfigError
from stdscore.names import get_canonicalizer
from stdscore.session import ScoreSession

RULE = (
    "Rule: the highest raw score in a file whose name is not ignored counts as full marks, "
    "std score = raw score / full marks * 100."
)


def _setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def format_table(store):
    """
    Render the ranked summary as aligned text.

    Columns: Name | Avg Std | <file> Std | <file> Raw | ...
    """
    precision = store.precision
    header = ["Name", "Avg Std"]
    for label in store.file_order:
        header.extend([f"{label} Std", f"{label} Raw"])

    rows = []
    for ranked in store.rankings():
        row = [ranked.identity, f"{ranked.average_std:.{precision}f}"]
        for score in ranked.scores:
            if score is None:
                row.extend(["-", "-"])
            else:
                row.extend([f"{score.standardized:.{precision}f}", f"{score.raw:.{precision}f}"])
        rows.append(row)

    widths = [len(cell) for cell in header]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    lines = ["  ".join(cell.ljust(width) for cell, width in zip(header, widths)).rstrip()]
    lines.append("  ".join("-" * width for width in widths))
    for row in rows:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return "\n".join(lines)


@click.group()
def main():
    """stdscore - standardized scores across HTML rosters."""
    pass


@main.command()
def version():
    """Display the current version."""
    click.echo(f"stdscore v{__version__}")


@main.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--precision', type=click.IntRange(0, MAX_PRECISION), default=None, help='Decimal places to display')
@click.option('--locator', type=click.Choice(LOCATOR_NAMES), default=None, help='How to find the roster table')
@click.option('--names', 'name_strategy', type=click.Choice(NAME_STRATEGIES), default=None,
              help='How to canonicalize names')
@click.option('--tables', 'tables_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='JSON file with patches, aliases and ignored names')
@click.option('--progress', is_flag=True, help='Show a progress bar while loading')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def rank(files, precision, locator, name_strategy, tables_path, progress, verbose):
    """Load roster FILES and print the ranked std score table."""
    _setup_logging(verbose)

    try:
        settings = load_settings(
            precision=precision,
            locator=locator,
            name_strategy=name_strategy,
            tables_path=tables_path,
        )
        session = ScoreSession.from_settings(settings)
    except ConfigError as e:
        raise click.ClickException(str(e))

    accepted = 0
    for path in tqdm(files, desc="Loading", unit="file", disable=not progress):
        outcome = session.load_path(path)
        if outcome.accepted:
            accepted += 1
        else:
            click.echo(session.status, err=True)
        for warning in outcome.warnings:
            click.echo(f"Warning: {warning}", err=True)

    if not accepted:
        click.echo("No files were loaded.", err=True)
        raise SystemExit(1)

    click.echo(RULE)
    click.echo()
    click.echo(format_table(session.store))


@main.command()
@click.argument('name')
@click.option('--names', 'name_strategy', type=click.Choice(NAME_STRATEGIES), default='structural',
              help='How to canonicalize names')
@click.option('--tables', 'tables_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='JSON file with patches, aliases and ignored names')
def explain(name, name_strategy, tables_path):
    """Show how NAME is canonicalized."""
    try:
        tables = load_name_tables(tables_path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    resolution = get_canonicalizer(name_strategy, tables).explain(name)

    click.echo(f"Raw:      {resolution.raw}")
    if resolution.parts is None:
        click.echo("Grammar:  no match")
    else:
        click.echo("Grammar:")
        for role, value in resolution.parts.decorations.items():
            click.echo(f"  {role}: {value}")
        click.echo(f"  core: {resolution.parts.core}")
    if resolution.patched is not None:
        click.echo(f"Patched:  {resolution.patched}")
    if resolution.aliased is not None:
        click.echo(f"Alias:    {resolution.aliased}")
    click.echo(f"Identity: {resolution.identity}")


if __name__ == '__main__':
    main()
