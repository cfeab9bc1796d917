"""Compose command."""

from pathlib import Path

import click

from dockle_engine import DockleError
from dockle_engine.compose import advise_compose_file


@click.command()
@click.argument("compose_file", type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
def compose(compose_file: Path):
    """Suggest resource limits and healthchecks for compose services."""
    try:
        suggestions = advise_compose_file(compose_file)
    except DockleError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    if not suggestions:
        click.echo("✅ No compose suggestions.")
        return
    for suggestion in suggestions:
        click.echo(suggestion)
