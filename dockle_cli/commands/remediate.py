"""Remediate command."""

import sys
from pathlib import Path

import click

from dockle_engine import DockleError, remediate_project

from ..config import get_settings


@click.command()
@click.argument("project_dir", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path))
@click.option("--yes", is_flag=True, help="Rewrite without asking for confirmation")
def remediate(project_dir: Path, yes: bool):
    """Rewrite Dockerfiles in place, keeping a .bak copy of each original."""
    if not yes:
        click.confirm(
            f"Rewrite the Dockerfiles under {project_dir}? Unrecognized instructions will be dropped",
            abort=True,
        )

    try:
        outcomes = remediate_project(project_dir, get_settings())
    except DockleError as e:
        click.echo(f"❌ Remediation failed: {e}", err=True)
        raise click.Abort()

    if not outcomes:
        click.echo("No Dockerfiles to remediate.")
        return

    failed = 0
    for path, outcome in outcomes.items():
        if outcome.ok:
            click.echo(f"✅ {path} (backup: {outcome.backup_path})")
            if outcome.dropped_lines:
                click.echo(f"   ⚠️  {outcome.dropped_lines} unrecognized lines dropped")
        else:
            failed += 1
            click.echo(f"❌ {path}: {outcome.error}", err=True)

    if failed:
        sys.exit(1)
