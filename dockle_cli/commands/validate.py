"""Validate command."""

import sys
from pathlib import Path

import click

from dockle_engine import DockleError
from dockle_engine.manifests import validate_project_structure

from ..config import get_settings


@click.command()
@click.argument("project_dir", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path))
def validate(project_dir: Path):
    """Check that a project contains a Dockerfile or a docker-compose file."""
    try:
        valid = validate_project_structure(project_dir, get_settings())
    except DockleError as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()

    if valid:
        click.echo(f"✅ Valid project structure: {project_dir}")
    else:
        click.echo(f"❌ Invalid structure: no Dockerfile or docker-compose file in {project_dir}", err=True)
        sys.exit(1)
