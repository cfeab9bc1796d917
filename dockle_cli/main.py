"""CLI entrypoint."""

import click

from dockle_engine import __version__

from .config import configure_logging
from .commands.validate import validate
from .commands.analyze import analyze
from .commands.compose import compose
from .commands.remediate import remediate


@click.group()
@click.version_option(version=__version__, prog_name="dockle")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors")
def cli(verbose: bool, quiet: bool):
    """Dockle CLI - Detect and fix Dockerfile and docker-compose smells."""
    if verbose:
        configure_logging("DEBUG")
    elif quiet:
        configure_logging("WARNING")
    else:
        configure_logging()


cli.add_command(validate)
cli.add_command(analyze)
cli.add_command(compose)
cli.add_command(remediate)


if __name__ == "__main__":
    cli()
