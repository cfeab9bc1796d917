"""CLI configuration: engine settings and the loguru sink."""

import sys
from typing import Optional

import click
from loguru import logger

from dockle_engine.config import EngineSettings, load_settings


def get_settings() -> EngineSettings:
    """Load engine settings from the environment, aborting on invalid values."""
    try:
        return load_settings()
    except ValueError as e:
        click.echo(f"❌ Invalid configuration: {e}", err=True)
        raise click.Abort()


def configure_logging(level: Optional[str] = None) -> None:
    """Route loguru output to stderr at ``level`` (settings level if omitted)."""
    level = level or get_settings().log_level
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> | {message}")
