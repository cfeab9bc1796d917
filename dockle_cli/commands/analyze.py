"""Analyze command."""

import json
from pathlib import Path

import click

from dockle_engine import DockleError, __version__, analyze_project
from dockle_engine.report import write_report

from ..config import get_settings


@click.command()
@click.argument("project_dir", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path))
@click.option("--output", type=click.Path(file_okay=False, path_type=Path), help="Directory to write report.json to")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
def analyze(project_dir: Path, output: Path, as_json: bool):
    """Detect Dockerfile smells and compose improvements in a project."""
    try:
        analysis = analyze_project(project_dir, get_settings())
    except DockleError as e:
        click.echo(f"❌ Analysis failed: {e}", err=True)
        raise click.Abort()

    if as_json:
        click.echo(json.dumps(analysis.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        click.echo(f"🔍 Analyzed project: {analysis.root}")
        if not analysis.structure_valid:
            click.echo("  ⚠️  No Dockerfile or docker-compose file found", err=True)

        for path, findings in analysis.dockerfiles.items():
            click.echo(f"\n{path}")
            for finding in findings:
                click.echo(f"  {finding}")

        if analysis.compose_suggestions:
            click.echo(f"\n{analysis.compose_path}")
            for suggestion in analysis.compose_suggestions:
                click.echo(f"  {suggestion}")

        for path, error in analysis.errors.items():
            click.echo(f"  ❌ {path}: {error}", err=True)

    if output:
        report_path = write_report(analysis, output, tool_version=__version__)
        click.echo(f"  ✅ Report written: {report_path}", err=as_json)
