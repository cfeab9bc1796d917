import json
import sys

import pytest
from click.testing import CliRunner
from loguru import logger

from dockle_cli.main import cli


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "dockle" in result.output


def test_validate_valid_project(runner, make_project):
    root = make_project({"docker-compose.yaml": "services: {}\n"})

    result = runner.invoke(cli, ["-q", "validate", str(root)])

    assert result.exit_code == 0
    assert "Valid project structure" in result.output


def test_validate_invalid_project(runner, make_project):
    root = make_project({"notes.txt": "nothing\n"})

    result = runner.invoke(cli, ["-q", "validate", str(root)])

    assert result.exit_code == 1


def test_analyze_prints_findings_and_writes_report(runner, make_project, tmp_path):
    root = make_project({"dockerfile": "FROM node:latest\n", "docker-compose.yaml": "services:\n  web: {}\n"})
    out_dir = tmp_path / "report"

    result = runner.invoke(cli, ["-q", "analyze", str(root), "--output", str(out_dir)])

    assert result.exit_code == 0
    assert "Avoid using 'latest' tag" in result.output
    assert "Service 'web' is missing a healthcheck" in result.output
    data = json.loads((out_dir / "report.json").read_text(encoding="utf-8"))
    assert data["analysis"]["structure_valid"] is True


def test_compose_command(runner, tmp_path):
    compose = tmp_path / "docker-compose.yaml"
    compose.write_text("services:\n  api:\n    deploy: {}\n", encoding="utf-8")

    result = runner.invoke(cli, ["-q", "compose", str(compose)])

    assert result.exit_code == 0
    assert "Service 'api' is missing a healthcheck" in result.output
    assert "resource limits" not in result.output


def test_compose_command_rejects_invalid_yaml(runner, tmp_path):
    compose = tmp_path / "docker-compose.yaml"
    compose.write_text("services: [\n", encoding="utf-8")

    result = runner.invoke(cli, ["-q", "compose", str(compose)])

    assert result.exit_code != 0


def test_remediate_with_confirmation_flag(runner, make_project):
    root = make_project({"dockerfile": "FROM node:latest\nUSER root\n"})

    result = runner.invoke(cli, ["-q", "remediate", str(root), "--yes"])

    assert result.exit_code == 0
    assert (root / "dockerfile.bak").read_text(encoding="utf-8") == "FROM node:latest\nUSER root\n"
    assert (root / "dockerfile").read_text(encoding="utf-8").startswith("FROM node:stable\nUSER appuser\n")


def test_remediate_declined_leaves_files_alone(runner, make_project):
    root = make_project({"dockerfile": "FROM node:latest\n"})

    result = runner.invoke(cli, ["-q", "remediate", str(root)], input="n\n")

    assert result.exit_code != 0
    assert (root / "dockerfile").read_text(encoding="utf-8") == "FROM node:latest\n"
    assert not (root / "dockerfile.bak").exists()
