import pytest

from dockle_engine import IOUnavailable, analyze_project, check_docker_smells, remediate_project
from dockle_engine.remediation.remediator import HEALTHCHECK_LINE
from dockle_engine.rules import dockerfile as dockerfile_rules

COMPOSE = """\
services:
  web:
    build: ./web
  db:
    image: postgres:16
    deploy:
      resources:
        limits:
          cpus: "0.5"
    healthcheck:
      test: ["CMD", "pg_isready"]
"""


def test_compose_only_project(make_project):
    root = make_project({"docker-compose.yaml": COMPOSE})

    analysis = analyze_project(root)

    assert analysis.structure_valid is True
    assert analysis.dockerfiles == {}
    assert len(analysis.compose_suggestions) == 2
    assert all("'web'" in suggestion for suggestion in analysis.compose_suggestions)
    assert analysis.errors == {}


def test_root_dockerfile_comes_before_subdirectories(make_project):
    root = make_project(
        {
            "docker-compose.yaml": COMPOSE,
            "dockerfile": "FROM alpine:3.19\n",
            "worker/dockerfile": "FROM python:latest\n",
            "api/dockerfile": "FROM python:3.12\n",
            "static/index.html": "<html></html>\n",
        }
    ).resolve()

    report = check_docker_smells(root)

    assert list(report) == [
        str(root / "dockerfile"),
        str(root / "api" / "dockerfile"),
        str(root / "worker" / "dockerfile"),
    ]
    assert report[str(root / "worker" / "dockerfile")][0] == "❌ Avoid using 'latest' tag in FROM instruction."


def test_subdirectories_need_a_compose_file(make_project):
    root = make_project({"dockerfile": "FROM alpine\n", "api/dockerfile": "FROM python\n"}).resolve()

    analysis = analyze_project(root)

    assert analysis.structure_valid is True
    assert list(analysis.dockerfiles) == [str(root / "dockerfile")]
    assert analysis.compose_path is None


def test_malformed_compose_does_not_stop_dockerfile_analysis(make_project):
    root = make_project({"docker-compose.yaml": "services: [\n", "api/dockerfile": "FROM python\n"}).resolve()

    analysis = analyze_project(root)

    assert list(analysis.dockerfiles) == [str(root / "api" / "dockerfile")]
    assert analysis.compose_suggestions == []
    assert str(root / "docker-compose.yaml") in analysis.errors


def test_missing_root_raises(tmp_path):
    with pytest.raises(IOUnavailable):
        analyze_project(tmp_path / "nope")


def test_remediation_is_best_effort(make_project):
    root = make_project(
        {
            "docker-compose.yaml": COMPOSE,
            "dockerfile": "FROM node:latest\nUSER root\n",
            "api/dockerfile": "FROM python:latest\n",
            "web/dockerfile": "FROM nginx:latest\n",
        }
    ).resolve()
    (root / "api" / "dockerfile.bak").mkdir()

    outcomes = remediate_project(root)

    assert list(outcomes) == [str(root / "dockerfile"), str(root / "api" / "dockerfile"), str(root / "web" / "dockerfile")]
    assert outcomes[str(root / "dockerfile")].ok
    assert not outcomes[str(root / "api" / "dockerfile")].ok
    assert outcomes[str(root / "api" / "dockerfile")].error
    assert outcomes[str(root / "web" / "dockerfile")].ok

    assert (root / "api" / "dockerfile").read_text(encoding="utf-8") == "FROM python:latest\n"
    assert HEALTHCHECK_LINE in (root / "web" / "dockerfile").read_text(encoding="utf-8")
    assert (root / "dockerfile").read_text(encoding="utf-8").splitlines()[:2] == ["FROM node:stable", "USER appuser"]


def test_remediation_without_dockerfiles(make_project):
    assert remediate_project(make_project({"docker-compose.yaml": COMPOSE})) == {}


def _unreadable(path_to_fail):
    real_read = dockerfile_rules.read_dockerfile_lines

    def read(dockerfile_path):
        if dockerfile_path == path_to_fail:
            raise IOUnavailable(dockerfile_path, "cannot read Dockerfile: Permission denied")
        return real_read(dockerfile_path)

    return read


def test_unreadable_dockerfile_is_reported_to_the_caller(make_project, monkeypatch):
    root = make_project(
        {"docker-compose.yaml": COMPOSE, "api/dockerfile": "FROM python\n", "web/dockerfile": "FROM nginx\n"}
    ).resolve()
    monkeypatch.setattr(dockerfile_rules, "read_dockerfile_lines", _unreadable(root / "web" / "dockerfile"))

    errors = {}
    report = check_docker_smells(root, errors=errors)

    assert list(report) == [str(root / "api" / "dockerfile")]
    assert list(errors) == [str(root / "web" / "dockerfile")]
    assert "Permission denied" in errors[str(root / "web" / "dockerfile")]

    with pytest.raises(IOUnavailable) as excinfo:
        check_docker_smells(root)
    assert excinfo.value.path == root / "web" / "dockerfile"

    analysis = analyze_project(root)
    assert list(analysis.dockerfiles) == [str(root / "api" / "dockerfile")]
    assert str(root / "web" / "dockerfile") in analysis.errors
