"""Whole-project walks: analysis and remediation over a project tree."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from dockle_engine.compose.advisor import advise_compose_file
from dockle_engine.config import EngineSettings
from dockle_engine.errors import DockleError, IOUnavailable, ParseError
from dockle_engine.manifests.locator import locate_manifests
from dockle_engine.manifests.validator import validate_structure
from dockle_engine.models import ManifestSet, ProjectAnalysis, RemediationOutcome
from dockle_engine.remediation.remediator import remediate_dockerfile
from dockle_engine.rules.dockerfile import analyze_dockerfile


def _check_smells(
    manifests: ManifestSet, settings: EngineSettings, failures: Dict[str, IOUnavailable]
) -> Dict[str, List[str]]:
    issues: Dict[str, List[str]] = {}

    if manifests.root_dockerfile is not None:
        logger.info("Detected a single Dockerfile in the root directory.")
    if manifests.has_compose:
        logger.info("Detected a docker-compose file in the root. Checking for Dockerfiles in subdirectories...")

    for dockerfile in manifests.analysis_targets():
        try:
            findings = analyze_dockerfile(dockerfile, settings)
        except IOUnavailable as e:
            logger.error(f"Could not analyze {dockerfile}: {e.reason}")
            failures[str(dockerfile)] = e
            continue
        issues[str(dockerfile)] = [finding.render() for finding in findings]

    return issues


def check_docker_smells(
    root: Union[str, Path],
    settings: Optional[EngineSettings] = None,
    errors: Optional[Dict[str, str]] = None,
) -> Dict[str, List[str]]:
    """Map each analyzed Dockerfile path to its rendered findings, in discovery order.

    Args:
        root: Project root
        settings: Engine settings
        errors: If given, unreadable Dockerfiles are recorded here as
            path -> message and the walk returns normally

    Raises:
        IOUnavailable: if the project root is unavailable, or, when
            ``errors`` is not given, for the first unreadable Dockerfile
            once every other Dockerfile has been visited
    """
    settings = settings or EngineSettings()
    failures: Dict[str, IOUnavailable] = {}
    issues = _check_smells(locate_manifests(root, settings), settings, failures)

    if errors is not None:
        errors.update((path, str(e)) for path, e in failures.items())
    elif failures:
        raise next(iter(failures.values()))
    return issues


def analyze_project(root: Union[str, Path], settings: Optional[EngineSettings] = None) -> ProjectAnalysis:
    """Validate, detect smells and advise on the compose file of one project.

    Per-path failures (an unreadable Dockerfile, a malformed compose file) are
    recorded in ``errors`` and do not stop the rest of the analysis.

    Raises:
        IOUnavailable: if the project root is unavailable
    """
    settings = settings or EngineSettings()
    manifests = locate_manifests(root, settings)

    analysis = ProjectAnalysis(
        root=str(manifests.root),
        structure_valid=validate_structure(manifests),
        compose_path=str(manifests.compose_path) if manifests.compose_path else None,
    )
    failures: Dict[str, IOUnavailable] = {}
    analysis.dockerfiles = _check_smells(manifests, settings, failures)
    analysis.errors.update((path, str(e)) for path, e in failures.items())

    if manifests.compose_path is not None:
        try:
            analysis.compose_suggestions = advise_compose_file(manifests.compose_path)
        except (ParseError, IOUnavailable) as e:
            logger.error(f"Could not inspect compose file: {e}")
            analysis.errors[str(manifests.compose_path)] = str(e)

    return analysis


def remediate_project(
    root: Union[str, Path], settings: Optional[EngineSettings] = None
) -> Dict[str, RemediationOutcome]:
    """Remediate every Dockerfile the analysis walk visits.

    Files are handled independently: a failure is reported for its path and
    the walk continues. Files already rewritten stay rewritten.

    Raises:
        IOUnavailable: if the project root is unavailable
    """
    settings = settings or EngineSettings()
    manifests = locate_manifests(root, settings)
    outcomes: Dict[str, RemediationOutcome] = {}

    for dockerfile in manifests.analysis_targets():
        logger.info(f"Optimizing Dockerfile: {dockerfile}")
        try:
            outcomes[str(dockerfile)] = remediate_dockerfile(dockerfile, settings)
        except DockleError as e:
            logger.error(f"Remediation failed for {dockerfile}: {e}")
            outcomes[str(dockerfile)] = RemediationOutcome(path=str(dockerfile), ok=False, error=str(e))

    failed = sum(1 for outcome in outcomes.values() if not outcome.ok)
    logger.info(f"Remediated {len(outcomes) - failed}/{len(outcomes)} Dockerfiles")
    return outcomes
