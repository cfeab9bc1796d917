"""Dockle engine - smell detection and remediation for container build manifests."""

from .config import EngineSettings, load_settings
from .errors import DockleError, IOUnavailable, ParseError
from .models import Finding, ManifestSet, ProjectAnalysis, RemediationOutcome, Severity
from .project import analyze_project, check_docker_smells, remediate_project

__version__ = "1.0.0"

__all__ = [
    "DockleError",
    "EngineSettings",
    "Finding",
    "IOUnavailable",
    "ManifestSet",
    "ParseError",
    "ProjectAnalysis",
    "RemediationOutcome",
    "Severity",
    "analyze_project",
    "check_docker_smells",
    "load_settings",
    "remediate_project",
]
