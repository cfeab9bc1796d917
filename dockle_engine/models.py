"""
Core models for the Dockle engine.

Discovery results are plain dataclasses recomputed on every call; the
aggregated results handed to callers are pydantic models so they can be
serialized as-is.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Findings
# ============================================================================


class Severity(str, Enum):
    """Severity carried by the leading marker of a finding."""

    ERROR = "error"
    WARNING = "warning"
    OK = "ok"


SEVERITY_MARKERS: Dict[Severity, str] = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️",
    Severity.OK: "✅",
}


@dataclass(frozen=True)
class Finding:
    """A single human-readable smell message for one Dockerfile."""

    severity: Severity
    message: str
    rule_id: str = ""

    def render(self) -> str:
        return f"{SEVERITY_MARKERS[self.severity]} {self.message}"


# ============================================================================
# Discovery
# ============================================================================


@dataclass
class ProjectTree:
    """A project root plus its first-level subdirectories, in name order."""

    root: Path
    subdirectories: List[Path] = field(default_factory=list)


@dataclass
class ManifestSet:
    """Manifests discovered under a project root."""

    root: Path
    compose_path: Optional[Path] = None
    root_dockerfile: Optional[Path] = None
    subdirectory_dockerfiles: List[Path] = field(default_factory=list)
    subdirectories: List[Path] = field(default_factory=list)

    @property
    def has_compose(self) -> bool:
        return self.compose_path is not None

    @property
    def has_dockerfiles(self) -> bool:
        return self.root_dockerfile is not None or bool(self.subdirectory_dockerfiles)

    @property
    def dockerfile_paths(self) -> List[Path]:
        """Every discovered Dockerfile, root first."""
        paths = [self.root_dockerfile] if self.root_dockerfile is not None else []
        return paths + list(self.subdirectory_dockerfiles)

    def analysis_targets(self) -> List[Path]:
        """Dockerfiles the project walk visits.

        The root Dockerfile is always visited; subdirectory Dockerfiles are
        visited only when the root carries a compose file.
        """
        targets = [self.root_dockerfile] if self.root_dockerfile is not None else []
        if self.has_compose:
            targets.extend(self.subdirectory_dockerfiles)
        return targets


# ============================================================================
# Results
# ============================================================================


class RemediationOutcome(BaseModel):
    """Per-file result of a remediation call."""

    path: str
    ok: bool
    backup_path: Optional[str] = None
    error: Optional[str] = None
    dropped_lines: int = 0


class ProjectAnalysis(BaseModel):
    """Aggregated analysis of one project tree."""

    root: str
    structure_valid: bool
    dockerfiles: Dict[str, List[str]] = Field(default_factory=dict, description="Dockerfile path -> findings")
    compose_path: Optional[str] = None
    compose_suggestions: List[str] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict, description="Path -> error message for paths that failed")
