"""Report schema - what ``dockle analyze --output`` writes."""

from pydantic import BaseModel, Field

from ..models import ProjectAnalysis


class ReportManifest(BaseModel):
    """Report metadata."""

    report_version: str = Field(default="1.0.0")
    tool_version: str
    project_root: str
    created_at: str


class Report(BaseModel):
    """Complete analysis report for one project."""

    manifest: ReportManifest
    analysis: ProjectAnalysis
