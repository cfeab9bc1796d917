import json
from datetime import datetime
from pathlib import Path

from dockle_engine.models import ProjectAnalysis
from dockle_engine.report.schema import Report, ReportManifest

REPORT_FILENAME = "report.json"


def write_report(analysis: ProjectAnalysis, output_dir: Path, tool_version: str = "1.0.0") -> Path:
    """Write the analysis as ``report.json`` under ``output_dir`` and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)

    manifest = ReportManifest(
        tool_version=tool_version,
        project_root=analysis.root,
        created_at=datetime.now().isoformat(),
    )
    report = Report(manifest=manifest, analysis=analysis)

    report_path = output_dir / REPORT_FILENAME
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

    return report_path
