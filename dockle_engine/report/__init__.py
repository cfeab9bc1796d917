from .schema import Report, ReportManifest
from .writer import write_report

__all__ = ["Report", "ReportManifest", "write_report"]
