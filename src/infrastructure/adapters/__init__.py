"""Infrastructure adapters."""

from ...config import ServiceConfig
from ...application.ports.report_source import BattleReportSourcePort
from .file_report_source import FileReportSourceAdapter
from .rest_report_source import RestReportSourceAdapter


def build_report_source(config: ServiceConfig) -> BattleReportSourcePort:
    """Create the report source adapter selected by configuration."""
    if config.report_source == "rest":
        return RestReportSourceAdapter(config.supabase_url or "", config.supabase_key or "")
    if config.report_source == "file":
        return FileReportSourceAdapter(config.reports_dir)
    raise ValueError(f"Unknown report source: {config.report_source!r}")


__all__ = [
    "FileReportSourceAdapter",
    "RestReportSourceAdapter",
    "build_report_source",
]
