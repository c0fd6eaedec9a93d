"""Application ports (interfaces)."""

from .report_source import (
    BattleReportSourcePort,
    ProgressCallbackPort,
    ReportSourceError,
    StoredReport,
)

__all__ = [
    "BattleReportSourcePort",
    "ProgressCallbackPort",
    "ReportSourceError",
    "StoredReport",
]
