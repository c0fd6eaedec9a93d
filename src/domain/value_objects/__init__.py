"""Domain value objects."""

from .types import ProfileId, ProgressStatus, ReportId

__all__ = [
    "ProfileId",
    "ProgressStatus",
    "ReportId",
]
