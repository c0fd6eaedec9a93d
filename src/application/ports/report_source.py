"""Port (interface) for battle report storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...domain.value_objects.types import ProfileId, ReportId


class ReportSourceError(RuntimeError):
    """Raised when the report store cannot be reached or answers badly."""


@dataclass
class StoredReport:
    """A battle report row as kept by the report store."""

    id: ReportId
    profile_id: ProfileId
    parsed: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None


class BattleReportSourcePort(ABC):
    """Port for reading stored battle reports."""

    @abstractmethod
    def get_report(self, report_id: str) -> Optional[StoredReport]:
        """Fetch a single report.

        Args:
            report_id: Report identifier

        Returns:
            The stored report, or None if it does not exist
        """
        ...

    @abstractmethod
    def list_reports(self, profile_id: str, limit: int = 200) -> List[StoredReport]:
        """List a profile's reports, newest id first.

        Args:
            profile_id: Owner profile identifier
            limit: Maximum number of reports to return

        Returns:
            Stored reports belonging to the profile
        """
        ...


class ProgressCallbackPort(ABC):
    """Port for reporting progress during long operations."""

    @abstractmethod
    async def report_progress(
        self, progress: int, message: str, status: str = "processing"
    ) -> None:
        """Report progress update.

        Args:
            progress: Progress percentage (0-100)
            message: Human-readable status message
            status: Status type (connecting, processing, completed, error)
        """
        ...
