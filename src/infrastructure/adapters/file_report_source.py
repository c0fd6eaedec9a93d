"""Adapter reading battle reports from a directory of JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...application.ports.report_source import (
    BattleReportSourcePort,
    ReportSourceError,
    StoredReport,
)
from ...domain.value_objects.types import ProfileId, ReportId

logger = logging.getLogger(__name__)


def _row_to_report(row: Dict[str, Any], fallback_id: str) -> StoredReport:
    parsed = row.get("parsed")
    return StoredReport(
        id=ReportId(str(row.get("id") or fallback_id)),
        profile_id=ProfileId(str(row.get("profile_id") or "")),
        parsed=parsed if isinstance(parsed, dict) else {},
        created_at=row.get("created_at"),
    )


class FileReportSourceAdapter(BattleReportSourcePort):
    """Adapter for reports stored as ``<report_id>.json`` rows.

    Each file holds ``{"id", "profile_id", "parsed", "created_at"}``.
    """

    def __init__(self, base_dir: Path | str):
        """Initialize with the reports directory.

        Args:
            base_dir: Directory holding one JSON file per report
        """
        self._base_dir = Path(base_dir)

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ReportSourceError(f"Corrupt report file {path.name}: {exc}") from exc
        except OSError as exc:
            raise ReportSourceError(f"Cannot read report file {path.name}: {exc}") from exc
        if not isinstance(data, dict):
            raise ReportSourceError(f"Report file {path.name} does not hold an object")
        return data

    def _path_for(self, report_id: str) -> Optional[Path]:
        # report ids are opaque; refuse anything that could escape the directory
        if not report_id or "/" in report_id or "\\" in report_id or report_id.startswith("."):
            return None
        return self._base_dir / f"{report_id}.json"

    def get_report(self, report_id: str) -> Optional[StoredReport]:
        path = self._path_for(report_id)
        if path is None or not path.exists():
            return None
        return _row_to_report(self._read(path), report_id)

    def list_reports(self, profile_id: str, limit: int = 200) -> List[StoredReport]:
        if not self._base_dir.exists():
            logger.warning("Reports directory %s does not exist", self._base_dir)
            return []

        reports: List[StoredReport] = []
        for path in self._base_dir.glob("*.json"):
            try:
                report = _row_to_report(self._read(path), path.stem)
            except ReportSourceError as exc:
                logger.warning("Skipping report file: %s", exc)
                continue
            if report.profile_id == profile_id:
                reports.append(report)

        reports.sort(key=lambda r: r.id, reverse=True)
        return reports[:limit]
