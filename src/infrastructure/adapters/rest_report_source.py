"""Adapter reading battle reports from the hosted database REST API."""

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from ...application.ports.report_source import (
    BattleReportSourcePort,
    ReportSourceError,
    StoredReport,
)
from ...domain.value_objects.types import ProfileId, ReportId

logger = logging.getLogger(__name__)

REPORT_COLUMNS = "id,profile_id,parsed,created_at"


class RestReportSourceAdapter(BattleReportSourcePort):
    """Adapter for the ``battle_reports`` table behind a PostgREST endpoint."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout_s: int = 15,
        retries: int = 3,
        backoff_s: float = 0.5,
        session: requests.Session | None = None,
    ):
        """Initialize with database endpoint and credentials.

        Args:
            base_url: Project URL, e.g. https://xyz.supabase.co
            service_key: Service role key used for both apikey and bearer auth
            timeout_s: Per-request timeout
            retries: Attempts per request
            backoff_s: Base sleep between attempts
            session: Optional preconfigured session
        """
        if not base_url:
            raise ValueError("SUPABASE_URL is missing")
        if not service_key:
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY is missing")
        self._table_url = base_url.rstrip("/") + "/rest/v1/battle_reports"
        self._timeout_s = timeout_s
        self._retries = retries
        self._backoff_s = backoff_s
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": service_key,
                "authorization": f"Bearer {service_key}",
                "accept": "application/json",
            }
        )

    def _select(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        last_err: Optional[Exception] = None
        for attempt in range(self._retries):
            try:
                resp = self.session.get(self._table_url, params=params, timeout=self._timeout_s)
                if resp.status_code in (429, 500, 502, 503, 504):
                    last_err = ReportSourceError(f"HTTP {resp.status_code}")
                    time.sleep(self._backoff_s * (attempt + 1))
                    continue
                resp.raise_for_status()
                body = resp.json()
                if not isinstance(body, list):
                    raise ReportSourceError(f"Unexpected response shape: {type(body).__name__}")
                return body
            except ReportSourceError:
                raise
            except (requests.RequestException, ValueError) as exc:
                last_err = exc
                logger.warning("Report store request failed (attempt %d): %s", attempt + 1, exc)
                time.sleep(self._backoff_s * (attempt + 1))

        raise ReportSourceError(f"Failed after {self._retries} attempts. Last error: {last_err}")

    @staticmethod
    def _to_report(row: Dict[str, Any]) -> StoredReport:
        parsed = row.get("parsed")
        return StoredReport(
            id=ReportId(str(row.get("id") or "")),
            profile_id=ProfileId(str(row.get("profile_id") or "")),
            parsed=parsed if isinstance(parsed, dict) else {},
            created_at=row.get("created_at"),
        )

    def get_report(self, report_id: str) -> Optional[StoredReport]:
        rows = self._select({"select": REPORT_COLUMNS, "id": f"eq.{report_id}", "limit": 1})
        if not rows:
            return None
        return self._to_report(rows[0])

    def list_reports(self, profile_id: str, limit: int = 200) -> List[StoredReport]:
        rows = self._select(
            {
                "select": REPORT_COLUMNS,
                "profile_id": f"eq.{profile_id}",
                "order": "id.desc",
                "limit": limit,
            }
        )
        return [self._to_report(r) for r in rows if isinstance(r, dict)]
