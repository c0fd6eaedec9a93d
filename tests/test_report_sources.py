import json
from typing import Any, Dict, List

import pytest
import requests

from src.application.ports.report_source import ReportSourceError
from src.config import ServiceConfig
from src.infrastructure.adapters import (
    FileReportSourceAdapter,
    RestReportSourceAdapter,
    build_report_source,
)
from src.infrastructure.adapters import rest_report_source


def _write_row(base, report_id: str, profile_id: str, parsed: Any = None) -> None:
    row = {"id": report_id, "profile_id": profile_id, "parsed": parsed or {}, "created_at": "2026-01-01T00:00:00Z"}
    (base / f"{report_id}.json").write_text(json.dumps(row), encoding="utf-8")


class _FakeResponse:
    def __init__(self, status_code: int, body: Any = None):
        self.status_code = status_code
        self._body = body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self) -> Any:
        return self._body


class _FakeSession:
    def __init__(self, responses: List[_FakeResponse]):
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self._responses = list(responses)

    def get(self, url: str, params=None, timeout=None) -> _FakeResponse:
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        return self._responses.pop(0)


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr(rest_report_source.time, "sleep", lambda _s: None)


def test_file_source_get(tmp_path) -> None:
    _write_row(tmp_path, "r1", "p1", {"sides": {}})
    source = FileReportSourceAdapter(tmp_path)

    report = source.get_report("r1")
    assert report.id == "r1"
    assert report.profile_id == "p1"
    assert report.parsed == {"sides": {}}
    assert source.get_report("missing") is None


def test_file_source_rejects_path_like_ids(tmp_path) -> None:
    source = FileReportSourceAdapter(tmp_path / "reports")
    (tmp_path / "reports").mkdir()
    _write_row(tmp_path, "secret", "p1")
    assert source.get_report("../secret") is None
    assert source.get_report("") is None


def test_file_source_list_filters_sorts_and_limits(tmp_path) -> None:
    for report_id, owner in (("r1", "p1"), ("r3", "p1"), ("r2", "p1"), ("r9", "p2")):
        _write_row(tmp_path, report_id, owner)
    (tmp_path / "broken.json").write_text("{oops", encoding="utf-8")
    source = FileReportSourceAdapter(tmp_path)

    assert [r.id for r in source.list_reports("p1")] == ["r3", "r2", "r1"]
    assert [r.id for r in source.list_reports("p1", limit=2)] == ["r3", "r2"]
    assert source.list_reports("nobody") == []
    assert FileReportSourceAdapter(tmp_path / "absent").list_reports("p1") == []


def test_file_source_corrupt_single_report_raises(tmp_path) -> None:
    (tmp_path / "bad.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ReportSourceError):
        FileReportSourceAdapter(tmp_path).get_report("bad")


def test_rest_source_queries_table() -> None:
    session = _FakeSession([_FakeResponse(200, [{"id": 5, "profile_id": "p1", "parsed": {"a": 1}}])])
    source = RestReportSourceAdapter("https://db.example.com/", "key", session=session)

    report = source.get_report("5")
    assert report.id == "5"
    assert report.parsed == {"a": 1}
    assert session.headers["apikey"] == "key"
    assert session.headers["authorization"] == "Bearer key"
    call = session.calls[0]
    assert call["url"] == "https://db.example.com/rest/v1/battle_reports"
    assert call["params"]["id"] == "eq.5"


def test_rest_source_list_params() -> None:
    session = _FakeSession([_FakeResponse(200, [{"id": "b", "profile_id": "p1"}, "junk", {"id": "a", "profile_id": "p1"}])])
    source = RestReportSourceAdapter("https://db.example.com", "key", session=session)

    reports = source.list_reports("p1", limit=10)
    assert [r.id for r in reports] == ["b", "a"]
    assert reports[0].parsed == {}
    params = session.calls[0]["params"]
    assert params["profile_id"] == "eq.p1"
    assert params["order"] == "id.desc"
    assert params["limit"] == 10


def test_rest_source_missing_report() -> None:
    source = RestReportSourceAdapter("https://db.example.com", "key", session=_FakeSession([_FakeResponse(200, [])]))
    assert source.get_report("nope") is None


def test_rest_source_retries_then_fails(no_sleep) -> None:
    session = _FakeSession([_FakeResponse(503), _FakeResponse(429), _FakeResponse(500)])
    source = RestReportSourceAdapter("https://db.example.com", "key", retries=3, session=session)
    with pytest.raises(ReportSourceError):
        source.list_reports("p1")
    assert len(session.calls) == 3


def test_rest_source_recovers_after_transient_error(no_sleep) -> None:
    session = _FakeSession([_FakeResponse(502), _FakeResponse(200, [])])
    source = RestReportSourceAdapter("https://db.example.com", "key", session=session)
    assert source.list_reports("p1") == []
    assert len(session.calls) == 2


def test_rest_source_rejects_non_list_body() -> None:
    source = RestReportSourceAdapter("https://db.example.com", "key", session=_FakeSession([_FakeResponse(200, {"message": "x"})]))
    with pytest.raises(ReportSourceError):
        source.get_report("1")


def test_rest_source_requires_credentials() -> None:
    with pytest.raises(ValueError):
        RestReportSourceAdapter("", "key")
    with pytest.raises(ValueError):
        RestReportSourceAdapter("https://db.example.com", "")


def test_build_report_source(tmp_path) -> None:
    config = ServiceConfig(
        report_source="file",
        reports_dir=tmp_path,
        supabase_url=None,
        supabase_key=None,
        hero_catalog=None,
        log_level="INFO",
    )
    assert isinstance(build_report_source(config), FileReportSourceAdapter)
    with pytest.raises(ValueError):
        build_report_source(ServiceConfig("ftp", tmp_path, None, None, None, "INFO"))
