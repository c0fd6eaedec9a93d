import json

import pytest
from fastapi.testclient import TestClient

from src.api.deps import get_use_case
from src.infrastructure.adapters import FileReportSourceAdapter
from src.main import app


def _write_row(base, report_id: str, profile_id: str, parsed) -> None:
    row = {"id": report_id, "profile_id": profile_id, "parsed": parsed}
    (base / f"{report_id}.json").write_text(json.dumps(row), encoding="utf-8")


@pytest.fixture
def api_client(tmp_path, hero_index, sample_report):
    _write_row(tmp_path, "r1", "p1", sample_report)
    _write_row(tmp_path, "r2", "p1", {})
    _write_row(tmp_path, "r3", "p2", sample_report)

    app.state.report_source = FileReportSourceAdapter(tmp_path)
    app.state.hero_index = hero_index
    with TestClient(app) as client:
        yield client
    app.state.report_source = None
    app.state.hero_index = None


def test_root_and_health(api_client) -> None:
    assert api_client.get("/").json()["name"] == "Squad Assistant API"

    health = api_client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["catalog_version"] == "2026-01-12"


def test_list_analyses(api_client) -> None:
    resp = api_client.get("/api/battle/analyze", params={"profileId": "p1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["count"] == 2
    assert [a["reportId"] for a in body["analyses"]] == ["r2", "r1"]


def test_list_requires_profile(api_client) -> None:
    for params in ({}, {"profileId": "p1", "limit": 500}):
        resp = api_client.get("/api/battle/analyze", params=params)
        assert resp.status_code == 400
        assert resp.json()["detail"]["error"]["code"] == "INVALID_REQUEST"


def test_get_analysis_camel_case_shape(api_client) -> None:
    resp = api_client.get("/api/battle/analyze/r1", params={"profileId": "p1"})
    assert resp.status_code == 200
    analysis = resp.json()["analysis"]

    side_a = analysis["sides"]["A"]
    assert side_a["heroSetKey"] == "dva|kimberly|murphy|tesla|williams"
    assert side_a["heroes"][0] == {"slotIndex": 1, "heroId": "Kimberly", "type": "tank", "confidence": 0.92}
    assert side_a["lineup"] == {"sameTypeCount": 3, "totalHeroes": 5, "statPercentBonus": 0.1, "tier": "3_same_2_diff"}
    assert side_a["dominantType"] == "tank"
    assert side_a["effectSummary"]["byKey"]["pctSkillDamageUp"] == 1

    a_vs_b = analysis["matchup"]["dominantTypeVs"]["A_vs_B"]
    assert a_vs_b == {
        "attacker": "tank",
        "defender": "air",
        "damageDealtMult": 0.8,
        "damageTakenMult": 1.2,
        "effectivePowerMult": 0.64,
        "label": "disadvantage",
    }


def test_get_analysis_of_other_profile_is_not_found(api_client) -> None:
    resp = api_client.get("/api/battle/analyze/r3", params={"profileId": "p1"})
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"]["code"] == "NOT_FOUND"

    assert api_client.get("/api/battle/analyze/r3").status_code == 200
    assert api_client.get("/api/battle/analyze/missing").status_code == 404


def test_inline_analysis(api_client) -> None:
    resp = api_client.post("/api/battle/analyze", json={"reportId": "inline-1", "parsed": None})
    assert resp.status_code == 200
    analysis = resp.json()["analysis"]
    assert analysis["reportId"] == "inline-1"
    assert analysis["matchup"]["dominantTypeVs"] == {"A_vs_B": None, "B_vs_A": None}
    assert "Side B hero IDs not detected yet." in analysis["notes"]


def test_inline_analysis_requires_report_id(api_client) -> None:
    resp = api_client.post("/api/battle/analyze", json={"parsed": {}})
    assert resp.status_code == 400
    error = resp.json()["detail"]["error"]
    assert error["code"] == "INVALID_REQUEST"
    assert any("reportId" in e["loc"] for e in error["details"]["errors"])


def test_websocket_progress_flow(api_client) -> None:
    with api_client.websocket_connect("/ws/analyze") as ws:
        ws.send_json({"action": "analyze", "profileId": "p1"})
        messages = []
        while True:
            msg = ws.receive_json()
            messages.append(msg)
            if msg["status"] in ("completed", "error"):
                break

    assert messages[0]["status"] == "connecting"
    assert all(m["status"] == "processing" for m in messages[1:-1])
    final = messages[-1]
    assert final["status"] == "completed"
    assert final["progress"] == 100
    assert final["count"] == 2


def test_websocket_rejects_unknown_action(api_client) -> None:
    with api_client.websocket_connect("/ws/analyze") as ws:
        ws.send_json({"action": "dance"})
        msg = ws.receive_json()
    assert msg["status"] == "error"
    assert "Unknown action" in msg["message"]


class _RejectingUseCase:
    def analyze_inline(self, report_id, parsed):
        raise ValueError("parsed report is not usable")


def test_inline_value_error_maps_to_invalid_request(api_client) -> None:
    app.dependency_overrides[get_use_case] = lambda: _RejectingUseCase()
    try:
        resp = api_client.post("/api/battle/analyze", json={"reportId": "bad", "parsed": {}})
    finally:
        app.dependency_overrides.pop(get_use_case, None)

    assert resp.status_code == 400
    error = resp.json()["detail"]["error"]
    assert error["code"] == "INVALID_REQUEST"
    assert error["details"] == {"reportId": "bad"}
