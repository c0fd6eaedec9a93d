"""FastAPI dependencies shared by REST and WebSocket endpoints."""

from fastapi.requests import HTTPConnection

from squad.catalog import HeroIndex

from ..application.ports.report_source import BattleReportSourcePort
from ..application.use_cases.analyze_reports import AnalyzeReportsUseCase


def get_report_source(conn: HTTPConnection) -> BattleReportSourcePort:
    return conn.app.state.report_source


def get_hero_index(conn: HTTPConnection) -> HeroIndex | None:
    return getattr(conn.app.state, "hero_index", None)


def get_use_case(conn: HTTPConnection) -> AnalyzeReportsUseCase:
    return AnalyzeReportsUseCase(get_report_source(conn), get_hero_index(conn))
