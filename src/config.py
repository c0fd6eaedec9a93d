"""Service configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ServiceConfig:
    report_source: str  # "file" or "rest"
    reports_dir: Path
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    hero_catalog: Optional[str]
    log_level: str
    list_limit: int = 200


def service_config_from_env() -> ServiceConfig:
    return ServiceConfig(
        report_source=os.environ.get("SQUAD_REPORT_SOURCE", "file").lower(),
        reports_dir=Path(os.environ.get("SQUAD_REPORTS_DIR", ".data/battle_reports")),
        supabase_url=os.environ.get("SUPABASE_URL") or None,
        supabase_key=os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or None,
        hero_catalog=os.environ.get("SQUAD_HERO_CATALOG") or None,
        log_level=os.environ.get("SQUAD_LOG_LEVEL", "INFO").upper(),
    )
