from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


SIDES: Tuple[str, str] = ("A", "B")

SLOT_COUNT = 5

# Confidence assigned to a slot that carries a hero id or type but no score.
DEFAULT_DETECTED_CONFIDENCE = 0.6

BUNDLED_CATALOG_PATH = Path(__file__).with_name("hero_catalog.json")


@dataclass(frozen=True)
class CatalogConfig:
    path: Path


def catalog_config_from_env(override: Optional[str] = None) -> CatalogConfig:
    raw = override or os.environ.get("SQUAD_HERO_CATALOG")
    return CatalogConfig(path=Path(raw) if raw else BUNDLED_CATALOG_PATH)
