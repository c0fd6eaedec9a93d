import json
from pathlib import Path
from typing import Any, Dict

import pytest

from squad.catalog import HeroIndex, load_hero_index

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> Dict[str, Any]:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture(scope="session")
def hero_index() -> HeroIndex:
    return load_hero_index()


@pytest.fixture
def sample_report() -> Dict[str, Any]:
    return load_fixture("parsed_report_sample.json")
