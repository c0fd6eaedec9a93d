"""Battle report analysis.

``analyze_parsed_report`` turns a loosely-typed parsed report into a
``BattleAnalysis``. It never raises on malformed report data; missing or
unusable fields fall back to empty slots and the gaps are explained in
``notes``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .catalog import HeroIndex
from .config import SIDES
from .effects import EffectSummary
from .lineup import LineupBonus, compute_lineup_bonus, dominant_type, hero_order_key, hero_set_key
from .matchups import TroopType, TypeAdvantage, resolve_type_advantage
from .normalize import HeroSlot, extract_side

logger = logging.getLogger(__name__)


NOTE_HEROES_MISSING = "Side {side} hero IDs not detected yet."
NOTE_DOMINANT_UNKNOWN = "Dominant troop type could not be determined for at least one side."
NOTE_EFFECTS_COUNT_ONLY = "Effect summaries are counts only until skill effects are fully mapped."


@dataclass
class AnalysisSide:
    heroes: List[HeroSlot]
    hero_set_key: str
    hero_order_key: str
    lineup: LineupBonus
    dominant_type: Optional[TroopType]
    effect_summary: EffectSummary
    layout: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heroes": [h.to_dict() for h in self.heroes],
            "hero_set_key": self.hero_set_key,
            "hero_order_key": self.hero_order_key,
            "lineup": self.lineup.to_dict(),
            "dominant_type": self.dominant_type.value if self.dominant_type else None,
            "effect_summary": self.effect_summary.to_dict(),
        }


@dataclass
class Matchup:
    a_vs_b: Optional[TypeAdvantage] = None
    b_vs_a: Optional[TypeAdvantage] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dominant_type_vs": {
                "A_vs_B": self.a_vs_b.to_dict() if self.a_vs_b else None,
                "B_vs_A": self.b_vs_a.to_dict() if self.b_vs_a else None,
            }
        }


@dataclass
class BattleAnalysis:
    report_id: str
    sides: Dict[str, AnalysisSide]
    matchup: Matchup
    notes: List[str] = field(default_factory=list)
    ok: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "report_id": self.report_id,
            "sides": {name: side.to_dict() for name, side in self.sides.items()},
            "matchup": self.matchup.to_dict(),
            "notes": list(self.notes),
        }


def summarize_effects(hero_ids: Iterable[Optional[str]], hero_index: Optional[HeroIndex]) -> EffectSummary:
    summary = EffectSummary()
    if hero_index is None:
        return summary
    for hero_id in hero_ids:
        summary.add_all(hero_index.effects_for(hero_id))
    return summary


def analyze_side(parsed: Any, side: str, hero_index: Optional[HeroIndex] = None) -> AnalysisSide:
    heroes, layout = extract_side(parsed, side)
    hero_ids = [h.hero_id for h in heroes]
    types = [h.type for h in heroes if h.type is not None]
    return AnalysisSide(
        heroes=heroes,
        hero_set_key=hero_set_key(hero_ids),
        hero_order_key=hero_order_key(hero_ids),
        lineup=compute_lineup_bonus(types),
        dominant_type=dominant_type(types),
        effect_summary=summarize_effects(hero_ids, hero_index),
        layout=layout,
    )


def analyze_parsed_report(
    report_id: str,
    parsed: Any,
    hero_index: Optional[HeroIndex] = None,
) -> BattleAnalysis:
    sides = {name: analyze_side(parsed, name, hero_index) for name in SIDES}
    side_a, side_b = sides["A"], sides["B"]

    matchup = Matchup()
    if side_a.dominant_type and side_b.dominant_type:
        matchup.a_vs_b = resolve_type_advantage(side_a.dominant_type, side_b.dominant_type)
        matchup.b_vs_a = resolve_type_advantage(side_b.dominant_type, side_a.dominant_type)

    notes: List[str] = []
    for name, side in sides.items():
        if not side.hero_set_key:
            notes.append(NOTE_HEROES_MISSING.format(side=name))
    if not side_a.dominant_type or not side_b.dominant_type:
        notes.append(NOTE_DOMINANT_UNKNOWN)
    notes.append(NOTE_EFFECTS_COUNT_ONLY)

    logger.debug(
        "Analyzed report %s: layouts A=%s B=%s set keys A=%r B=%r",
        report_id,
        side_a.layout,
        side_b.layout,
        side_a.hero_set_key,
        side_b.hero_set_key,
    )
    return BattleAnalysis(report_id=str(report_id), sides=sides, matchup=matchup, notes=notes)


def analyze_many(
    rows: Iterable[Dict[str, Any]],
    hero_index: Optional[HeroIndex] = None,
) -> List[BattleAnalysis]:
    out: List[BattleAnalysis] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        out.append(analyze_parsed_report(str(row.get("id") or ""), row.get("parsed") or {}, hero_index))
    return out
