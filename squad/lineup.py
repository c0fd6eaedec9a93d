from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from .config import SLOT_COUNT
from .matchups import TroopType, as_troop_type


TIER_NONE = "none"
TIER_3_SAME = "3_same"
TIER_3_SAME_2_DIFF = "3_same_2_diff"
TIER_4_SAME = "4_same"
TIER_5_SAME = "5_same"


@dataclass(frozen=True)
class LineupBonus:
    same_type_count: int
    total_heroes: int
    stat_percent_bonus: float  # applies to hero HP, ATK and DEF
    tier: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _type_counts(types: Iterable[Union[TroopType, str]]) -> Counter:
    counts: Counter = Counter({t: 0 for t in TroopType})
    for t in types:
        counts[as_troop_type(t)] += 1
    return counts


def compute_lineup_bonus(types: Sequence[Union[TroopType, str]]) -> LineupBonus:
    total = len(types)
    counts = _type_counts(types)
    same = max(counts.values())

    if same >= 5:
        return LineupBonus(same, total, 0.20, TIER_5_SAME)
    if same == 4:
        return LineupBonus(same, total, 0.15, TIER_4_SAME)
    if same == 3 and total == 5:
        return LineupBonus(same, total, 0.10, TIER_3_SAME_2_DIFF)
    if same == 3:
        return LineupBonus(same, total, 0.05, TIER_3_SAME)
    return LineupBonus(same, total, 0.0, TIER_NONE)


def dominant_type(types: Sequence[Union[TroopType, str]]) -> Optional[TroopType]:
    """Return the type with a strict plurality, or None when empty or tied."""
    if not types:
        return None
    ranked = _type_counts(types).most_common()
    top_type, top_count = ranked[0]
    if top_count == 0:
        return None
    if len(ranked) > 1 and ranked[1][1] == top_count:
        return None
    return top_type


def _clean_id(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return None


def hero_set_key(hero_ids: Iterable[Any]) -> str:
    ids = [c for c in (_clean_id(h) for h in hero_ids) if c]
    return "|".join(sorted(ids))


def hero_order_key(hero_ids_by_slot: Sequence[Any]) -> str:
    return "|".join(_clean_id(h) or "_" for h in list(hero_ids_by_slot)[:SLOT_COUNT])
