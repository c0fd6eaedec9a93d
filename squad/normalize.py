from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_DETECTED_CONFIDENCE, SLOT_COUNT
from .matchups import TroopType


# Known scanner output layouts, most recent first. Each path is relative to
# the parsed report; "{side}" is replaced with "A" or "B".
HERO_LAYOUTS: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("analysis.sides", ("analysis", "sides", "{side}", "heroes")),
    ("sides", ("sides", "{side}", "heroes")),
    ("sides.composition", ("sides", "{side}", "composition", "heroes")),
)

_TROOP_LITERALS = {t.value: t for t in TroopType}


@dataclass(frozen=True)
class HeroSlot:
    slot_index: int
    hero_id: Optional[str]
    type: Optional[TroopType]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot_index": self.slot_index,
            "hero_id": self.hero_id,
            "type": self.type.value if self.type else None,
            "confidence": self.confidence,
        }


def empty_slots() -> List[HeroSlot]:
    return [HeroSlot(i + 1, None, None, 0.0) for i in range(SLOT_COUNT)]


def _follow(doc: Any, path: Sequence[str], side: str) -> Any:
    node = doc
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key.format(side=side))
    return node


def find_hero_entries(parsed: Any, side: str) -> Tuple[Optional[List[Any]], Optional[str]]:
    if not isinstance(parsed, dict):
        return None, None
    for name, path in HERO_LAYOUTS:
        node = _follow(parsed, path, side)
        if isinstance(node, list):
            return node, name
    return None, None


def _slot_index(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        idx = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        idx = int(value)
    elif isinstance(value, str):
        try:
            idx = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    if 1 <= idx <= SLOT_COUNT:
        return idx
    return None


def _confidence(value: Any, detected: bool) -> float:
    if isinstance(value, bool):
        value = None
    if isinstance(value, int):
        # clamp before float(): JSON ints can exceed float range
        return 1.0 if value >= 1 else 0.0
    if isinstance(value, float) and math.isfinite(value):
        return max(0.0, min(1.0, value))
    return DEFAULT_DETECTED_CONFIDENCE if detected else 0.0


def normalize_slot(entry: Any) -> Optional[HeroSlot]:
    if not isinstance(entry, dict):
        return None
    idx = _slot_index(entry.get("slotIndex"))
    if idx is None:
        return None

    hero_id = entry.get("heroId")
    if not isinstance(hero_id, str):
        hero_id = None
    raw_type = entry.get("type")
    troop = _TROOP_LITERALS.get(raw_type) if isinstance(raw_type, str) else None

    return HeroSlot(
        slot_index=idx,
        hero_id=hero_id,
        type=troop,
        confidence=_confidence(entry.get("confidence"), bool(hero_id) or troop is not None),
    )


def extract_side(parsed: Any, side: str) -> Tuple[List[HeroSlot], Optional[str]]:
    """Return the five slots for ``side`` and the name of the layout used."""
    slots = empty_slots()
    entries, layout = find_hero_entries(parsed, side)
    if entries is None:
        return slots, None

    for entry in entries:
        slot = normalize_slot(entry)
        if slot is None:
            continue
        # duplicate indices: later entries overwrite earlier ones
        slots[slot.slot_index - 1] = slot
    return slots, layout
