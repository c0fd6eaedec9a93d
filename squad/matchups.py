from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Union


class TroopType(str, Enum):
    TANK = "tank"
    AIR = "air"
    MISSILE = "missile"


class Relation(str, Enum):
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"
    NEUTRAL = "neutral"


# attacker -> the type it beats. tank -> missile -> air -> tank
_BEATS: Dict[TroopType, TroopType] = {
    TroopType.TANK: TroopType.MISSILE,
    TroopType.MISSILE: TroopType.AIR,
    TroopType.AIR: TroopType.TANK,
}

# (damage dealt, damage taken, effective power)
_MULTIPLIERS = {
    Relation.ADVANTAGE: (1.2, 0.8, 1.44),
    Relation.DISADVANTAGE: (0.8, 1.2, 0.64),
    Relation.NEUTRAL: (1.0, 1.0, 1.0),
}


@dataclass(frozen=True)
class TypeAdvantage:
    attacker: TroopType
    defender: TroopType
    damage_dealt_multiplier: float
    damage_taken_multiplier: float
    effective_power_multiplier: float
    label: Relation

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["attacker"] = self.attacker.value
        out["defender"] = self.defender.value
        out["label"] = self.label.value
        return out


def as_troop_type(value: Union[TroopType, str]) -> TroopType:
    if isinstance(value, TroopType):
        return value
    try:
        return TroopType(value)
    except ValueError:
        raise ValueError(f"Unknown troop type: {value!r}") from None


def type_relation(attacker: Union[TroopType, str], defender: Union[TroopType, str]) -> Relation:
    a = as_troop_type(attacker)
    d = as_troop_type(defender)
    if a == d:
        return Relation.NEUTRAL
    if _BEATS[a] == d:
        return Relation.ADVANTAGE
    if _BEATS[d] == a:
        return Relation.DISADVANTAGE
    return Relation.NEUTRAL


def resolve_type_advantage(
    attacker: Union[TroopType, str],
    defender: Union[TroopType, str],
) -> TypeAdvantage:
    a = as_troop_type(attacker)
    d = as_troop_type(defender)
    rel = type_relation(a, d)
    dealt, taken, power = _MULTIPLIERS[rel]
    return TypeAdvantage(
        attacker=a,
        defender=d,
        damage_dealt_multiplier=dealt,
        damage_taken_multiplier=taken,
        effective_power_multiplier=power,
        label=rel,
    )
