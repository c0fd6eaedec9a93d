"""Skill effect vocabulary and per-side effect counting.

Effect keys describe what a skill does, not how strongly it does it.
Magnitudes (value, duration, chance) may be numbers or the placeholder
``"scales"`` and are never interpreted here; summaries only count keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class EffectKey(str, Enum):
    # offense
    PCT_ATK_UP = "pctAtkUp"
    PCT_DAMAGE_UP = "pctDamageUp"
    PCT_SKILL_DAMAGE_UP = "pctSkillDamageUp"
    PCT_CRIT_RATE_UP = "pctCritRateUp"
    PCT_CRIT_DAMAGE_UP = "pctCritDamageUp"
    # defense / sustain
    PCT_DEF_UP = "pctDefUp"
    PCT_HP_UP = "pctHpUp"
    PCT_DAMAGE_TAKEN_DOWN = "pctDamageTakenDown"
    SHIELD = "shield"
    HEAL_OVER_TIME = "healOverTime"
    HEAL_BURST = "healBurst"
    # control / debuffs
    STUN = "stun"
    SILENCE = "silence"
    SLOW = "slow"
    TAUNT = "taunt"
    PCT_DEF_DOWN = "pctDefDown"
    PCT_ATK_DOWN = "pctAtkDown"
    PCT_DAMAGE_TAKEN_UP = "pctDamageTakenUp"
    # utility
    ENERGY_GAIN_UP = "energyGainUp"
    ENERGY_DRAIN = "energyDrain"
    CLEANSE = "cleanse"


class EffectTarget(str, Enum):
    SELF = "self"
    ALLY = "ally"
    ALLIES = "allies"
    ENEMY = "enemy"
    ENEMIES = "enemies"
    SQUAD = "squad"
    GLOBAL = "global"


class EffectStackRule(str, Enum):
    NONE = "none"
    REFRESH = "refresh"
    STACK_ADD = "stackAdd"
    STACK_MUL = "stackMul"
    CAP = "cap"


Magnitude = Optional[Union[float, Literal["scales"]]]


class SkillEffect(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: EffectKey
    target: EffectTarget
    value: Magnitude = None
    duration: Magnitude = None
    chance: Magnitude = None
    stack: Optional[EffectStackRule] = None
    note: Optional[str] = None


@dataclass
class EffectSummary:
    by_key: Dict[EffectKey, int] = field(default_factory=dict)

    def add(self, effect: SkillEffect) -> None:
        self.by_key[effect.key] = self.by_key.get(effect.key, 0) + 1

    def add_all(self, effects: Iterable[SkillEffect]) -> None:
        for e in effects:
            self.add(e)

    def merge(self, other: "EffectSummary") -> "EffectSummary":
        out = EffectSummary(by_key=dict(self.by_key))
        for key, count in other.by_key.items():
            out.by_key[key] = out.by_key.get(key, 0) + count
        return out

    def total(self) -> int:
        return sum(self.by_key.values())

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {"by_key": {k.value: v for k, v in sorted(self.by_key.items(), key=lambda kv: kv[0].value)}}
