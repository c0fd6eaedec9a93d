"""Hero catalog schema and lookup.

The catalog is static, hand-authored game data. It is validated once at
load time and then wrapped in a ``HeroIndex`` that callers pass into the
analyzer.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import catalog_config_from_env
from .effects import SkillEffect
from .matchups import TroopType

logger = logging.getLogger(__name__)


Rarity = Literal["SR", "SSR", "UR"]
MechanicRole = Literal["damage", "tank", "healer", "buffer", "debuffer", "control", "support"]
DamageProfile = Literal["singleTarget", "aoe", "mixed", "dot", "burst", "unknown"]
SkillType = Literal["active", "passive", "ultimate"]


class CatalogError(RuntimeError):
    pass


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TraitStats(_CatalogModel):
    hp_pct: Optional[float] = Field(default=None, alias="hpPct")
    atk_pct: Optional[float] = Field(default=None, alias="atkPct")
    def_pct: Optional[float] = Field(default=None, alias="defPct")


class TraitEffect(_CatalogModel):
    stats: TraitStats
    summary: str


class Trait(_CatalogModel):
    id: str
    name: str
    effect: TraitEffect


class Skill(_CatalogModel):
    id: str
    name: str
    type: SkillType
    slot: Optional[int] = Field(default=None, ge=1, le=4)
    notes: Optional[str] = None
    effects: List[SkillEffect] = Field(default_factory=list)


class HeroExtra(_CatalogModel):
    id: Optional[str] = None
    name: Optional[str] = None
    effects: List[SkillEffect] = Field(default_factory=list)


class PromotionRule(_CatalogModel):
    to_rarity: Rarity = Field(alias="toRarity")
    season: float
    permanent_if_chosen: bool = Field(alias="permanentIfChosen")
    trait_replaces_id: Optional[str] = Field(default=None, alias="traitReplacesId")
    trait_gained_id: Optional[str] = Field(default=None, alias="traitGainedId")
    notes: Optional[str] = None


class Hero(_CatalogModel):
    id: str
    name: str
    rarity: Rarity
    squad_type: TroopType = Field(alias="squadType")
    primary_role: MechanicRole = Field(alias="primaryRole")
    secondary_roles: List[MechanicRole] = Field(default_factory=list, alias="secondaryRoles")
    damage_profile: DamageProfile = Field(default="unknown", alias="damageProfile")
    utility_tags: List[str] = Field(default_factory=list, alias="utilityTags")
    skills: List[Skill]
    extras: List[HeroExtra] = Field(default_factory=list)
    inherent_trait_ids: List[str] = Field(default_factory=list, alias="inherentTraitIds")
    promotion_rules: List[PromotionRule] = Field(default_factory=list, alias="promotionRules")


class HeroCatalog(_CatalogModel):
    version: str
    traits: List[Trait] = Field(default_factory=list)
    heroes: List[Hero]


class HeroIndex:
    """Read-only, case-insensitive lookup of heroes by id."""

    def __init__(self, catalog: HeroCatalog):
        by_id: Dict[str, Hero] = {}
        for hero in catalog.heroes:
            key = hero.id.strip().lower()
            if key in by_id:
                logger.warning("Duplicate hero id %r in catalog %s; keeping first", hero.id, catalog.version)
                continue
            by_id[key] = hero
        self.version = catalog.version
        self._by_id: Mapping[str, Hero] = MappingProxyType(by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, hero_id: object) -> bool:
        return isinstance(hero_id, str) and hero_id.strip().lower() in self._by_id

    def get(self, hero_id: Optional[str]) -> Optional[Hero]:
        if not hero_id:
            return None
        return self._by_id.get(hero_id.strip().lower())

    def effects_for(self, hero_id: Optional[str]) -> Iterator[SkillEffect]:
        hero = self.get(hero_id)
        if hero is None:
            return
        for skill in hero.skills:
            yield from skill.effects
        for extra in hero.extras:
            yield from extra.effects


def parse_hero_catalog(data: object) -> HeroCatalog:
    try:
        return HeroCatalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid hero catalog: {exc}") from exc


def load_hero_catalog(path: Optional[str] = None) -> HeroCatalog:
    cfg = catalog_config_from_env(path)
    catalog_path = Path(cfg.path)
    if not catalog_path.exists():
        raise CatalogError(f"Hero catalog not found: {catalog_path}")
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Hero catalog is not valid JSON: {catalog_path}: {exc}") from exc
    catalog = parse_hero_catalog(data)
    logger.info("Loaded hero catalog %s (%d heroes) from %s", catalog.version, len(catalog.heroes), catalog_path)
    return catalog


def load_hero_index(path: Optional[str] = None) -> HeroIndex:
    return HeroIndex(load_hero_catalog(path))
