"""Transform analyzer output to the frontend expected format."""

from typing import Any, Dict, List

from squad.analyzer import BattleAnalysis

# Keys whose frontend name is not a plain camelCase conversion.
_RENAMES = {
    "damage_dealt_multiplier": "damageDealtMult",
    "damage_taken_multiplier": "damageTakenMult",
    "effective_power_multiplier": "effectivePowerMult",
}

# Mapping keys that are data (side names, effect keys), not field names.
_PRESERVE_CHILD_KEYS = {"sides", "by_key", "dominant_type_vs"}


def _to_camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    if snake_str in _RENAMES:
        return _RENAMES[snake_str]
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _camelize(value: Any, preserve_keys: bool = False) -> Any:
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            new_key = key if preserve_keys else _to_camel_case(key)
            out[new_key] = _camelize(item, preserve_keys=key in _PRESERVE_CHILD_KEYS)
        return out
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value


def transform_analysis_to_frontend(analysis: BattleAnalysis) -> Dict[str, Any]:
    """Convert a BattleAnalysis to the camelCase JSON shape."""
    return _camelize(analysis.to_dict())


def transform_analyses_to_frontend(analyses: List[BattleAnalysis]) -> List[Dict[str, Any]]:
    return [transform_analysis_to_frontend(a) for a in analyses]
