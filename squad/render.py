from __future__ import annotations

from typing import Any, Dict, List


def _slot_line(slot: Dict[str, Any]) -> str:
    hero = slot.get("hero_id") or "-"
    troop = slot.get("type") or "?"
    return f"  {slot.get('slot_index')}. {hero} ({troop}) conf {slot.get('confidence', 0):.2f}"


def _advantage_line(label: str, adv: Dict[str, Any] | None) -> str:
    if not adv:
        return f"  {label}: n/a"
    return (
        f"  {label}: {adv.get('attacker')} vs {adv.get('defender')} -> {adv.get('label')} "
        f"(dealt x{adv.get('damage_dealt_multiplier', 1):.2f}, "
        f"taken x{adv.get('damage_taken_multiplier', 1):.2f}, "
        f"power x{adv.get('effective_power_multiplier', 1):.2f})"
    )


def render_text(analysis: Dict[str, Any]) -> str:
    sides = analysis.get("sides", {})
    matchup = (analysis.get("matchup") or {}).get("dominant_type_vs", {})

    lines: List[str] = []
    lines.append("BATTLE ANALYSIS")
    lines.append(f"Report: {analysis.get('report_id')}")
    lines.append("")

    for name in ("A", "B"):
        side = sides.get(name) or {}
        lineup = side.get("lineup") or {}
        lines.append(f"Side {name}")
        for slot in side.get("heroes") or []:
            lines.append(_slot_line(slot))
        lines.append(
            f"  lineup: {lineup.get('tier', 'none')} "
            f"(+{lineup.get('stat_percent_bonus', 0):.0%} HP/ATK/DEF, "
            f"{lineup.get('same_type_count', 0)}/{lineup.get('total_heroes', 0)} same type)"
        )
        lines.append(f"  dominant type: {side.get('dominant_type') or 'unknown'}")
        effects = (side.get("effect_summary") or {}).get("by_key") or {}
        if effects:
            lines.append("  effects: " + ", ".join(f"{k} x{v}" for k, v in effects.items()))
        lines.append("")

    lines.append("Matchup")
    lines.append(_advantage_line("A vs B", matchup.get("A_vs_B")))
    lines.append(_advantage_line("B vs A", matchup.get("B_vs_A")))

    notes = analysis.get("notes") or []
    if notes:
        lines.append("")
        lines.append("Notes")
        for n in notes:
            lines.append(f"- {n}")

    return "\n".join(lines)
