from __future__ import annotations

import argparse
import json
import os
import tempfile
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from reportlab.lib import colors  # noqa: E402
from reportlab.lib.pagesizes import letter  # noqa: E402
from reportlab.lib.styles import getSampleStyleSheet  # noqa: E402
from reportlab.lib.units import inch  # noqa: E402
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # noqa: E402

TROOP_TYPES = ["tank", "air", "missile"]
SIDE_COLORS = {"A": "#2a6fdb", "B": "#db5a2a"}


def _load_analyses(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, list) else [data]


def _save_plot(fig, path: str) -> str:
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path


def _type_counts(side: Dict[str, Any]) -> List[int]:
    counts = {t: 0 for t in TROOP_TYPES}
    for slot in side.get("heroes") or []:
        t = slot.get("type")
        if t in counts:
            counts[t] += 1
    return [counts[t] for t in TROOP_TYPES]


def _plot_type_counts(analysis: Dict[str, Any], out_path: str) -> Optional[str]:
    sides = analysis.get("sides") or {}
    values = {name: _type_counts(sides.get(name) or {}) for name in ("A", "B")}
    if not any(sum(v) for v in values.values()):
        return None

    fig, ax = plt.subplots(figsize=(6.0, 3.0))
    width = 0.38
    xs = list(range(len(TROOP_TYPES)))
    for offset, name in ((-width / 2, "A"), (width / 2, "B")):
        ax.bar([x + offset for x in xs], values[name], width=width, label=f"Side {name}", color=SIDE_COLORS[name])
    ax.set_xticks(xs)
    ax.set_xticklabels(TROOP_TYPES)
    ax.set_ylim(0, 5)
    ax.set_ylabel("Heroes")
    ax.set_title("Troop Types per Side")
    ax.legend(loc="upper right", fontsize=8)
    return _save_plot(fig, out_path)


def _build_slot_table(side: Dict[str, Any]) -> Table:
    rows = [["Slot", "Hero", "Type", "Confidence"]]
    for slot in side.get("heroes") or []:
        rows.append(
            [
                str(slot.get("slot_index")),
                slot.get("hero_id") or "-",
                slot.get("type") or "-",
                f"{(slot.get('confidence') or 0):.2f}",
            ]
        )
    table = Table(rows, colWidths=[0.6 * inch, 2.4 * inch, 1.0 * inch, 1.0 * inch])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONT", (0, 0), (-1, -1), "Helvetica", 8),
            ]
        )
    )
    return table


def _text(value: Any) -> str:
    """Escape a value for reportlab paragraph markup."""
    return escape(str(value))


def _analysis_story(analysis: Dict[str, Any], styles, tmp: str, idx: int) -> List[Any]:
    story: List[Any] = []
    story.append(Paragraph(f"Report {_text(analysis.get('report_id') or '-')}", styles["Heading2"]))

    sides = analysis.get("sides") or {}
    for name in ("A", "B"):
        side = sides.get(name) or {}
        lineup = side.get("lineup") or {}
        story.append(Paragraph(f"Side {name}", styles["Heading3"]))
        story.append(_build_slot_table(side))
        story.append(
            Paragraph(
                f"Lineup <b>{_text(lineup.get('tier', 'none'))}</b> "
                f"(+{(lineup.get('stat_percent_bonus') or 0):.0%} HP/ATK/DEF) "
                f"• Dominant type: <b>{_text(side.get('dominant_type') or 'unknown')}</b>",
                styles["BodyText"],
            )
        )
        effects = (side.get("effect_summary") or {}).get("by_key") or {}
        if effects:
            story.append(
                Paragraph(
                    "Effects: " + ", ".join(f"{_text(k)} x{_text(v)}" for k, v in effects.items()),
                    styles["BodyText"],
                )
            )
        story.append(Spacer(1, 0.15 * inch))

    vs = (analysis.get("matchup") or {}).get("dominant_type_vs") or {}
    a_vs_b = vs.get("A_vs_B")
    if a_vs_b:
        story.append(
            Paragraph(
                f"Matchup: {_text(a_vs_b.get('attacker'))} vs {_text(a_vs_b.get('defender'))} is "
                f"<b>{_text(a_vs_b.get('label'))}</b> for side A "
                f"(effective power x{a_vs_b.get('effective_power_multiplier', 1):.2f}).",
                styles["BodyText"],
            )
        )

    img = _plot_type_counts(analysis, os.path.join(tmp, f"types_{idx}.png"))
    if img and os.path.exists(img):
        story.append(Image(img, width=6.0 * inch, height=3.0 * inch))

    for note in analysis.get("notes") or []:
        story.append(Paragraph(f"• {_text(note)}", styles["BodyText"]))
    return story


def build_pdf(analyses: List[Dict[str, Any]], output_path: str) -> None:
    styles = getSampleStyleSheet()
    story: List[Any] = [Paragraph("Battle Analysis", styles["Title"]), Spacer(1, 0.2 * inch)]

    with tempfile.TemporaryDirectory() as tmp:
        for idx, analysis in enumerate(analyses):
            if idx:
                story.append(PageBreak())
            story.extend(_analysis_story(analysis, styles, tmp, idx))

        doc = SimpleDocTemplate(output_path, pagesize=letter)
        doc.build(story)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render battle analysis JSON to PDF.")
    parser.add_argument("--input", required=True, help="Path to analysis JSON (object or list)")
    parser.add_argument("--output", required=True, help="Path to output PDF")
    args = parser.parse_args()
    build_pdf(_load_analyses(args.input), args.output)


if __name__ == "__main__":
    main()
