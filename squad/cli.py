from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .analyzer import analyze_many
from .catalog import CatalogError, HeroIndex, load_hero_index
from .render import render_text

logger = logging.getLogger(__name__)


def _rows_from_input(raw: Any, report_id: Optional[str], fallback_id: str) -> List[Dict[str, Any]]:
    """Accept a bare parsed report, a stored row, or a list of rows."""
    if isinstance(raw, list):
        return [r for r in raw if isinstance(r, dict)]
    if isinstance(raw, dict) and "parsed" in raw:
        return [{"id": report_id or raw.get("id") or fallback_id, "parsed": raw.get("parsed")}]
    return [{"id": report_id or fallback_id, "parsed": raw}]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Battle report analyzer")
    parser.add_argument("--input", required=True, help="Path to parsed report JSON")
    parser.add_argument("--report-id", default=None, help="Report id when the input has none")
    parser.add_argument("--catalog", default=None, help="Path to hero catalog JSON")
    parser.add_argument("--no-catalog", action="store_true", help="Skip effect summaries")
    parser.add_argument("--output", default=None, help="Path to output file")
    parser.add_argument(
        "--output-format", choices=["json", "text", "pdf"], default="json", help="Output format"
    )
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args()


def main() -> None:
    load_dotenv()
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else os.environ.get("SQUAD_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    hero_index: Optional[HeroIndex] = None
    if not args.no_catalog:
        try:
            hero_index = load_hero_index(args.catalog)
        except CatalogError as exc:
            raise SystemExit(f"Could not load hero catalog: {exc}")

    with open(args.input, "r", encoding="utf-8") as f:
        raw = json.load(f)

    rows = _rows_from_input(raw, args.report_id, Path(args.input).stem)
    analyses = analyze_many(rows, hero_index)
    payload = [a.to_dict() for a in analyses]
    logger.debug("Analyzed %d report(s) from %s", len(payload), args.input)

    if args.output_format == "pdf":
        if not args.output:
            raise SystemExit("--output is required for pdf output.")
        from .report_pdf import build_pdf

        build_pdf(payload, args.output)
        return

    if args.output_format == "json":
        output_text = json.dumps(payload[0] if len(payload) == 1 else payload, indent=2)
    else:
        output_text = "\n\n".join(render_text(a) for a in payload)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)


if __name__ == "__main__":
    main()
