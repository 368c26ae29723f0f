# roach/render.py
#
# Plain-text rendering of one prefix record for the terminal.

import json
from dataclasses import asdict
from typing import Dict, List, Optional, Sequence

from roach.colors import CATEGORY_COLORS, ColorPalette
from roach.models import RPKI_INVALID, RPKI_VALID, PrefixRecord
from roach.origins import OriginEntry, reconcile_origins

STATUS_BADGES = {
    "success": "VALID",
    "warning": "WARNING",
    "danger": "INVALID",
    "info": "OK",
}


def _label(palette: ColorPalette, name: str) -> str:
    return palette.paint(f"{name}: ", "yellow", bold=True)


def _none(palette: ColorPalette) -> str:
    return palette.paint("None", "gray")


def render_origins(entries: Dict[int, OriginEntry], palette: ColorPalette) -> str:
    parts = []
    for entry in entries.values():
        text = palette.paint(f"AS{entry.asn}", "white")
        sources = entry.sources
        if sources:
            text += palette.paint(f"({', '.join(sources)})", "gray")
        parts.append(text)
    return ", ".join(parts) if parts else _none(palette)


def render_prefix(record: PrefixRecord, palette: Optional[ColorPalette] = None) -> str:
    palette = palette or ColorPalette(enabled=False)
    category = record.category_overall
    badge = STATUS_BADGES.get(category, category.upper())
    badge_color = CATEGORY_COLORS.get(category, "gray")

    lines: List[str] = [
        palette.paint(record.prefix, "cyan", bold=True)
        + palette.paint(f" ({record.rir}) ", "gray")
        + palette.paint(f"[{badge}]", badge_color, bold=True)
        + "  " + palette.paint("Score: ", "gray") + palette.paint(str(record.goodness_overall), "white", bold=True)
    ]

    lines.append(_label(palette, "Origins") + render_origins(reconcile_origins(record), palette))

    if record.bgp_origins:
        bgp = []
        for asn in record.bgp_origins:
            text = palette.paint(f"AS{asn}", "white")
            route = record.rpki_route_for(asn)
            if route is not None and route.rpki_status == RPKI_VALID:
                text += palette.paint("✓", "green")
            bgp.append(text)
        lines.append(_label(palette, "BGP") + ", ".join(bgp))
    else:
        lines.append(_label(palette, "BGP") + _none(palette))

    if record.rpki_routes:
        rpki = []
        for route in record.rpki_routes:
            text = palette.paint(f"AS{route.asn}", palette.irr_color("RPKI"))
            text += palette.paint("✓" if route.rpki_status == RPKI_VALID else "✗",
                                  palette.rpki_color(route.rpki_status))
            if route.rpki_max_length:
                text += palette.paint(f"/{route.rpki_max_length}", "gray")
            rpki.append(text)
        lines.append(_label(palette, "RPKI") + ", ".join(rpki))
    else:
        lines.append(_label(palette, "RPKI") + _none(palette))

    if record.irr_routes:
        irr = []
        for registry, routes in record.irr_routes.items():
            worst = RPKI_INVALID if any(r.rpki_status == RPKI_INVALID for r in routes) else ""
            irr.append(palette.paint(registry, palette.irr_color_with_rpki(registry, worst))
                       + palette.paint(f"({len(routes)})", "gray"))
        lines.append(_label(palette, "IRR") + ", ".join(irr))
    else:
        lines.append(_label(palette, "IRR") + _none(palette))

    if record.messages:
        msgs = [palette.paint(m.text, CATEGORY_COLORS.get(m.category, "blue")) for m in record.messages]
        lines.append(_label(palette, "Messages") + " | ".join(msgs))

    return "\n".join(lines)


def render_results(records: Sequence[PrefixRecord], palette: Optional[ColorPalette] = None) -> str:
    """Every record one after another, as printed by the one-shot query command."""
    palette = palette or ColorPalette(enabled=False)
    if not records:
        return palette.paint("⚠️ No results found", "yellow")
    blocks = []
    for index, record in enumerate(records, start=1):
        blocks.append(palette.paint(f"Result {index} of {len(records)}", "green") + "\n"
                      + render_prefix(record, palette))
    return "\n\n".join(blocks)


def records_to_json(records: Sequence[PrefixRecord]) -> str:
    out = []
    for record in records:
        item = asdict(record)
        item["origins"] = [
            {"asn": e.asn, "sources": e.sources, "rpki": e.rpki_status, "bgp": e.is_bgp_origin}
            for e in reconcile_origins(record).values()
        ]
        out.append(item)
    return json.dumps(out, indent=2, ensure_ascii=False)
