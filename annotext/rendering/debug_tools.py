"""
Debug helpers for seeing what the renderer does at each unit.

These utilities are intended for troubleshooting overlap/reopen behavior. They
do not perform any I/O and can be safely used in tests.
"""

from __future__ import annotations

import html
from typing import Dict, Iterable, List, Optional, Sequence

from tinyhtml import h, raw

from annotext.domain import Annotation, UnitLike

from .options import RenderConfig
from .registry import default_registry
from .renderer import walk
from .renderer_iface import RuleLookup


def _label(ann: Annotation, registry: RuleLookup) -> str:
    known = registry.lookup(ann.type) is not None
    return f"{ann.type}#{ann.id}" + ("" if known else "(unregistered)")


def _labels(anns: Sequence[Annotation], registry: RuleLookup) -> List[str]:
    return [_label(a, registry) for a in anns]


def map_transitions(
    units: Iterable[UnitLike],
    registry: Optional[RuleLookup] = None,
    config: Optional[RenderConfig] = None,
) -> List[Dict[str, object]]:
    """Return one dict per renderer step.

    Each dict contains:
      - index: unit index (the end index for the final drain step)
      - char: the unit's character ("" for the drain step)
      - closes / opens: annotation labels, ``type#id``
      - markup: tags emitted before the character
      - text: escaped character
    """
    registry = registry if registry is not None else default_registry()
    out: List[Dict[str, object]] = []
    for step in walk(units, registry, config):
        out.append(
            {
                "index": step.index,
                "char": step.char,
                "closes": _labels(step.closes, registry),
                "opens": _labels(step.opens, registry),
                "markup": step.markup,
                "text": step.text,
            }
        )
    return out


def _pretty_char(ch: str) -> str:
    if ch == "":
        return "(end)"
    return ch.replace("\n", "⏎").replace("\t", "⇥")


def dump_transitions_text(
    units: Iterable[UnitLike], registry: Optional[RuleLookup] = None
) -> str:
    """Return a human-readable dump of each step's closes and opens."""
    rows = []
    for row in map_transitions(units, registry):
        closes = ", ".join(row["closes"]) or "-"  # type: ignore[arg-type]
        opens = ", ".join(row["opens"]) or "-"  # type: ignore[arg-type]
        rows.append(
            f"[{row['index']:04d}] char=“{_pretty_char(str(row['char']))}” "
            f"close={closes} open={opens} markup={row['markup']!s}"
        )
    return "\n".join(rows)


def annotate_units_html(
    units: Iterable[UnitLike], registry: Optional[RuleLookup] = None
) -> str:
    """Return a small HTML page marking every unit where tags change.

    Units are shown as plain text; a highlighted marker precedes each unit
    whose step closes or opens something, with the details in its tooltip.
    """
    palette = [
        "#FFF3CD",  # yellow
        "#D1ECF1",  # cyan
        "#F8D7DA",  # pink
        "#D4EDDA",  # green
    ]
    cells: List[str] = []
    changes = 0
    for row in map_transitions(units, registry):
        closes: List[str] = row["closes"]  # type: ignore[assignment]
        opens: List[str] = row["opens"]  # type: ignore[assignment]
        if closes or opens:
            tip = f"unit {row['index']} | close: {', '.join(closes) or '-'} | open: {', '.join(opens) or '-'}"
            bg = palette[changes % len(palette)]
            changes += 1
            cells.append(
                h("span", **{"class": "step", "title": tip, "style": f"background:{bg}"})(
                    "|"
                ).render()
            )
        cells.append(html.escape(_pretty_char(str(row["char"]))) if row["char"] else "")

    return (
        '<!doctype html><meta charset="utf-8">'
        + h("style")(
            raw(
                "body{font-family:-apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif;line-height:1.5}"
                ".step{padding:0 .15em;margin:0 .05em;border-radius:.2em;color:#960}"
                "pre{white-space:pre-wrap;border:1px solid #eee;padding:.5em}"
            )
        ).render()
        + h("pre")(raw("".join(cells))).render()
    )
