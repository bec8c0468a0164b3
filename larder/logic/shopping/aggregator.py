"""Aggregation of ingredient lines into shopping-list rows.

aggregate(lines) groups lines by canonical ingredient key and merges their
quantities:
  - same canonical unit          -> numeric sum
  - compatible units (vol/mass)  -> convert into the group's unit, then sum
  - incompatible units           -> "a + b" text; the group's qty_num becomes None for good
  - group without a number       -> adopts the first numeric line it meets
Category, store and raw example are taken from the first line of a group.
Pure: no I/O, never raises on malformed quantities.
"""
from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, Optional

from larder.domain.AggregatedItem import AggregatedItem
from larder.domain.IngredientLine import IngredientLine
from larder.logic.shopping.normalizer import canonical_key
from larder.logic.shopping.quantity_parser import format_qty
from larder.logic.shopping.units import canonicalize, convert

logger = logging.getLogger(__name__)

__all__ = ["aggregate", "merge_line"]


def _number(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def _line_qty_text(line: IngredientLine, qty: Optional[float]) -> str:
    if line.qty_text:
        return line.qty_text
    return format_qty(qty, line.unit) if qty is not None else ""


def merge_line(cur: AggregatedItem, line: IngredientLine):
    """Fold one more line into an existing group."""
    cur_qty = _number(cur.qty_num)
    new_qty = _number(line.qty_num)
    cur_unit = canonicalize(cur.unit)
    new_unit = canonicalize(line.unit)
    if cur_qty is not None and new_qty is not None and cur_unit and new_unit:
        if cur_unit == new_unit:
            cur.qty_num = cur_qty + new_qty
            cur.qty_text = format_qty(cur.qty_num, cur.unit)
        else:
            converted = convert(new_qty, new_unit, cur_unit)
            if converted.ok:
                cur.qty_num = cur_qty + converted.qty
                cur.qty_text = format_qty(cur.qty_num, cur.unit)
            else:
                logger.debug("Incompatible units for %s: %s vs %s", cur.canonical_key, cur_unit, new_unit)
                cur_text = cur.qty_text or format_qty(cur_qty, cur.unit)
                cur.qty_text = f"{cur_text} + {_line_qty_text(line, new_qty)}"
                cur.qty_num = None
                cur.text_only = True
    elif cur_qty is None and new_qty is not None and not cur.text_only:
        cur.qty_num = new_qty
        cur.unit = line.unit or cur.unit
        cur.qty_text = format_qty(new_qty, cur.unit)
    else:
        new_text = _line_qty_text(line, new_qty)
        if cur.qty_text and new_text:
            cur.qty_text = f"{cur.qty_text} + {new_text}"
        elif new_text:
            cur.qty_text = new_text
    cur.fold(line)


def aggregate(lines: Iterable[IngredientLine]) -> Dict[str, AggregatedItem]:
    """Group ingredient lines by canonical key, preserving first-seen group order."""
    groups: Dict[str, AggregatedItem] = {}
    for line in lines:
        legacy_key = (line.name or line.raw_text or "").strip().lower()
        if not legacy_key:
            continue
        key = canonical_key(legacy_key)
        cur = groups.get(key)
        if cur is None:
            groups[key] = AggregatedItem.seed(key, line)
            groups[key].qty_num = _number(line.qty_num)
        else:
            merge_line(cur, line)
    logger.debug("Aggregated ingredient lines into %d groups", len(groups))
    return groups
