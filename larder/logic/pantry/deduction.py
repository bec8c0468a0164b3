"""Pantry deduction step.

Runs after aggregation: each shopping-list row with a numeric quantity and a
known unit is covered, fully or partly, from matching pantry stock. The
pantry aggregate is mutated in place; persisting it is the caller's job.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from larder.domain.AggregatedItem import AggregatedItem
from larder.domain.Pantry import Pantry
from larder.domain.ShoppingList import PantryDeduction, PantryWarning
from larder.logic.pantry.analysis import compute_low_stock
from larder.logic.shopping.quantity_parser import format_qty
from larder.logic.shopping.units import canonicalize
from larder.utilities.constants import FROM_PANTRY_TEXT

logger = logging.getLogger(__name__)

__all__ = ["deduct", "apply_deduction", "low_stock_warnings"]

# float noise left over from unit conversion
_EPSILON = 1e-6


def apply_deduction(item: AggregatedItem, deducted: float) -> None:
    """Rewrite a row's quantity after `deducted` of it came from the pantry."""
    required = item.qty_num or 0.0
    if deducted >= required - _EPSILON:
        item.qty_num = 0
        item.qty_text = FROM_PANTRY_TEXT
        item.from_pantry = True
        return
    remaining = required - deducted
    item.qty_num = remaining
    item.qty_text = f"{format_qty(remaining, item.unit)} ({format_qty(deducted)} from pantry)"
    item.partial_pantry = True


def deduct(items: Iterable[AggregatedItem], pantry: Pantry) -> Tuple[List[AggregatedItem], List[PantryDeduction]]:
    """Cover rows from pantry stock. Returns the rows and one PantryDeduction per covered row."""
    rows = list(items)
    deductions: List[PantryDeduction] = []
    for item in rows:
        required = item.qty_num
        unit = canonicalize(item.unit)
        if item.text_only or required is None or required <= 0 or not unit:
            continue
        taken = pantry.deduct(item.canonical_key, required, unit)
        if taken <= 0:
            continue
        deductions.append(PantryDeduction(item.canonical_key, taken, unit, required))
        apply_deduction(item, taken)
        logger.info("Pantry covered %s of %s %s for %s", format_qty(taken), format_qty(required), unit,
                    item.canonical_key)
    return rows, deductions


def low_stock_warnings(pantry: Pantry) -> List[PantryWarning]:
    """Every stock row at or below its non-zero threshold, whether or not it was on the list."""
    return compute_low_stock(pantry.get_items())
