"""Pantry analysis helpers over PantryItem rows (low stock, expiring soon)."""
from __future__ import annotations
from datetime import date as _date
from typing import Any, Dict, Iterable, List, Optional

from larder.domain.PantryItem import PantryItem
from larder.domain.ShoppingList import PantryWarning
from larder.utilities.constants import DATE_FORMAT, DAYS_BEFORE_EXPIRY, EXPIRING_WINDOW_RANGE

__all__ = ["compute_expiring_soon", "compute_low_stock", "clamp_window"]


def clamp_window(window: Optional[int]) -> int:
    lo, hi = EXPIRING_WINDOW_RANGE
    if window is None:
        window = DAYS_BEFORE_EXPIRY
    return max(lo, min(hi, int(window)))


def compute_expiring_soon(items: Iterable[PantryItem], *, window: Optional[int] = None,
                          today: Optional[_date] = None) -> List[Dict[str, Any]]:
    """Return rows expiring in <= window days (including already expired)."""
    days = clamp_window(window)
    today = today or _date.today()
    result: List[Dict[str, Any]] = []
    for item in items:
        days_left = item.days_until_expiry(today)
        if days_left is None or days_left > days:
            continue
        result.append({
            'itemId': item.item_id,
            'name': item.name,
            'quantity': item.qty_num,
            'unit': item.unit,
            'exp': item.expiration_date.strftime(DATE_FORMAT),
            'days_left': days_left,
        })
    result.sort(key=lambda x: (x['days_left'], x['name'].lower()))
    return result


def compute_low_stock(items: Iterable[PantryItem]) -> List[PantryWarning]:
    """Return rows whose stock is at or below their own non-zero threshold."""
    low = [PantryWarning(i.name, i.qty_num, i.low_stock_threshold, i.unit) for i in items if i.is_low_stock()]
    low.sort(key=lambda w: w.name.lower())
    return low
