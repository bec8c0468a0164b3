"""Pantry aggregate: collection of PantryItem stock rows with low-stock / expiry notifications."""
import logging
from typing import List, Optional
from uuid import uuid4
from larder.domain.PantryItem import PantryItem
from larder.events.Event_Bus import GLOBAL_EVENT_BUS, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY, PANTRY_DEDUCTED
from larder.logic.shopping.normalizer import canonical_key
from larder.logic.shopping.units import canonicalize, convert
from larder.utilities.constants import DAYS_BEFORE_EXPIRY

logger = logging.getLogger(__name__)


class Pantry:
    def __init__(self):
        self.items: List[PantryItem] = []
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _notify_low_stock(self, item: PantryItem):
        self._event_bus.publish(PANTRY_LOW_STOCK, {
            "ingredient": item,
            "remaining": item.qty_num,
            "threshold": item.low_stock_threshold,
        })

    def _notify_near_expiry(self, item: PantryItem, days_left: int):
        self._event_bus.publish(PANTRY_NEAR_EXPIRY, {
            "ingredient": item,
            "days_left": days_left,
            "threshold": DAYS_BEFORE_EXPIRY,
        })

    def add_item(self, item: PantryItem):
        '''
        Adds a stock row to the pantry.
        '''
        if not item.item_id:
            item.item_id = f"pan_{uuid4().hex[:10]}"
        self.items.append(item)
        self._evaluate_item(item)
        return item

    def remove_item(self, item: PantryItem):
        '''
        Removes a stock row from the pantry.
        '''
        self.items.remove(item)

    def get_items(self):
        '''
        Returns the list of pantry rows.
        '''
        return self.items

    def find(self, item_id: str) -> Optional[PantryItem]:
        return next((i for i in self.items if i.item_id == item_id), None)

    def matching(self, key: str) -> List[PantryItem]:
        """Rows whose canonical ingredient key equals `key`, in (name, item id) order."""
        rows = [i for i in self.items if canonical_key(i.name) == key]
        return sorted(rows, key=lambda i: (i.name_lower, i.item_id))

    # --- Stock movements ---------------------------------------------------
    def deduct(self, key: str, required: float, unit: str) -> float:
        """Take up to `required` (expressed in `unit`) from matching rows.

        Returns the amount deducted, in `unit`. Rows whose unit cannot be
        converted are left untouched.
        """
        target = canonicalize(unit)
        if not key or not target or required is None or required <= 0:
            return 0.0
        remaining = float(required)
        deducted = 0.0
        for row in self.matching(key):
            if remaining <= 0:
                break
            if row.qty_num is None or row.qty_num <= 0 or not row.unit:
                continue
            same_unit = row.canonical_unit == target
            if same_unit:
                available = row.qty_num
            else:
                conv = convert(row.qty_num, row.unit, target)
                if not conv.ok:
                    continue
                available = conv.qty
            take = min(available, remaining)
            left = available - take
            # Remaining stock is written back in the row's own unit
            row.set_quantity(left if same_unit else convert(left, target, row.unit).qty)
            logger.debug("Deducted %s %s of %s from pantry row %s (left %s %s)",
                         take, target, key, row.item_id, row.qty_num, row.unit)
            deducted += take
            remaining -= take
            self._event_bus.publish(PANTRY_DEDUCTED, {
                "ingredient": row, "deducted": take, "unit": target,
            })
            self._evaluate_item(row)
        return deducted

    def add_back(self, name: str, qty: float, unit: str) -> PantryItem:
        """Return `qty` `unit` of an ingredient to stock, creating a row when nothing compatible exists."""
        target = canonicalize(unit)
        key = canonical_key(name)
        for row in self.matching(key):
            if not row.unit:
                row.unit = target
                row.set_quantity((row.qty_num or 0) + qty)
                return row
            if row.canonical_unit == target:
                row.set_quantity((row.qty_num or 0) + qty)
                return row
            conv = convert(qty, target, row.unit)
            if conv.ok:
                row.set_quantity((row.qty_num or 0) + conv.qty)
                return row
        item = PantryItem(name=(name or "").strip(), unit=target)
        item.set_quantity(qty)
        return self.add_item(item)

    # --- Evaluation logic --------------------------------------------------
    def _evaluate_item(self, item: PantryItem):
        if item.is_low_stock():
            self._notify_low_stock(item)
        days_left = item.days_until_expiry()
        if days_left is not None and days_left <= DAYS_BEFORE_EXPIRY:
            self._notify_near_expiry(item, days_left)

    def scan_and_notify(self):
        for item in self.items:
            self._evaluate_item(item)
        return self

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    def from_dict(self, data):
        '''
        Populates the Pantry from a list of dictionaries / rows (no notifications).
        '''
        for item_data in data:
            self.items.append(PantryItem.from_dict(item_data))
        return self

    def to_dict(self):
        '''
        Converts the Pantry to a list of dictionaries.
        '''
        return [item.to_dict() for item in self.items]
