"""PantryItem domain entity: one stock row (name, quantity, unit, optional expiration date, low-stock threshold)."""
from datetime import date, datetime
from typing import Optional
from larder.utilities.constants import DATE_FORMAT
from larder.logic.shopping.quantity_parser import format_qty, parse_qty_text
from larder.logic.shopping.units import canonicalize


class PantryItem:
    def __init__(self, item_id: str = "", name: str = "", qty_num: Optional[float] = None, unit: str = "",
                 qty_text: str = "", low_stock_threshold: Optional[float] = None,
                 expiration_date: Optional[date] = None, store_id: str = "", category: str = "",
                 notes: str = ""):
        self.item_id = item_id
        self.name = name
        self.qty_num = qty_num
        self.unit = unit
        self.qty_text = qty_text
        self.low_stock_threshold = low_stock_threshold
        self.expiration_date = expiration_date
        self.store_id = store_id
        self.category = category
        self.notes = notes
        # Older rows only carry a free-text quantity
        if self.qty_num is None and self.qty_text:
            parsed_qty, parsed_unit = parse_qty_text(self.qty_text)
            self.qty_num = parsed_qty
            if not self.unit:
                self.unit = parsed_unit

    @property
    def name_lower(self) -> str:
        return (self.name or "").strip().lower()

    @property
    def canonical_unit(self) -> str:
        return canonicalize(self.unit)

    def set_quantity(self, quantity: float):
        '''Sets the absolute quantity and refreshes the display text (never below zero).'''
        self.qty_num = max(0.0, float(quantity))
        self.qty_text = format_qty(round(self.qty_num, 4), self.unit)

    def is_low_stock(self) -> bool:
        th = self.low_stock_threshold
        if th is None or th <= 0 or self.qty_num is None:
            return False
        return self.qty_num <= th

    def days_until_expiry(self, today: Optional[date] = None) -> Optional[int]:
        if not isinstance(self.expiration_date, date):
            return None
        return (self.expiration_date - (today or date.today())).days

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.qty_text or format_qty(self.qty_num, self.unit)}"]
        if self.expiration_date:
            parts.append(f"Exp: {self.expiration_date.strftime(DATE_FORMAT)}")
        if self.low_stock_threshold:
            parts.append(f"Low at: {self.low_stock_threshold:g}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a PantryItem from a dictionary or a `pantry` table row. Ignores unknown keys.'''
        d = dict(data) if data is not None else {}
        exp = d.get("expiration_date")
        if exp and not isinstance(exp, (datetime, date)):
            try:
                exp = datetime.strptime(str(exp), DATE_FORMAT).date()
            except ValueError:
                exp = None
        elif isinstance(exp, datetime):
            exp = exp.date()

        def _num(v):
            if v is None or v == "":
                return None
            try:
                return float(v)
            except (TypeError, ValueError):
                return None

        return PantryItem(
            item_id=str(d.get("ItemId") or d.get("item_id") or ""),
            name=str(d.get("Name") or d.get("name") or "").strip(),
            qty_num=_num(d.get("QtyNum", d.get("qty_num"))),
            unit=str(d.get("Unit") or d.get("unit") or "").strip(),
            qty_text=str(d.get("QtyText") or d.get("qty_text") or "").strip(),
            low_stock_threshold=_num(d.get("low_stock_threshold")),
            expiration_date=exp or None,
            store_id=str(d.get("StoreId") or d.get("store_id") or ""),
            category=str(d.get("Category") or d.get("category") or ""),
            notes=str(d.get("Notes") or d.get("notes") or ""),
        )

    def to_dict(self):
        '''Converts the PantryItem to the API / persistence shape.'''
        if isinstance(self.expiration_date, (datetime, date)):
            exp_val = self.expiration_date.strftime(DATE_FORMAT)
        else:
            exp_val = ""
        return {
            "ItemId": self.item_id,
            "Name": self.name,
            "NameLower": self.name_lower,
            "QtyNum": self.qty_num,
            "Unit": self.unit,
            "QtyText": self.qty_text or format_qty(self.qty_num, self.unit),
            "low_stock_threshold": self.low_stock_threshold,
            "expiration_date": exp_val,
            "StoreId": self.store_id,
            "Category": self.category,
            "Notes": self.notes,
        }
