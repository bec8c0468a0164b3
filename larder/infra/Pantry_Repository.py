"""Pantry repository helpers (SQLite persistence)."""

import logging
from typing import Iterable, List, Optional

from larder.domain.Pantry import Pantry
from larder.domain.PantryItem import PantryItem
from larder.infra.database import Database, get_database
from larder.logic.shopping.normalizer import canonical_key

logger = logging.getLogger(__name__)

_UPSERT = """
INSERT INTO pantry(ItemId, Name, NameLower, QtyText, QtyNum, Unit, StoreId, Notes, Category,
                   expiration_date, low_stock_threshold, UpdatedAt)
VALUES(:ItemId, :Name, :NameLower, :QtyText, :QtyNum, :Unit, :StoreId, :Notes, :Category,
       :expiration_date, :low_stock_threshold, datetime('now'))
ON CONFLICT(ItemId) DO UPDATE SET
  Name=excluded.Name, NameLower=excluded.NameLower, QtyText=excluded.QtyText, QtyNum=excluded.QtyNum,
  Unit=excluded.Unit, StoreId=excluded.StoreId, Notes=excluded.Notes, Category=excluded.Category,
  expiration_date=excluded.expiration_date, low_stock_threshold=excluded.low_stock_threshold,
  UpdatedAt=excluded.UpdatedAt
"""


def _row_params(item: PantryItem) -> dict:
    d = item.to_dict()
    d["expiration_date"] = d["expiration_date"] or None
    return d


class PantryRepository:
    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def load_pantry(self, conn=None) -> Pantry:
        """Load every stock row into a Pantry aggregate (no notifications fired)."""
        sql = "SELECT * FROM pantry ORDER BY NameLower ASC, ItemId ASC"
        if conn is not None:
            rows = conn.execute(sql).fetchall()
        else:
            with self.db.connection() as own:
                rows = own.execute(sql).fetchall()
        return Pantry().from_dict(rows)

    def save_items(self, items: Iterable[PantryItem], conn=None) -> int:
        params = [_row_params(i) for i in items]
        with self.db.transaction(conn) as c:
            c.executemany(_UPSERT, params)
        return len(params)

    def list_items(self, q: str = "") -> List[PantryItem]:
        items = self.load_pantry().get_items()
        needle = (q or "").strip().lower()
        if needle:
            items = [i for i in items if needle in i.name_lower]
        return items

    def upsert_item(self, item: PantryItem) -> PantryItem:
        pantry = Pantry()
        if not item.item_id:
            pantry.add_item(item)
        else:
            pantry.items.append(item)
            pantry.scan_and_notify()
        self.save_items([item])
        logger.info("Saved pantry item %s (%s)", item.item_id, item.name)
        return item

    def delete_item(self, item_id: str) -> bool:
        with self.db.transaction() as conn:
            cur = conn.execute("DELETE FROM pantry WHERE ItemId=?", (item_id,))
        return cur.rowcount > 0

    def decrement(self, name: str, qty: float, unit: str) -> float:
        """Take stock for one ingredient outside a shopping-list build. Returns the amount taken."""
        with self.db.transaction() as conn:
            pantry = self.load_pantry(conn)
            deducted = pantry.deduct(canonical_key(name), qty, unit)
            self.save_items(pantry.get_items(), conn)
        return deducted

    def increment(self, name: str, qty: float, unit: str) -> PantryItem:
        """Return an amount to stock (e.g. an item that was not bought after all)."""
        with self.db.transaction() as conn:
            pantry = self.load_pantry(conn)
            item = pantry.add_back(name, qty, unit)
            self.save_items([item], conn)
        logger.info("Returned %s %s of %s to pantry", qty, unit, name)
        return item

    def save_pantry(self, pantry: Pantry, conn=None) -> int:
        return self.save_items(pantry.get_items(), conn)
