"""Store repository: the shops an item can be assigned to, ordered by priority."""
import logging
import re
from typing import List, Optional

from larder.infra.database import Database, get_database
from larder.utilities.constants import DEFAULT_STORE_PRIORITY

logger = logging.getLogger(__name__)


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")


class StoreRepository:
    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_database()

    def list_stores(self) -> List[dict]:
        with self.db.connection() as conn:
            rows = conn.execute(
                "SELECT StoreId, Name, Priority FROM stores ORDER BY Priority ASC, Name ASC").fetchall()
        return [dict(r) for r in rows]

    def add_store(self, name: str, priority: int = DEFAULT_STORE_PRIORITY) -> dict:
        store_id = _slug(name)
        if not store_id:
            raise ValueError("Store name is required")
        with self.db.transaction() as conn:
            conn.execute(
                """INSERT INTO stores(StoreId, Name, Priority, UpdatedAt) VALUES(?,?,?,datetime('now'))
                   ON CONFLICT(StoreId) DO UPDATE SET Name=excluded.Name, Priority=excluded.Priority,
                     UpdatedAt=excluded.UpdatedAt""",
                (store_id, name.strip(), priority))
        logger.info("Saved store %s", store_id)
        return {"StoreId": store_id, "Name": name.strip(), "Priority": priority}

    def delete_store(self, store_id: str) -> bool:
        """Remove a store; lines pointing at it fall back to Unassigned."""
        with self.db.transaction() as conn:
            conn.execute("UPDATE ingredients SET StoreId='' WHERE StoreId=?", (store_id,))
            cur = conn.execute("DELETE FROM stores WHERE StoreId=?", (store_id,))
        return cur.rowcount > 0
