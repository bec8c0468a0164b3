"""Shopping list builder.

build_shopping_list(db, start, end, user_id=None, deduct_pantry=True) turns the
meals planned in a date range into store-grouped shopping rows:

    plan -> ingredient lines -> aggregate -> group by store -> pantry deduction

The pantry load/deduct/save sequence runs under DEDUCTION_LOCK inside one
write transaction, so two concurrent builds never consume the same stock and
a failed save leaves the pantry untouched.
"""
from __future__ import annotations
import logging
import threading
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from larder.domain.AggregatedItem import AggregatedItem
from larder.domain.ShoppingList import ShoppingGroup, ShoppingList
from larder.events.Event_Bus import GLOBAL_EVENT_BUS
from larder.events.event_helpers import publish_shopping_list_built
from larder.infra.database import Database, get_database
from larder.infra.Pantry_Repository import PantryRepository
from larder.infra.Plan_Repository import PlanRepository
from larder.infra.Recipe_Repository import RecipeRepository
from larder.logic.pantry.deduction import deduct, low_stock_warnings
from larder.logic.shopping.aggregator import aggregate

logger = logging.getLogger(__name__)

DEDUCTION_LOCK = threading.Lock()


class _PendingEvents:
    """Holds pantry events until the transaction commits."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def publish(self, event_name: str, payload: Any):
        self.events.append((event_name, payload))

    def flush(self):
        for name, payload in self.events:
            GLOBAL_EVENT_BUS.publish(name, payload)
        self.events.clear()


def group_by_store(items: Iterable[AggregatedItem]) -> Dict[str, ShoppingGroup]:
    """Partition rows by store id ("" is the Unassigned group); groups keep creation order."""
    groups: Dict[str, ShoppingGroup] = {}
    for item in items:
        store_id = item.store_id or ""
        group = groups.get(store_id)
        if group is None:
            group = groups[store_id] = ShoppingGroup(store_id)
        group.add_item(item)
    return groups


def build_shopping_list(db: Optional[Database], start: date, end: date, user_id: Optional[int] = None,
                        deduct_pantry: bool = True) -> ShoppingList:
    """Build the shopping list for meals planned between `start` and `end` (inclusive).

    Args:
        db: Database to use (None -> process-wide default)
        start, end: date range; end before start raises ValueError
        user_id: restrict to one user's meals (None -> every user)
        deduct_pantry: False builds a preview that leaves pantry stock alone

    Raises:
        ValueError: invalid date range
        PersistenceError: storage unreadable or the pantry save failed (nothing is written)
    """
    if end < start:
        raise ValueError("end date must not be before start date")
    db = db or get_database()
    plans, recipes, pantry_repo = PlanRepository(db), RecipeRepository(db), PantryRepository(db)
    pending = _PendingEvents()

    with DEDUCTION_LOCK, db.transaction() as conn:
        recipe_ids = plans.recipe_ids_between(start, end, user_id, conn=conn)
        lines = recipes.list_ingredient_lines(recipe_ids, conn=conn)
        items = list(aggregate(lines).values())
        pantry = pantry_repo.load_pantry(conn).set_event_bus(pending)
        deductions = []
        if deduct_pantry:
            items, deductions = deduct(items, pantry)
            if deductions:
                pantry_repo.save_pantry(pantry, conn)
        warnings = low_stock_warnings(pantry)

    pending.flush()
    shopping_list = ShoppingList(group_by_store(items), deductions, warnings)
    logger.info("Built shopping list %s..%s: %d recipes, %d lines, %d rows, %d pantry deductions",
                start, end, len(recipe_ids), len(lines), len(items), len(deductions))
    publish_shopping_list_built(start.isoformat(), end.isoformat(), shopping_list)
    return shopping_list


__all__ = ['build_shopping_list', 'group_by_store', 'DEDUCTION_LOCK']
