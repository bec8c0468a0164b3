from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from larder.domain.PantryItem import PantryItem
from larder.events.web_observers import get_events as get_web_events
from larder.infra.Pantry_Repository import PantryRepository
from larder.logic.pantry.analysis import compute_expiring_soon, compute_low_stock
from larder.utilities.validators import PantryItemInput

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


@router.get("")
def list_items(q: str = Query(default="", max_length=100)):
    items = PantryRepository().list_items(q)
    return {"ok": True, "items": [i.to_dict() for i in items]}


@router.post("")
def upsert_item(payload: PantryItemInput):
    item = PantryItem(
        item_id=payload.item_id or "",
        name=payload.name,
        qty_num=payload.qty_num,
        unit=payload.unit,
        qty_text=payload.qty_text,
        low_stock_threshold=payload.low_stock_threshold,
        expiration_date=payload.expiration_date,
        store_id=payload.store_id,
        category=payload.category,
        notes=payload.notes,
    )
    saved = PantryRepository().upsert_item(item)
    return {"ok": True, "item": saved.to_dict()}


@router.delete("/{item_id}")
def delete_item(item_id: str):
    if not PantryRepository().delete_item(item_id):
        raise HTTPException(status_code=404, detail="Pantry item not found")
    return {"ok": True}


@router.get("/low-stock")
def low_stock():
    warnings = compute_low_stock(PantryRepository().list_items())
    return {"ok": True, "items": [w.to_dict() for w in warnings]}


@router.get("/expiring")
def expiring(days: Optional[int] = Query(default=None, description="Window in days, clamped to 1..90")):
    return {"ok": True, "items": compute_expiring_soon(PantryRepository().list_items(), window=days)}


@router.get("/alerts")
def pantry_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent pantry alert events (low stock, near expiry, deductions).

    Client polling strategy:
        1. First call without 'since' to load current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/pantry/alerts?since=<next_cursor>
    """
    if since is None:
        snapshot = get_web_events(None)
        if not snapshot['events']:
            # Empty backlog (fresh process): seed it from current stock
            PantryRepository().load_pantry().scan_and_notify()
            snapshot = get_web_events(None)
        return snapshot
    return get_web_events(since)
