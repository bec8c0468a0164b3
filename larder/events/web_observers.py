"""Web-facing observers for pantry events.

Subscribes to the GLOBAL_EVENT_BUS for pantry.low_stock, pantry.near_expiry
and pantry.deducted and keeps a small in-memory ring buffer of recent events
that the API serves at /api/pantry/alerts.

Each event gets an increasing integer id so clients can poll with
since=<last_id_seen>. A Lock guards the buffer (sync FastAPI endpoints run in
a thread pool); MAX_EVENTS caps memory.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY, PANTRY_DEDUCTED
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        }
        if isinstance(payload, dict):
            ing = payload.get('ingredient')
            if ing is not None and hasattr(ing, 'name'):
                evt['name'] = ing.name
                evt['unit'] = getattr(ing, 'unit', '')
                evt['quantity'] = getattr(ing, 'qty_num', None)
            for k in ('remaining', 'threshold', 'days_left', 'deducted'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in (PANTRY_LOW_STOCK, PANTRY_NEAR_EXPIRY, PANTRY_DEDUCTED):
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.info("Web observers for pantry events started")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), or the whole buffer when since is None."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']
