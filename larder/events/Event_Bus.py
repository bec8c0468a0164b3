"""Simple Event Bus / Observer implementation for pantry and shopping-list events.

Event names:
  pantry.low_stock     -> payload {"ingredient": PantryItem, "remaining": float, "threshold": float}
  pantry.near_expiry   -> payload {"ingredient": PantryItem, "days_left": int, "threshold": int}
  pantry.deducted      -> payload {"ingredient": PantryItem, "deducted": float, "unit": str}
  shopping_list.built  -> payload {"start": str, "end": str, "groups": int, "deductions": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

PANTRY_LOW_STOCK = "pantry.low_stock"
PANTRY_NEAR_EXPIRY = "pantry.near_expiry"
PANTRY_DEDUCTED = "pantry.deducted"
SHOPPING_LIST_BUILT = "shopping_list.built"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception as e:  # a broken listener must not abort the publisher
                logger.error("Error delivering %s to %s: %s", event_name, cb, e)


GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS', 'create_event',
    'PANTRY_LOW_STOCK', 'PANTRY_NEAR_EXPIRY', 'PANTRY_DEDUCTED', 'SHOPPING_LIST_BUILT',
]
