"""Event helper utilities.

Quick import:
    from larder.events.event_helpers import publish_shopping_list_built
"""
from __future__ import annotations
from .Event_Bus import create_event, SHOPPING_LIST_BUILT

__all__ = ['publish_shopping_list_built']


def publish_shopping_list_built(start: str, end: str, shopping_list):
    """Publish a summary of a finished shopping-list build.

    Payload structure:
        { 'start': <str>, 'end': <str>, 'groups': <int>, 'items': <int>, 'deductions': <int> }
    """
    create_event(SHOPPING_LIST_BUILT, {
        'start': start,
        'end': end,
        'groups': len(shopping_list.groups),
        'items': len(shopping_list.get_items()),
        'deductions': len(shopping_list.pantry_deductions),
    })
