from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)


class InventoryEvent(str, Enum):
    """Notification names fired by an InventoryManager."""

    ITEM_ADDED = "item.added"
    ITEM_ADDED_FAILED = "item.added.failed"
    ITEM_REMOVED = "item.removed"
    ITEM_REMOVED_FAILED = "item.removed.failed"
    ITEM_DROPPED = "item.dropped"
    ITEM_DROPPED_FAILED = "item.dropped.failed"
    RESIZED = "resized"
    REBUILT = "rebuilt"


class InventoryEvents:
    """Synchronous listener registry owned by a single manager.

    Item events call listeners with the item; RESIZED and REBUILT call them
    with no arguments. Listeners run after the manager has finished mutating
    its state and in registration order. They must not call back into the
    same manager's mutating operations.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[InventoryEvent, List[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, event: InventoryEvent, callback: Callable[..., Any]) -> None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        event = InventoryEvent(event)
        self._subs[event].append(callback)
        logger.debug("Subscribed %s to '%s'", getattr(callback, "__name__", str(callback)), event.value)

    def unsubscribe(self, event: InventoryEvent, callback: Callable[..., Any]) -> None:
        event = InventoryEvent(event)
        if callback in self._subs.get(event, []):
            self._subs[event].remove(callback)
            logger.debug("Unsubscribed %s from '%s'", getattr(callback, "__name__", str(callback)), event.value)

    def emit(self, event: InventoryEvent, *args: Any) -> None:
        subs = list(self._subs.get(event, []))
        for cb in subs:
            try:
                cb(*args)
            except Exception:
                logger.exception("Unhandled exception in inventory listener for '%s'", event.value)

    def listener_count(self, event: InventoryEvent) -> int:
        return len(self._subs.get(InventoryEvent(event), []))

    def clear(self) -> None:
        self._subs.clear()
