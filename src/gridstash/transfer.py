from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .geometry import Point
from .items import InventoryItem
from .manager import InventoryManager

logger = logging.getLogger(__name__)


def _rollback(steps: List[Callable[[], bool]], what: str) -> None:
    for undo in reversed(steps):
        if not undo():
            logger.error("Rollback step failed while undoing %s; inventories may be out of sync", what)


def transfer(
    item: InventoryItem,
    source: InventoryManager,
    destination: InventoryManager,
    point: Optional[Point] = None,
) -> bool:
    """Move ``item`` from ``source`` into ``destination``.

    The item leaves the source through ``try_remove`` and enters the
    destination through ``try_add`` (first fit) or ``try_add_at`` (when
    ``point`` is given), so both containers validate it. If the destination
    refuses, the item goes back to its original anchor in the source and
    False is returned.
    """
    if source is destination or not source.contains(item):
        return False
    if point is None:
        if not destination.can_add(item):
            return False
    elif not destination.can_add_at(item, point):
        return False

    origin = item.position
    if not source.try_remove(item):
        return False
    added = destination.try_add(item) if point is None else destination.try_add_at(item, point)
    if added:
        logger.debug("Transferred %s to %s", item.id, item.position)
        return True
    _rollback([lambda: source.try_add_at(item, origin)], f"transfer of {item.id}")
    return False


def swap_into_slot(item: InventoryItem, inventory: InventoryManager, slot: InventoryManager) -> bool:
    """Equip ``item`` from ``inventory`` into the single-slot container ``slot``.

    Whatever the slot currently holds is sent back into the inventory. The
    item's own cells are freed first, so the previous occupant may land
    where the item used to be. On any refusal every completed step is undone
    and False is returned.
    """
    if not inventory.contains(item) or not slot.can_swap(item):
        return False

    undo: List[Callable[[], bool]] = []
    origin = item.position
    if not inventory.try_remove(item):
        return False
    undo.append(lambda: inventory.try_add_at(item, origin))

    for current in list(slot.all_items):
        position = current.position
        if not slot.try_remove(current):
            _rollback(undo, f"swap of {item.id}")
            return False
        undo.append(lambda current=current, position=position: slot.try_add_at(current, position))
        if not inventory.try_add(current):
            _rollback(undo, f"swap of {item.id}")
            return False
        undo.append(lambda current=current: inventory.try_remove(current))

    if not slot.try_add_at(item, (0, 0)):
        _rollback(undo, f"swap of {item.id}")
        return False
    logger.debug("Equipped %s", item.id)
    return True
