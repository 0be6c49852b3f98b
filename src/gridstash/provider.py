from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Set

from .items import InventoryItem, ItemType

logger = logging.getLogger(__name__)


class RenderMode(str, Enum):
    SINGLE = 'single'
    GRID = 'grid'


class InventoryProvider(Protocol):
    """Policy and backing store queried by an InventoryManager.

    A provider knows which items it holds and whether they may come or go,
    but nothing about where they sit on the grid. Mutating calls either
    succeed and update the provider's own store, or return False and leave
    it untouched.
    """

    def item_count(self) -> int:
        ...

    def get_item(self, index: int) -> InventoryItem:
        ...

    def is_full(self) -> bool:
        ...

    def can_admit(self, item: InventoryItem) -> bool:
        """Whether this item (by type, count, ...) is allowed in at all."""

    def admit(self, item: InventoryItem) -> bool:
        ...

    def can_release(self, item: InventoryItem) -> bool:
        """Whether the item may be removed to be handed to another container."""

    def release(self, item: InventoryItem) -> bool:
        ...

    def can_discard(self, item: InventoryItem) -> bool:
        """Whether the item may be dropped into the world."""

    def discard(self, item: InventoryItem) -> bool:
        ...

    def render_mode(self) -> RenderMode:
        ...


class ListInventoryProvider:
    """Default list-backed provider.

    - ``max_items``: capacity by count; -1 (or any value <= 0) means unlimited
    - ``allowed_type``: only items of this type are admitted; ItemType.ANY admits all
    - ``locked_types``: item types that may be released but never discarded
    """

    def __init__(
        self,
        render_mode: RenderMode = RenderMode.GRID,
        max_items: int = -1,
        allowed_type: ItemType = ItemType.ANY,
        items: Optional[Iterable[InventoryItem]] = None,
        locked_types: Optional[Iterable[ItemType]] = None,
    ) -> None:
        self._render_mode = RenderMode(render_mode)
        self.max_items = max_items
        self.allowed_type = ItemType(allowed_type)
        self.locked_types: Set[ItemType] = {ItemType(t) for t in (locked_types or ())}
        self._items: List[InventoryItem] = []
        for item in items or ():
            if item not in self._items:
                self._items.append(item)

    @property
    def items(self) -> List[InventoryItem]:
        return list(self._items)

    def item_count(self) -> int:
        return len(self._items)

    def get_item(self, index: int) -> InventoryItem:
        return self._items[index]

    def is_full(self) -> bool:
        return self.max_items > 0 and len(self._items) >= self.max_items

    def can_admit(self, item: InventoryItem) -> bool:
        return self.allowed_type == ItemType.ANY or item.type_tag == self.allowed_type

    def admit(self, item: InventoryItem) -> bool:
        if not self.can_admit(item) or self.is_full():
            logger.debug('Provider refused %s (type=%s, count=%d)', item.id, item.type_tag.value, len(self._items))
            return False
        if item not in self._items:
            self._items.append(item)
        return True

    def can_release(self, item: InventoryItem) -> bool:
        return item in self._items

    def release(self, item: InventoryItem) -> bool:
        try:
            self._items.remove(item)
            return True
        except ValueError:
            return False

    def can_discard(self, item: InventoryItem) -> bool:
        return item in self._items and item.type_tag not in self.locked_types

    def discard(self, item: InventoryItem) -> bool:
        if item.type_tag in self.locked_types:
            return False
        return self.release(item)

    def render_mode(self) -> RenderMode:
        return self._render_mode

    def replace_items(self, items: Iterable[InventoryItem]) -> None:
        """Swap the backing store out-of-band; the manager must ``rebuild()`` afterwards."""
        self._items = []
        for item in items:
            if item not in self._items:
                self._items.append(item)
        logger.debug('Provider backing store replaced (%d items)', len(self._items))
