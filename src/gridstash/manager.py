from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .events import InventoryEvent, InventoryEvents
from .geometry import Point, Rect, fits_inside, overlaps
from .items import InventoryItem
from .provider import InventoryProvider, RenderMode

logger = logging.getLogger(__name__)


def _check_dimensions(width: int, height: int) -> None:
    if int(width) < 1 or int(height) < 1:
        raise ValueError(f"Inventory size must be at least 1x1, got {width}x{height}")


class InventoryManager:
    """Places items on a bounded W x H grid (or a single slot) for one provider.

    The manager owns the cached item list and all placement geometry; the
    provider owns admission policy and the backing store. Every mutating
    operation either succeeds completely, updates the cache with a silent
    rebuild and fires its event, or changes nothing and fires the matching
    failure event. Expected rejections return False rather than raising.

    Single-threaded by contract: callers embedding this in a threaded host must
    serialize access themselves. Listeners are notified after the mutation is
    complete and must not re-enter this manager's mutating operations.

    Known exception to containment: an item evicted by ``resize`` whose drop is
    refused by the provider (or that cannot be dropped) stays tracked even
    though it no longer fits the rectangle.
    """

    def __init__(self, provider: Optional[InventoryProvider], width: int, height: int) -> None:
        if provider is None:
            raise ValueError("provider is required")
        _check_dimensions(width, height)
        self._provider: Optional[InventoryProvider] = provider
        self._width = int(width)
        self._height = int(height)
        self._rect = Rect(0, 0, self._width, self._height)
        self._items: List[InventoryItem] = []
        self.events = InventoryEvents()
        self.rebuild()
        self.resize(width, height)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def provider(self) -> Optional[InventoryProvider]:
        return self._provider

    @property
    def is_disposed(self) -> bool:
        return self._provider is None

    @property
    def render_mode(self) -> Optional[RenderMode]:
        if self._provider is None:
            return None
        return self._provider.render_mode()

    @property
    def all_items(self) -> Tuple[InventoryItem, ...]:
        return tuple(self._items)

    def contains(self, item: Optional[InventoryItem]) -> bool:
        return item is not None and item in self._items

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------
    def resize(self, new_width: int, new_height: int) -> None:
        """Change the grid size and drop every item that no longer fits.

        Fires RESIZED once, after all evictions have been attempted.
        """
        _check_dimensions(new_width, new_height)
        self._width = int(new_width)
        self._height = int(new_height)
        self._rect = Rect(0, 0, self._width, self._height)
        for item in list(self._items):
            if fits_inside(self._rect, item.min_point, item.max_point):
                continue
            if self.try_drop(item):
                logger.info("Evicted %s after resize to %dx%d", item.id, self._width, self._height)
            else:
                logger.warning(
                    "Could not evict %s after resize to %dx%d; it stays tracked out of bounds",
                    item.id, self._width, self._height,
                )
        self.events.emit(InventoryEvent.RESIZED)

    # ------------------------------------------------------------------
    # Provider sync
    # ------------------------------------------------------------------
    def rebuild(self, silent: bool = False) -> None:
        """Re-read the full item list from the provider.

        ``silent`` suppresses the REBUILT notification; mutating operations use
        it internally since they fire their own, more specific event.
        """
        if self._provider is None:
            logger.warning("Inventory provider is gone; clearing cached items")
            self._items = []
            return
        provider = self._provider
        self._items = [provider.get_item(i) for i in range(provider.item_count())]
        if not silent:
            self.events.emit(InventoryEvent.REBUILT)

    def dispose(self) -> None:
        self._provider = None
        self._items = []
        logger.debug("Inventory manager disposed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def is_full(self) -> bool:
        if self._provider is None or self._provider.is_full():
            return True
        if self._provider.render_mode() == RenderMode.SINGLE:
            return False
        for x in range(self._width):
            for y in range(self._height):
                if self.get_at_point((x, y)) is None:
                    return False
        return True

    def get_at_point(self, point: Point) -> Optional[InventoryItem]:
        if self._provider is None:
            return None
        if self._provider.render_mode() == RenderMode.SINGLE and self._provider.is_full() and self._items:
            return self._items[0]
        for item in self._items:
            if item.contains(point):
                return item
        return None

    def get_at_region(self, point: Point, size: Tuple[int, int]) -> List[InventoryItem]:
        """Distinct items covering any cell of the ``size`` region anchored at ``point``."""
        found: List[InventoryItem] = []
        for x in range(size[0]):
            for y in range(size[1]):
                item = self.get_at_point((point[0] + x, point[1] + y))
                if item is not None and item not in found:
                    found.append(item)
        return found

    def center_position(self, item: InventoryItem) -> Point:
        return ((self._width - item.width) // 2, (self._height - item.height) // 2)

    def does_item_fit(self, item: InventoryItem) -> bool:
        return item.width <= self._width and item.height <= self._height

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def find_first_fit(self, item: InventoryItem) -> Optional[Point]:
        """Return the first anchor that accepts ``item``, or None.

        Candidates are scanned with x as the outer loop and y as the inner
        loop, so the lowest x wins, then the lowest y.
        """
        if not self.does_item_fit(item):
            return None
        for x in range(self._width - item.width + 1):
            for y in range(self._height - item.height + 1):
                if self.can_add_at(item, (x, y)):
                    return (x, y)
        return None

    def can_add_at(self, item: InventoryItem, point: Point) -> bool:
        """Test whether ``item`` could sit at ``point``.

        The item is moved to ``point`` for the geometry checks and always moved
        back before returning. It is skipped in the overlap scan, so a held
        item can be asked whether it could move to another spot.
        """
        provider = self._provider
        if provider is None or not provider.can_admit(item) or provider.is_full():
            return False
        if provider.render_mode() == RenderMode.SINGLE:
            return True

        previous = item.position
        item.position = (int(point[0]), int(point[1]))
        try:
            if not fits_inside(self._rect, item.min_point, item.max_point):
                return False
            return not any(other is not item and overlaps(item, other) for other in self._items)
        finally:
            item.position = previous

    def can_add(self, item: Optional[InventoryItem]) -> bool:
        if item is None or self._provider is None or self.contains(item):
            return False
        return self.find_first_fit(item) is not None

    def can_swap(self, item: InventoryItem) -> bool:
        """Whether a single-slot container could take ``item`` in exchange for its occupant."""
        if self._provider is None:
            return False
        return (
            self._provider.render_mode() == RenderMode.SINGLE
            and self.does_item_fit(item)
            and self._provider.can_admit(item)
        )

    def can_remove(self, item: InventoryItem) -> bool:
        return self.contains(item) and self._provider is not None and self._provider.can_release(item)

    def can_drop(self, item: InventoryItem) -> bool:
        return (
            self.contains(item)
            and self._provider is not None
            and self._provider.can_discard(item)
            and item.can_drop
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _final_position(self, item: InventoryItem, point: Point) -> Point:
        mode = self._provider.render_mode()
        if mode == RenderMode.SINGLE:
            return self.center_position(item)
        if mode == RenderMode.GRID:
            return (int(point[0]), int(point[1]))
        raise NotImplementedError(f"Render mode {mode!r} is not supported")

    def try_add_at(self, item: InventoryItem, point: Point) -> bool:
        """Place ``item`` at ``point`` (ignored in single mode, where it is centered)."""
        if self.contains(item) or not self.can_add_at(item, point):
            logger.debug("Cannot place %s at %s", item.id, tuple(point))
            self.events.emit(InventoryEvent.ITEM_ADDED_FAILED, item)
            return False
        position = self._final_position(item, point)
        if not self._provider.admit(item):
            logger.debug("Provider refused %s", item.id)
            self.events.emit(InventoryEvent.ITEM_ADDED_FAILED, item)
            return False
        item.position = position
        self.rebuild(silent=True)
        logger.debug("Added %s at %s", item.id, position)
        self.events.emit(InventoryEvent.ITEM_ADDED, item)
        return True

    def try_add(self, item: InventoryItem) -> bool:
        """Place ``item`` at its first fitting anchor."""
        point = self.find_first_fit(item) if self.can_add(item) else None
        if point is None:
            logger.debug("No room for %s", getattr(item, "id", item))
            self.events.emit(InventoryEvent.ITEM_ADDED_FAILED, item)
            return False
        return self.try_add_at(item, point)

    def try_remove(self, item: InventoryItem) -> bool:
        """Release ``item`` so it can be handed to another container."""
        if not self.can_remove(item) or not self._provider.release(item):
            self.events.emit(InventoryEvent.ITEM_REMOVED_FAILED, item)
            return False
        self.rebuild(silent=True)
        logger.debug("Removed %s", item.id)
        self.events.emit(InventoryEvent.ITEM_REMOVED, item)
        return True

    def try_drop(self, item: InventoryItem) -> bool:
        """Drop ``item`` out of the container into the world."""
        if not self.can_drop(item) or not self._provider.discard(item):
            self.events.emit(InventoryEvent.ITEM_DROPPED_FAILED, item)
            return False
        self.rebuild(silent=True)
        logger.debug("Dropped %s", item.id)
        self.events.emit(InventoryEvent.ITEM_DROPPED, item)
        return True

    def drop_all(self) -> List[InventoryItem]:
        return [item for item in list(self._items) if self.try_drop(item)]

    def clear(self) -> List[InventoryItem]:
        return [item for item in list(self._items) if self.try_remove(item)]

    def __repr__(self) -> str:
        mode = self.render_mode.value if self.render_mode else "disposed"
        return f"InventoryManager({self._width}x{self._height}, mode={mode}, items={len(self._items)})"
