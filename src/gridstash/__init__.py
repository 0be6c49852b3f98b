"""
gridstash: grid-based item placement.

Packs arbitrarily shaped items into a bounded 2D slot grid (or a single
slot) with non-overlap and containment guarantees. The same engine backs an
inventory panel, a hotbar or an equipment slot; admission policy lives in a
provider object, placement geometry lives in the manager.
"""

from .events import InventoryEvent, InventoryEvents
from .exceptions import DefinitionValidationError, GridstashError, ShapeError
from .geometry import Rect, overlaps
from .items import (
    ConsumablePayload,
    InventoryItem,
    ItemDefinition,
    ItemType,
    PayloadKind,
    UtilityPayload,
    WeaponPayload,
)
from .manager import InventoryManager
from .provider import InventoryProvider, ListInventoryProvider, RenderMode
from .shape import Shape
from .transfer import swap_into_slot, transfer

__version__ = "0.1.0"

__all__ = [
    "ConsumablePayload",
    "DefinitionValidationError",
    "GridstashError",
    "InventoryEvent",
    "InventoryEvents",
    "InventoryItem",
    "InventoryManager",
    "InventoryProvider",
    "ItemDefinition",
    "ItemType",
    "ListInventoryProvider",
    "PayloadKind",
    "Rect",
    "RenderMode",
    "Shape",
    "ShapeError",
    "UtilityPayload",
    "WeaponPayload",
    "overlaps",
    "swap_into_slot",
    "transfer",
]
