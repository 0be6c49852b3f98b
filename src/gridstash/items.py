from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from .geometry import Point
from .shape import Shape

logger = logging.getLogger(__name__)


class ItemType(str, Enum):
    ANY = 'any'
    WEAPON = 'weapon'
    ARMOR = 'armor'
    CONSUMABLE = 'consumable'
    UTILITY = 'utility'


class PayloadKind(str, Enum):
    WEAPON = 'weapon'
    CONSUMABLE = 'consumable'
    UTILITY = 'utility'


@dataclass(frozen=True)
class WeaponPayload:
    two_handed: bool = False
    base_damage: float = 10.0
    kind: PayloadKind = field(default=PayloadKind.WEAPON, init=False)


@dataclass(frozen=True)
class ConsumablePayload:
    # e.g. ({'type': 'heal_hp', 'amount': 50},)
    effects: Tuple[Dict[str, Any], ...] = ()
    kind: PayloadKind = field(default=PayloadKind.CONSUMABLE, init=False)


@dataclass(frozen=True)
class UtilityPayload:
    description: str = ''
    kind: PayloadKind = field(default=PayloadKind.UTILITY, init=False)


Payload = Union[WeaponPayload, ConsumablePayload, UtilityPayload]


def describe_payload(payload: Payload) -> str:
    """Short human readable summary of a payload, dispatched on its kind tag."""
    kind = payload.kind
    if kind == PayloadKind.WEAPON:
        hands = 'two-handed' if payload.two_handed else 'one-handed'
        return f'{hands} weapon, {payload.base_damage:g} damage'
    if kind == PayloadKind.CONSUMABLE:
        names = ', '.join(str(e.get('type', '?')) for e in payload.effects) or 'no effects'
        return f'consumable ({names})'
    if kind == PayloadKind.UTILITY:
        return payload.description or 'utility item'
    raise ValueError(f'Unsupported payload kind: {kind!r}')


@dataclass(frozen=True)
class ItemDefinition:
    """Static description of an item kind.

    Instances created from the same definition share its Shape.
    """

    id: str
    name: str
    shape: Shape
    type: ItemType = ItemType.UTILITY
    can_drop: bool = True
    payload: Payload = field(default_factory=UtilityPayload)

    def create_instance(self, position: Point = (0, 0)) -> 'InventoryItem':
        item = InventoryItem(definition=self, position=position)
        logger.debug('Created instance of %s (%dx%d)', self.id, self.shape.width, self.shape.height)
        return item


@dataclass(eq=False)
class InventoryItem:
    """A placeable item instance.

    Equality is identity: two instances of one definition are distinct items.
    ``position`` is the top-left anchor in grid space and is only changed by the
    manager holding the item.
    """

    definition: ItemDefinition
    position: Point = (0, 0)

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def shape(self) -> Shape:
        return self.definition.shape

    @property
    def width(self) -> int:
        return self.definition.shape.width

    @property
    def height(self) -> int:
        return self.definition.shape.height

    @property
    def can_drop(self) -> bool:
        return self.definition.can_drop

    @property
    def type_tag(self) -> ItemType:
        return self.definition.type

    @property
    def payload(self) -> Payload:
        return self.definition.payload

    @property
    def min_point(self) -> Point:
        return self.position

    @property
    def max_point(self) -> Point:
        return (self.position[0] + self.width, self.position[1] + self.height)

    def occupied_cells(self) -> FrozenSet[Point]:
        return self.shape.occupied_world_cells(self.position)

    def contains(self, point: Point) -> bool:
        """True if the world cell ``point`` is covered by this item's footprint."""
        local = (point[0] - self.position[0], point[1] - self.position[1])
        if not (0 <= local[0] < self.width and 0 <= local[1] < self.height):
            return False
        return self.shape.contains_local(local)

    def __repr__(self) -> str:
        return f'InventoryItem({self.id!r}, position={self.position})'


def make_item(
    item_id: str,
    width: int = 1,
    height: int = 1,
    *,
    shape: Optional[Shape] = None,
    item_type: ItemType = ItemType.UTILITY,
    can_drop: bool = True,
    payload: Optional[Payload] = None,
) -> InventoryItem:
    """Convenience constructor for a one-off item with its own definition."""
    definition = ItemDefinition(
        id=item_id,
        name=item_id.replace('_', ' ').title(),
        shape=shape or Shape.rectangle(width, height),
        type=item_type,
        can_drop=can_drop,
        payload=payload or UtilityPayload(),
    )
    return definition.create_instance()
