from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .items import InventoryItem

Point = Tuple[int, int]

# Fraction of a cell used to keep flush items inside the container rectangle.
PADDING = 0.01


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in grid space.

    ``contains`` is inclusive on the min edges and exclusive on the max edges.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x_max and self.y <= py < self.y_max


def fits_inside(rect: Rect, min_point: Point, max_point: Point) -> bool:
    """Padded containment test used for placement and eviction."""
    return rect.contains(min_point[0] + PADDING, min_point[1] + PADDING) and rect.contains(
        max_point[0] - PADDING, max_point[1] - PADDING
    )


def bounding_boxes_intersect(a: "InventoryItem", b: "InventoryItem") -> bool:
    a_min, a_max = a.min_point, a.max_point
    b_min, b_max = b.min_point, b.max_point
    return not (
        a_min[0] >= b_max[0]
        or a_max[0] <= b_min[0]
        or a_min[1] >= b_max[1]
        or a_max[1] <= b_min[1]
    )


def overlaps(a: "InventoryItem", b: "InventoryItem") -> bool:
    """Return True if the two items share at least one occupied world cell.

    The bounding boxes are compared first; only when they intersect are the
    per-cell masks intersected, so interlocking non-rectangular shapes can sit
    inside each other's boxes without colliding.
    """
    if not bounding_boxes_intersect(a, b):
        return False
    return not a.occupied_cells().isdisjoint(b.occupied_cells())
