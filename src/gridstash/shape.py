from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Sequence, Tuple

from .exceptions import ShapeError

Cell = Tuple[int, int]

_FILLED = {"X", "x", "#"}
_EMPTY = {".", " ", "_"}


@dataclass(frozen=True)
class Shape:
    """Immutable footprint of an item.

    ``cells`` holds the occupied local cells, 0-indexed from the top-left
    corner. Two items of the same definition share one Shape instance.
    """

    width: int
    height: int
    cells: FrozenSet[Cell]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ShapeError(f"Shape size must be positive, got {self.width}x{self.height}")
        cells = frozenset((int(x), int(y)) for x, y in self.cells)
        if not cells:
            raise ShapeError("Shape mask must contain at least one cell")
        stray = sorted(c for c in cells if not (0 <= c[0] < self.width and 0 <= c[1] < self.height))
        if stray:
            raise ShapeError(f"Cells {stray} lie outside a {self.width}x{self.height} shape")
        object.__setattr__(self, "cells", cells)

    @classmethod
    def rectangle(cls, width: int, height: int) -> "Shape":
        return cls(width, height, frozenset((x, y) for x in range(max(width, 0)) for y in range(max(height, 0))))

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Shape":
        """Build a shape from text rows, e.g. ``["XX", "X."]`` for an L.

        Row index is ``y`` and column index is ``x``. Short rows are padded
        with empty cells.
        """
        if not rows:
            raise ShapeError("Shape rows must not be empty")
        width = max(len(r) for r in rows)
        cells = set()
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch in _FILLED:
                    cells.add((x, y))
                elif ch not in _EMPTY:
                    raise ShapeError(f"Unknown shape character {ch!r} at ({x}, {y})")
        return cls(width, len(rows), frozenset(cells))

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def is_rectangular(self) -> bool:
        return self.cell_count == self.width * self.height

    def contains_local(self, cell: Cell) -> bool:
        return (cell[0], cell[1]) in self.cells

    def occupied_world_cells(self, position: Cell) -> FrozenSet[Cell]:
        px, py = position
        return frozenset((px + x, py + y) for x, y in self.cells)

    def to_rows(self) -> Tuple[str, ...]:
        return tuple(
            "".join("X" if (x, y) in self.cells else "." for x in range(self.width))
            for y in range(self.height)
        )

