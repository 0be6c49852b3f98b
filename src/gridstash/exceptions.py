from __future__ import annotations

from typing import Any, List, Optional


class GridstashError(Exception):
    """Base exception for the gridstash package."""


class ShapeError(GridstashError, ValueError):
    """Raised when an item footprint can never be placed (empty mask, zero size, stray cells)."""


class DefinitionValidationError(GridstashError):
    """Raised when item definition data fails schema validation."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f" - at {path}: {e.message}")
        return "\n".join(parts)
