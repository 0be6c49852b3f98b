from __future__ import annotations

import logging
import os
from importlib.resources import files as resource_files
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .items import ItemType
from .manager import InventoryManager
from .provider import ListInventoryProvider, RenderMode

logger = logging.getLogger(__name__)

ENV_CONTAINERS_FILE = "GRIDSTASH_CONTAINERS_FILE"


class ContainerSettings(BaseModel):
    """Layout and admission policy for one container (backpack, hotbar, slot...)."""

    name: str = Field(..., description="Container name, e.g. 'backpack'")
    width: int = Field(..., ge=1, description="Grid width in cells")
    height: int = Field(..., ge=1, description="Grid height in cells")
    render_mode: RenderMode = Field(RenderMode.GRID, description="grid or single")
    max_items: int = Field(-1, description="Maximum item count; -1 for unlimited")
    allowed_type: ItemType = Field(ItemType.ANY, description="Only items of this type are admitted")
    locked_types: List[ItemType] = Field(default_factory=list, description="Types that can never be dropped")

    @field_validator("max_items")
    @classmethod
    def normalize_unlimited(cls, v: int) -> int:
        # Any non-positive cap means "unlimited"
        return v if v > 0 else -1


def _read_containers_text(path: Optional[str]) -> str:
    path = path or os.environ.get(ENV_CONTAINERS_FILE)
    if path is None:
        logger.debug("Loaded embedded container config resource")
        return resource_files("gridstash.data").joinpath("containers.yaml").read_text(encoding="utf-8")
    with open(path, "r", encoding="utf-8") as f:
        logger.debug("Loaded container config from path: %s", path)
        return f.read()


def load_container_settings(path: Optional[str] = None) -> Dict[str, ContainerSettings]:
    """Load container layouts from YAML.

    If path is None, ``GRIDSTASH_CONTAINERS_FILE`` is consulted, then the
    embedded gridstash/data/containers.yaml resource.
    """
    raw = yaml.safe_load(_read_containers_text(path)) or {}
    containers = raw.get("containers", {}) or {}
    out: Dict[str, ContainerSettings] = {}
    for name, data in containers.items():
        out[name] = ContainerSettings(name=name, **(data or {}))
    logger.info("Container layouts: %s", sorted(out))
    return out


def build_container(settings: ContainerSettings) -> InventoryManager:
    """Create a provider and its manager for one container."""
    provider = ListInventoryProvider(
        render_mode=settings.render_mode,
        max_items=settings.max_items,
        allowed_type=settings.allowed_type,
        locked_types=settings.locked_types,
    )
    manager = InventoryManager(provider, settings.width, settings.height)
    logger.debug("Built container %s: %r", settings.name, manager)
    return manager
