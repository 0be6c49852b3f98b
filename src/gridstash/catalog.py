from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib.resources import files as resource_files
from typing import Any, Dict, Iterable, List, Optional

import yaml
from jsonschema import Draft202012Validator

from .exceptions import DefinitionValidationError
from .items import (
    ConsumablePayload,
    InventoryItem,
    ItemDefinition,
    ItemType,
    Payload,
    UtilityPayload,
    WeaponPayload,
)
from .shape import Shape

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load_item_schema() -> Dict[str, Any]:
    text = resource_files("gridstash.data").joinpath("schemas").joinpath("item.schema.json").read_text(encoding="utf-8")
    logger.debug("Loaded bundled item schema")
    return json.loads(text)


def validate_item_dict(data: Dict[str, Any]) -> None:
    """
    Validate a single item dictionary against the item JSON schema.

    Raises:
        DefinitionValidationError listing every schema error found.
    """
    validator = Draft202012Validator(_load_item_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            logger.error("Item schema validation error at %s: %s", list(err.path), err.message)
        raise DefinitionValidationError(f"Invalid item definition {data.get('id', '<unknown>')!r}", errors)


def _payload_from_dict(item_type: ItemType, data: Dict[str, Any]) -> Payload:
    if item_type == ItemType.WEAPON:
        section = data.get("weapon", {})
        return WeaponPayload(
            two_handed=bool(section.get("two_handed", False)),
            base_damage=float(section.get("base_damage", 10.0)),
        )
    if item_type == ItemType.CONSUMABLE:
        section = data.get("consumable", {})
        return ConsumablePayload(effects=tuple(dict(e) for e in section.get("effects", [])))
    return UtilityPayload(description=str(data.get("utility", {}).get("description", "")))


def definition_from_dict(data: Dict[str, Any]) -> ItemDefinition:
    """Create an ItemDefinition from a dict, validating with the JSON schema."""
    validate_item_dict(data)
    item_type = ItemType(data.get("type", ItemType.UTILITY.value))
    if "shape" in data:
        shape = Shape.from_rows(data["shape"])
    else:
        shape = Shape.rectangle(int(data.get("width", 1)), int(data.get("height", 1)))
    return ItemDefinition(
        id=data["id"],
        name=data["name"],
        shape=shape,
        type=item_type,
        can_drop=bool(data.get("can_drop", True)),
        payload=_payload_from_dict(item_type, data),
    )


class ItemCatalog:
    """Registry of item definitions and the factory for their instances."""

    def __init__(self, definitions: Optional[Iterable[ItemDefinition]] = None) -> None:
        self._defs: Dict[str, ItemDefinition] = {}
        for definition in definitions or ():
            self.register(definition)

    def register(self, definition: ItemDefinition) -> None:
        if definition.id in self._defs:
            raise DefinitionValidationError(f"Duplicate item id: {definition.id}")
        self._defs[definition.id] = definition

    def get(self, item_id: str) -> ItemDefinition:
        try:
            return self._defs[item_id]
        except KeyError as exc:
            raise KeyError(f"Unknown item id: {item_id}") from exc

    def create(self, item_id: str) -> InventoryItem:
        return self.get(item_id).create_instance()

    def ids(self) -> List[str]:
        return sorted(self._defs)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._defs

    def __len__(self) -> int:
        return len(self._defs)


def parse_catalog(text: str) -> ItemCatalog:
    raw = yaml.safe_load(text) or {}
    entries = raw.get("items", []) if isinstance(raw, dict) else []
    errors: List[Any] = []
    catalog = ItemCatalog()
    for index, entry in enumerate(entries):
        try:
            catalog.register(definition_from_dict(entry))
        except DefinitionValidationError as e:
            if not e.errors:
                raise
            for err in e.errors:
                # report paths relative to the document, e.g. items/3/shape
                err.path.appendleft(index)
                err.path.appendleft("items")
            errors.extend(e.errors)
    if errors:
        raise DefinitionValidationError(f"{len(errors)} schema error(s) in item definitions", errors)
    return catalog


def load_catalog(path: Optional[str] = None) -> ItemCatalog:
    """Load item definitions from YAML.

    If path is None, loads the bundled gridstash/data/items.yaml resource.
    """
    if path is None:
        text = resource_files("gridstash.data").joinpath("items.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded bundled item catalog")
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.debug("Loaded item catalog from path: %s", path)
    catalog = parse_catalog(text)
    logger.info("Item catalog ready with %d definitions", len(catalog))
    return catalog
