from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from . import __version__
from .catalog import load_catalog
from .config import build_container, load_container_settings
from .exceptions import DefinitionValidationError, ShapeError
from .items import describe_payload
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        catalog = load_catalog(args.path)
    except DefinitionValidationError as e:
        print(f"INVALID: {args.path}\n{e.to_human()}\n")
        return 1
    except ShapeError as e:
        print(f"INVALID: {args.path}\n{e}\n")
        return 1
    print(f"OK: {args.path} ({len(catalog)} items)")
    return 0


def _cmd_pack(args: argparse.Namespace) -> int:
    layouts = load_container_settings(args.containers)
    settings = layouts.get(args.container)
    if settings is None:
        print(f"Unknown container {args.container!r}; known: {', '.join(sorted(layouts))}", file=sys.stderr)
        return 2
    catalog = load_catalog(args.items)
    unknown = [i for i in args.item_ids if i not in catalog]
    if unknown:
        print(f"Unknown item id(s): {', '.join(unknown)}", file=sys.stderr)
        return 2

    manager = build_container(settings)
    placed: List[Dict[str, Any]] = []
    rejected: List[str] = []
    for item_id in args.item_ids:
        item = catalog.create(item_id)
        if manager.try_add(item):
            placed.append({
                "id": item.id,
                "position": list(item.position),
                "size": [item.width, item.height],
                "summary": describe_payload(item.payload),
            })
        else:
            rejected.append(item_id)

    report = {
        "container": settings.name,
        "width": manager.width,
        "height": manager.height,
        "placed": placed,
        "rejected": rejected,
        "full": manager.is_full,
    }
    print(json.dumps(report, indent=2))
    return 0 if not rejected else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gridstash", description="Grid inventory placement tools")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Validate an item definition YAML file")
    v.add_argument("path", help="Path to an items YAML file")
    v.set_defaults(func=_cmd_validate)

    k = sub.add_parser("pack", help="Pack items by first fit into a configured container")
    k.add_argument("item_ids", nargs="+", help="Item ids to add, in order")
    k.add_argument("--container", default="backpack", help="Container name from the layout config")
    k.add_argument("--items", default=None, help="Items YAML (defaults to the bundled catalog)")
    k.add_argument("--containers", default=None, help="Container layout YAML (defaults to the bundled one)")
    k.set_defaults(func=_cmd_pack)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)
    return args.func(args)
