"""Snapshot serialization to and from the interchange format.

Layout::

    {"items": {"F": {"kind": "Func",
                     "function": {"argTypes": ["int"], "resTypes": ["error"]}}}}

Empty or absent values are omitted from the output.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .exceptions import SnapshotFormatError
from .models import Item, ItemKind, Snapshot
from .utils import item_path, load_document


def item_to_dict(item: Item) -> dict:
    result: dict[str, Any] = {"kind": item.kind.value}
    if item.type:
        result["type"] = item.type

    if item.func is not None:
        function = {}
        if item.func.arg_types:
            function["argTypes"] = list(item.func.arg_types)
        if item.func.res_types:
            function["resTypes"] = list(item.func.res_types)
        if item.func.variadic:
            function["variadic"] = True
        if item.func.receiver:
            function["receiver"] = item.func.receiver
        if function:
            result["function"] = function

    if item.composite is not None:
        composite = {}
        if item.composite.fields:
            composite["fields"] = {
                name: item_to_dict(f) for name, f in sorted(item.composite.fields.items())
            }
        if item.composite.methods:
            composite["methods"] = {
                name: item_to_dict(m) for name, m in sorted(item.composite.methods.items())
            }
        if composite:
            result["composite"] = composite

    return result


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    return {"items": {name: item_to_dict(item) for name, item in sorted(snapshot.items())}}


def item_from_dict(data: Any, path: str = "$") -> Item:
    if not isinstance(data, dict):
        raise SnapshotFormatError("item must be a mapping", path)

    try:
        kind = ItemKind(data.get("kind"))
    except ValueError:
        raise SnapshotFormatError(f"unknown kind {data.get('kind')!r}", path)

    type_name = str(data.get("type") or "")

    if kind == ItemKind.FUNC:
        function = _mapping(data.get("function"), f"{path}.function")
        return Item.function(
            arg_types=_string_list(function.get("argTypes"), f"{path}.function.argTypes"),
            res_types=_string_list(function.get("resTypes"), f"{path}.function.resTypes"),
            variadic=bool(function.get("variadic", False)),
            receiver=function.get("receiver") or None,
        )
    elif kind == ItemKind.VAR:
        return Item.variable(type_name)
    elif kind == ItemKind.CONST:
        return Item.constant(type_name)

    composite = _mapping(data.get("composite"), f"{path}.composite")
    methods = _member_map(composite.get("methods"), f"{path}.composite.methods")
    if kind == ItemKind.INTERFACE:
        return Item.interface(type_name, methods=methods)
    fields = _member_map(composite.get("fields"), f"{path}.composite.fields")
    return Item.struct(type_name, fields=fields, methods=methods)


def snapshot_from_dict(data: Any) -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotFormatError("snapshot must be a mapping", "$")

    items = data.get("items")
    if items is None:
        return {}
    if not isinstance(items, dict):
        raise SnapshotFormatError("'items' must be a mapping", "$.items")

    return {name: item_from_dict(raw, item_path(name)) for name, raw in items.items()}


def dump_snapshot(snapshot: Snapshot, path: str | Path):
    """Write a snapshot as YAML (.yaml/.yml) or JSON (anything else)."""
    path = Path(path)
    data = snapshot_to_dict(snapshot)
    with open(path, 'w', encoding='utf-8') as f:
        if path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, sort_keys=True)
        else:
            json.dump(data, f, indent=2)
            f.write("\n")


def load_snapshot(path: str | Path) -> Snapshot:
    """Read a snapshot written by dump_snapshot."""
    try:
        data = load_document(path)
    except ValueError as e:
        raise SnapshotFormatError(str(e))
    return snapshot_from_dict(data)


def _mapping(value: Any, path: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SnapshotFormatError("expected a mapping", path)
    return value


def _string_list(value: Any, path: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotFormatError("expected a list of type names", path)
    return [str(v) for v in value]


def _member_map(value: Any, path: str) -> dict[str, Item]:
    members = _mapping(value, path)
    return {name: item_from_dict(raw, f"{path}.{name}") for name, raw in members.items()}
