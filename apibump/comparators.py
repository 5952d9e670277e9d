"""Comparison rules for each item kind.

Every comparator returns ``(bump, message)``; the message is empty for
PATCH and names the first rule that fired otherwise.
"""

from __future__ import annotations

from typing import Optional

from .models import Func, Item, ItemKind, RequiredBump


def compare_funcs(old: Optional[Func], new: Optional[Func]) -> tuple[RequiredBump, str]:
    """
    Compare two function signatures.

    Rules are checked in order and the first failing one returns MAJOR:
    parameter count, parameter types, result count, result types,
    receiver, variadic flag. There is no MINOR outcome.
    """
    old = old or Func()
    new = new or Func()

    if len(old.arg_types) != len(new.arg_types):
        return RequiredBump.MAJOR, (
            f"Parameter count changed: {len(old.arg_types)} -> {len(new.arg_types)}"
        )

    for i, (a, b) in enumerate(zip(old.arg_types, new.arg_types)):
        if a != b:
            return RequiredBump.MAJOR, f"Parameter {i} type changed: {a} -> {b}"

    if len(old.res_types) != len(new.res_types):
        return RequiredBump.MAJOR, (
            f"Result count changed: {len(old.res_types)} -> {len(new.res_types)}"
        )

    for i, (a, b) in enumerate(zip(old.res_types, new.res_types)):
        if a != b:
            return RequiredBump.MAJOR, f"Result {i} type changed: {a} -> {b}"

    if (old.receiver or None) != (new.receiver or None):
        return RequiredBump.MAJOR, (
            f"Receiver changed: {old.receiver or '<none>'} -> {new.receiver or '<none>'}"
        )

    if old.variadic != new.variadic:
        return RequiredBump.MAJOR, (
            f"Variadic changed: {str(old.variadic).lower()} -> {str(new.variadic).lower()}"
        )

    return RequiredBump.PATCH, ""


def compare_values(old: Item, new: Item) -> tuple[RequiredBump, str]:
    """Compare two Var/Const items by type name."""
    if old.type == new.type:
        return RequiredBump.PATCH, ""
    return RequiredBump.MAJOR, f"Type changed: {old.type} -> {new.type}"


def compare_members(
    old: dict[str, Item],
    new: dict[str, Item],
    label: str,
    compare
) -> tuple[RequiredBump, str]:
    """
    Compare one member map (fields or methods) by name set.

    A removed member or a MAJOR member comparison returns MAJOR at once.
    Added members make the result MINOR.
    """
    for name in sorted(old):
        if name not in new:
            return RequiredBump.MAJOR, f"{label} removed: {name}"
        bump, message = compare(old[name], new[name])
        if bump == RequiredBump.MAJOR:
            return bump, f"{label} {name}: {message}"

    added = sorted(set(new) - set(old))
    if added:
        plural = "s" if len(added) > 1 else ""
        return RequiredBump.MINOR, f"{label}{plural} added: {', '.join(added)}"

    return RequiredBump.PATCH, ""


def _compare_method_items(old: Item, new: Item) -> tuple[RequiredBump, str]:
    return compare_funcs(old.func, new.func)


def compare_composites(old: Item, new: Item) -> tuple[RequiredBump, str]:
    """
    Compare two Struct items.

    Fields are checked before methods. Any MAJOR ends the comparison;
    additions are only reported when nothing breaking was found.
    """
    old_members = old.members
    new_members = new.members

    field_bump, field_message = compare_members(
        old_members.fields, new_members.fields, "Field", compare_values
    )
    if field_bump == RequiredBump.MAJOR:
        return field_bump, field_message

    method_bump, method_message = compare_members(
        old_members.methods, new_members.methods, "Method", _compare_method_items
    )
    if method_bump == RequiredBump.MAJOR:
        return method_bump, method_message

    messages = [m for m in (field_message, method_message) if m]
    return field_bump.join(method_bump), "; ".join(messages)


def compare_interfaces(old: Item, new: Item) -> tuple[RequiredBump, str]:
    """Compare two Interface items by their method sets."""
    return compare_members(
        old.members.methods, new.members.methods, "Method", _compare_method_items
    )


def compare_items(old: Item, new: Item) -> tuple[RequiredBump, str]:
    """Dispatch to the rule for the items' kind."""
    if old.kind != new.kind:
        return RequiredBump.MAJOR, f"Kind changed: {old.kind.value} -> {new.kind.value}"

    if old.kind == ItemKind.FUNC:
        return compare_funcs(old.func, new.func)
    elif old.kind in (ItemKind.VAR, ItemKind.CONST):
        return compare_values(old, new)
    elif old.kind == ItemKind.STRUCT:
        return compare_composites(old, new)
    elif old.kind == ItemKind.INTERFACE:
        return compare_interfaces(old, new)

    return RequiredBump.PATCH, ""
