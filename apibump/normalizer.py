"""Type signature normalization for resolved parameter and result lists."""

from __future__ import annotations

from typing import Any, Iterable


def normalize_type(descriptor: Any) -> str:
    """
    Reduce one parameter/result descriptor to its bare type name.

    A descriptor is either a string such as ``"ctx context.Context"`` or a
    ``Param``. For text only the trailing whitespace-separated token is kept,
    so a leading parameter name is dropped. Malformed text is not validated:
    whatever the split yields is returned. A ``Param`` with a structured
    ``type`` already has its name split off, so that type is returned whole.
    """
    structured = getattr(descriptor, 'type', None)
    if isinstance(structured, str):
        return structured.strip()

    text = getattr(descriptor, 'type_expr', descriptor)
    if text is None:
        return ""
    parts = str(text).split()
    return parts[-1] if parts else ""


def normalize_type_list(descriptors: Iterable[Any]) -> list[str]:
    """Normalize a parameter or result list, preserving order and duplicates."""
    return [normalize_type(d) for d in descriptors or []]
