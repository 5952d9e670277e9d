"""Utility functions for the apibump engine."""

from __future__ import annotations

import re
import json
from pathlib import Path
from typing import Any

import yaml


def load_document(path: str | Path) -> Any:
    """Load a YAML or JSON document from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    # JSON is valid YAML, so one parser covers both
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {path}: {e}")


def get_json_size_mb(obj: Any) -> float:
    """Get the approximate size of a JSON object in megabytes."""
    json_str = json.dumps(obj)
    return len(json_str.encode('utf-8')) / (1024 * 1024)


def build_path(parent_path: str, key: str) -> str:
    """Build a JSONPath from parent path and key."""
    if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
        return f"{parent_path}.{key}"
    return f"{parent_path}['{key}']"


def item_path(name: str, *members: str) -> str:
    """JSONPath of an item, or of a field/method nested in it."""
    path = build_path("$.items", name)
    for member in members:
        path = build_path(path, member)
    return path
