"""JSONPath utilities for ignore rules over serialized snapshots."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Index, Slice

from .exceptions import RuleError


class JSONPathMatcher:
    """Utility class for JSONPath matching and deletion."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """
        Compile and cache a JSONPath expression.

        Snapshot items and members are mappings keyed by name, so only field
        steps (``.name``, ``.*``) can address them. Index and slice steps
        (``[0]``, ``[*]``) are rejected instead of silently matching nothing.
        """
        if path not in cls._cache:
            try:
                expr = jsonpath_parse(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                raise RuleError(path, f"invalid JSONPath expression: {e}")
            if _has_index_step(expr):
                raise RuleError(path, "index steps are not supported, use field steps such as .*")
            cls._cache[path] = expr
        return cls._cache[path]

    @classmethod
    def delete_paths(cls, data: Any, paths: list[str]) -> tuple[Any, list[str]]:
        """
        Delete all nodes matching the given JSONPath expressions.

        Args:
            data: The data to modify (modified in place)
            paths: List of JSONPath expressions

        Returns:
            Tuple of (data, concrete paths that were deleted)
        """
        deleted: list[str] = []
        for path in paths:
            deleted.extend(cls._delete_path(data, path))
        return data, deleted

    @classmethod
    def _delete_path(cls, data: Any, path: str) -> list[str]:
        """Delete every node one expression matches."""
        expr = cls.compile(path)
        deleted = []

        for match in expr.find(data):
            if match.context is None:
                raise RuleError(path, "cannot delete the document root")

            parent = match.context.value
            for name in getattr(match.path, 'fields', ()):
                if isinstance(parent, dict) and name in parent:
                    del parent[name]
                    deleted.append(str(match.full_path))

        return deleted


def _has_index_step(expr: Any) -> bool:
    if isinstance(expr, (Index, Slice)):
        return True
    return any(
        _has_index_step(child)
        for child in (getattr(expr, 'left', None), getattr(expr, 'right', None))
        if child is not None
    )
