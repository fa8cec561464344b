"""Flattening of compat trees into ``{dotted.key.path: scalar}`` mappings."""

from typing import Any, Dict, Optional

from .annotations import AnnotationRegistry
from .normalizer import BROWSER_NAMES, MIRROR, normalize_node, normalize_statements

FlatData = Dict[str, Any]


def _is_statements(value) -> bool:
    return isinstance(value, (dict, list)) or value == MIRROR


def _normalize(node, registry: AnnotationRegistry) -> dict:
    items = enumerate(node) if isinstance(node, list) else node.items()
    result = {}
    for key, value in items:
        key = str(key)
        if key in BROWSER_NAMES and _is_statements(value):
            statements = normalize_statements(value)
            # A lone statement is not index-addressed, so `{...}` and `[{...}]` align
            value = statements[0] if len(statements) == 1 else statements
        if isinstance(value, dict):
            value = _normalize(normalize_node(dict(value), registry), registry)
        elif isinstance(value, list):
            value = _normalize(value, registry)
        result[key] = value
    return result


def normalize_tree(node, registry: Optional[AnnotationRegistry] = None) -> dict:
    """Return the normalized form of ``node`` as nested dicts.

    Lists become index-keyed dicts, browser statement lists are reversed so
    the newest statement comes first. ``node`` itself is left untouched.
    """
    if registry is None:
        registry = AnnotationRegistry()
    return _normalize(node, registry)


def _walk(node: dict, parent_key: str, result: FlatData) -> None:
    for key, value in node.items():
        full_key = f"{parent_key}.{key}" if parent_key else key
        if isinstance(value, dict):
            _walk(value, full_key, result)
        else:
            result[full_key] = value


def flatten(node, parent_key: str = "",
            registry: Optional[AnnotationRegistry] = None) -> FlatData:
    """Flatten a compat tree into dotted key paths.

    Args:
        node: Parsed JSON content (mapping or list).
        parent_key: Key path prefix for every produced key.
        registry: Registry collecting flags/notes; shared across one run so
            identical payloads in different files share a footnote.

    Returns:
        Mapping of dotted key path to scalar value. Empty containers produce
        no entries.
    """
    result: FlatData = {}
    _walk(normalize_tree(node, registry), parent_key, result)
    return result


def unflatten(data: FlatData) -> dict:
    """Re-nest a flat mapping on ``.``-separated keys."""
    tree: dict = {}
    for key, value in data.items():
        node = tree
        *parents, leaf = key.split(".")
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value
    return tree
