"""Deep merge used when layering configuration sources.

Lists replace the lower layer unless their first item is ``"+"``, in which
case the remaining items are appended:

    binary_extensions: ["+", "webp"]   # defaults plus webp
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND_MARKER = "+"


def merge_lists(base: List[Any], override: List[Any]) -> List[Any]:
    if override and override[0] == APPEND_MARKER:
        return [*base, *(item for item in override[1:] if item not in base)]
    return list(override)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` overlaid with ``override``; neither input is modified.

    >>> deep_merge({"build": {"clean": True, "trigger": "release"}}, {"build": {"trigger": "debug"}})
    {'build': {'clean': True, 'trigger': 'debug'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = merge_lists(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["APPEND_MARKER", "deep_merge", "merge_lists"]
