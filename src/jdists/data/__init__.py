"""Bundled data files: default configuration and JSON schemas."""
from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any


def get_data_path(*parts: str) -> Path:
    """Return the filesystem path of a bundled resource.

    >>> get_data_path("config", "defaults.yaml").name
    'defaults.yaml'
    """
    root = Path(str(resources.files(__name__)))
    return root.joinpath(*parts)


@lru_cache(maxsize=None)
def read_json(*parts: str) -> dict[str, Any]:
    """Parse a bundled JSON file once per process."""
    return json.loads(get_data_path(*parts).read_text(encoding="utf-8"))


__all__ = ["get_data_path", "read_json"]
