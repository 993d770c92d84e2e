"""Attribute parsing for block markers.

Raw attribute text such as ``file="lib/util.js" block="main" encoding="base64"``
is turned into a :class:`BlockAttributes` mapping. The file-valued attributes
(``file`` and ``export``) are resolved against the directory of the file the
marker lives in, unless they are symbolic variant names (``#name``).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

from .utils.text import decode_entities

ATTRIBUTE_PATTERN = re.compile(r'([\w\-.]+)\s*=\s*"([^"]+)"', re.ASCII)

VARIANT_PREFIX = "#"


def is_variant_name(value: Optional[str]) -> bool:
    """Return True when ``value`` names an in-memory variant (``#name``)."""
    return bool(value) and value.startswith(VARIANT_PREFIX)


@dataclass(frozen=True)
class BlockAttributes(Mapping[str, str]):
    """Parsed attributes of one marker occurrence.

    Behaves as a read-only mapping of the raw (entity-decoded) values and
    exposes the recognized keys as properties.
    """

    raw: Dict[str, str] = field(default_factory=dict)
    file_path: Optional[Path] = None
    export_path: Optional[Path] = None

    def __getitem__(self, key: str) -> str:
        return self.raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    @property
    def file(self) -> Optional[str]:
        return self.raw.get("file")

    @property
    def block(self) -> Optional[str]:
        return self.raw.get("block")

    @property
    def encoding(self) -> Optional[str]:
        return self.raw.get("encoding")

    @property
    def slice(self) -> Optional[str]:
        return self.raw.get("slice")

    @property
    def export(self) -> Optional[str]:
        return self.raw.get("export")

    @property
    def trigger(self) -> Optional[str]:
        return self.raw.get("trigger")

    @property
    def type(self) -> Optional[str]:
        return self.raw.get("type")

    def excludes_trigger(self, active: str) -> bool:
        """True when a ``trigger`` list is present and ``active`` is not in it."""
        if not self.trigger:
            return False
        triggers = [t.strip() for t in self.trigger.split(",")]
        return active not in triggers


def _resolve_path(value: Optional[str], base_dir: Path) -> Optional[Path]:
    if not value or is_variant_name(value):
        return None
    return (base_dir / value).resolve()


def parse_attributes(
    tag: str,
    attr_text: str,
    base_dir: Union[str, Path],
) -> BlockAttributes:
    """Parse raw attribute text into :class:`BlockAttributes`.

    Args:
        tag: Tag name of the marker (kept for processors that care)
        attr_text: Raw text between the tag name and the closing delimiter
        base_dir: Directory used to resolve relative ``file``/``export`` values

    Returns:
        BlockAttributes with decoded values and resolved paths
    """
    base = Path(base_dir)
    values: Dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(attr_text or ""):
        values[match.group(1)] = decode_entities(match.group(2))

    return BlockAttributes(
        raw=values,
        file_path=_resolve_path(values.get("file"), base),
        export_path=_resolve_path(values.get("export"), base),
    )


__all__ = [
    "ATTRIBUTE_PATTERN",
    "VARIANT_PREFIX",
    "BlockAttributes",
    "is_variant_name",
    "parse_attributes",
]
