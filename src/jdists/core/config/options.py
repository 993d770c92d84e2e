"""Build options consumed by the loader and resolver."""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

DEFAULT_REMOVE = "debug,test"
DEFAULT_TRIGGER = "release"
DEFAULT_BINARY_EXTENSIONS: Tuple[str, ...] = (
    "png", "jpeg", "jpg", "mp3", "ogg", "gif", "eot", "ttf", "woff",
)

BinaryPredicate = Callable[[Path], bool]


def _split_list(value: Union[str, Sequence[str], None]) -> List[str]:
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [str(item).strip() for item in items if str(item).strip()]


@dataclass
class BuildOptions:
    """Options for one build.

    ``remove`` accepts a comma-separated string or a list of tag names. None
    or an empty string means the default ``debug,test``; pass an empty list
    to remove nothing.
    ``is_binary`` is an optional extra predicate; files whose extension is in
    ``binary_extensions`` are always binary.
    """

    clean: bool = True
    remove: Union[str, Sequence[str]] = DEFAULT_REMOVE
    trigger: str = DEFAULT_TRIGGER
    is_binary: Optional[BinaryPredicate] = None
    binary_extensions: Tuple[str, ...] = DEFAULT_BINARY_EXTENSIONS
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.remove is None or self.remove == "":
            self.remove = DEFAULT_REMOVE
        if not self.trigger:
            self.trigger = DEFAULT_TRIGGER
        self.binary_extensions = tuple(ext.lstrip(".") for ext in self.binary_extensions)

    @property
    def remove_list(self) -> List[str]:
        return _split_list(self.remove)

    def treats_as_binary(self, path: Path) -> bool:
        suffix = path.suffix[1:]
        if suffix and suffix in self.binary_extensions:
            return True
        return bool(self.is_binary and self.is_binary(path))

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **overrides: Any) -> "BuildOptions":
        """Build options from a loaded config's ``build`` section.

        Keyword overrides that are None are ignored, so CLI flags that were
        not given fall through to the configured value.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in dict(config.get("build") or {}).items():
            if key in known:
                values[key] = value
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                raise TypeError(f"Unknown build option: {key}")
            values[key] = value
        if "binary_extensions" in values:
            values["binary_extensions"] = tuple(values["binary_extensions"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clean": self.clean,
            "remove": self.remove_list,
            "trigger": self.trigger,
            "binary_extensions": list(self.binary_extensions),
            "encoding": self.encoding,
        }


__all__ = [
    "BinaryPredicate",
    "BuildOptions",
    "DEFAULT_BINARY_EXTENSIONS",
    "DEFAULT_REMOVE",
    "DEFAULT_TRIGGER",
]
