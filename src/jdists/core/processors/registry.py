"""Encoding processor registry.

An encoding processor is a callable taking a :class:`ProcessorContext` and
returning the transformed content. Processors are looked up by the
``encoding="..."`` attribute of an ``include``/``replace`` marker:

    registry = ProcessorRegistry()

    @registry.register("upper")
    def upper(ctx: ProcessorContext) -> str:
        return to_text(ctx.content).upper()

Processors may call back into resolution through ``ctx.resolve``.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..attributes import BlockAttributes, is_variant_name
from ..scanner import MatchHandler
from ..utils.io import read_text
from ..utils.text import Content

if TYPE_CHECKING:
    from ..config.options import BuildOptions


@dataclass
class ProcessorContext:
    """Everything an encoding processor may need about the block being emitted."""

    content: Content
    attributes: BlockAttributes
    base_directory: Path
    block_file: Optional[Path]
    block_name: str
    options: "BuildOptions"
    tag: str
    scan_block: Callable[..., str]
    resolve_handler: MatchHandler
    lookup_variant: Callable[[str], Optional[Content]]
    source_file: Path
    registry: "ProcessorRegistry"

    def resolve(self, text: str) -> str:
        """Resolve markers in ``text`` as if it appeared in the source file."""
        return self.scan_block(text, self.resolve_handler, True)

    def read_reference(self, ref: str) -> Optional[str]:
        """Return the text behind ``ref``: a variant name or a file path.

        Relative paths are taken from ``base_directory``. Returns None when
        the variant or file does not exist.
        """
        if is_variant_name(ref):
            value = self.lookup_variant(ref)
            if value is None:
                return None
            return value.decode(self.options.encoding, errors="replace") if isinstance(value, bytes) else value
        path = (self.base_directory / ref).resolve()
        if not path.is_file():
            return None
        return read_text(path, self.options.encoding)


Processor = Callable[[ProcessorContext], Content]


class ProcessorRegistry:
    """Name → encoding processor table."""

    def __init__(self, processors: Optional[Dict[str, Processor]] = None) -> None:
        self._processors: Dict[str, Processor] = dict(processors or {})

    def register(self, name: str) -> Callable[[Processor], Processor]:
        """Decorator to register a processor under ``name``."""
        def decorator(func: Processor) -> Processor:
            self._processors[name] = func
            return func
        return decorator

    def add(self, name: str, func: Processor) -> None:
        """Add or replace the processor registered under ``name``."""
        if not name or func is None:
            raise ValueError("Encoding name and processor are required")
        self._processors[name] = func

    def get(self, name: Optional[str]) -> Optional[Processor]:
        if not name:
            return None
        return self._processors.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._processors

    def list_processors(self) -> List[str]:
        return sorted(self._processors.keys())

    def copy(self) -> "ProcessorRegistry":
        return ProcessorRegistry(self._processors)


# Global registry, seeded with built-ins by jdists.core.processors
global_registry = ProcessorRegistry()


def register_processor(name: str) -> Callable[[Processor], Processor]:
    """Register a processor in the global registry.

    Usage:
        @register_processor("upper")
        def upper(ctx: ProcessorContext) -> str:
            return ctx.content.upper()
    """
    return global_registry.register(name)


__all__ = [
    "Processor",
    "ProcessorContext",
    "ProcessorRegistry",
    "global_registry",
    "register_processor",
]
