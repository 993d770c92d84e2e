"""Per-build state: block table, variant store and resolution states.

A :class:`BuildSession` is created for every ``build`` call and passed to the
loader and resolver. Nothing here is process-global, so independent builds
never see each other's blocks or variants.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .attributes import BlockAttributes
from .exceptions import CircularReferenceError
from .utils.text import Content

if TYPE_CHECKING:
    from .config.options import BuildOptions
    from .processors.registry import ProcessorRegistry

logger = logging.getLogger(__name__)

# (absolute file path, tag name); tag '' is the whole-file pseudo-block
BlockKey = Tuple[str, str]

FILE_TAG = ""


def block_key(file_path: Path | str, tag: str = FILE_TAG) -> BlockKey:
    return (str(file_path), tag)


class BlockState(Enum):
    """Evaluation state of a block record."""
    UNVISITED = "unvisited"
    IN_PROGRESS = "in-progress"
    DONE = "done"


@dataclass
class BlockOccurrence:
    """One discovered occurrence of a tagged block."""
    offset: int
    attributes: BlockAttributes
    body: str


@dataclass
class BlockRecord:
    """A block (or whole file) known to the build.

    ``content`` is assigned exactly once, by :meth:`complete`.
    """

    key: BlockKey
    is_file: bool = False
    is_binary: bool = False
    content: Optional[Content] = None
    nodes: List[BlockOccurrence] = field(default_factory=list)
    state: BlockState = BlockState.UNVISITED
    # Raw (discovery-time) text of a file pseudo-block
    source: Optional[str] = None

    @property
    def file_path(self) -> Path:
        return Path(self.key[0])

    @property
    def tag(self) -> str:
        return self.key[1]

    @property
    def completed(self) -> bool:
        return self.state is BlockState.DONE

    def ordered_nodes(self) -> List[BlockOccurrence]:
        """Occurrences in ascending source-offset order."""
        return sorted(self.nodes, key=lambda node: node.offset)

    def complete(self, content: Content) -> None:
        if self.state is BlockState.DONE:
            raise RuntimeError(f"Block already resolved: {self.key}")
        self.content = content
        self.state = BlockState.DONE


class VariantStore:
    """Named in-memory content slots written by ``export="#name"``."""

    def __init__(self, initial: Optional[Dict[str, Content]] = None) -> None:
        self._values: Dict[str, Content] = dict(initial or {})

    def get(self, name: str) -> Optional[Content]:
        return self._values.get(name)

    def set(self, name: str, content: Content) -> Content:
        self._values[name] = content
        return content

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def names(self) -> List[str]:
        return list(self._values.keys())

    def copy(self) -> "VariantStore":
        return VariantStore(self._values)


class BuildSession:
    """State shared by the load and resolve passes of one build.

    Holds:
    - records: block table keyed by ``(file, tag)``
    - variants: the variant store for this build
    - chain: keys currently being resolved, outermost first
    """

    def __init__(
        self,
        options: "BuildOptions",
        registry: "ProcessorRegistry",
        variants: Optional[VariantStore] = None,
    ) -> None:
        self.options = options
        self.registry = registry
        self.variants = variants if variants is not None else VariantStore()
        self.records: Dict[BlockKey, BlockRecord] = {}
        self.chain: List[BlockKey] = []

    # ----- Block table -----
    def get_record(self, key: BlockKey) -> Optional[BlockRecord]:
        return self.records.get(key)

    def has_record(self, key: BlockKey) -> bool:
        return key in self.records

    def create_record(self, key: BlockKey, *, is_file: bool = False) -> BlockRecord:
        """Create the record for ``key``; a key is only ever created once."""
        if key in self.records:
            raise RuntimeError(f"Block record already exists: {key}")
        record = BlockRecord(key=key, is_file=is_file)
        self.records[key] = record
        return record

    def get_or_create_record(self, key: BlockKey) -> BlockRecord:
        record = self.records.get(key)
        if record is None:
            record = self.create_record(key)
        return record

    # ----- Resolution states -----
    def enter(self, record: BlockRecord) -> None:
        """Mark ``record`` in progress; re-entering an in-progress key is a cycle."""
        if record.state is BlockState.IN_PROGRESS:
            raise CircularReferenceError(record.key, [*self.chain, record.key])
        record.state = BlockState.IN_PROGRESS
        self.chain.append(record.key)
        logger.debug("resolve enter %s#%s (depth %d)", record.key[0], record.key[1], len(self.chain))

    def leave(self, record: BlockRecord, content: Content) -> None:
        """Store the resolved content and pop ``record`` off the chain."""
        popped = self.chain.pop()
        if popped != record.key:
            raise RuntimeError(f"Resolution chain out of order: {popped} != {record.key}")
        record.complete(content)

    def reset(self) -> None:
        self.records.clear()
        self.chain.clear()


__all__ = [
    "BlockKey",
    "FILE_TAG",
    "block_key",
    "BlockState",
    "BlockOccurrence",
    "BlockRecord",
    "VariantStore",
    "BuildSession",
]
