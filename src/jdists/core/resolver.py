"""Resolution pass: expand markers using the blocks found by the loader.

Blocks are evaluated on demand and memoized in the session's block table.
Each record moves UNVISITED → IN_PROGRESS → DONE exactly once; asking for a
record that is still IN_PROGRESS means the blocks reference each other and
raises :class:`~jdists.core.exceptions.CircularReferenceError`.

Per ``include``/``replace`` occurrence the emitted content goes through:
1. variant lookup (``file="#name"``) or block lookup (``file``/``block``)
2. block evaluation (binary bytes, whole file, or ordered occurrences)
3. encoding processor (``encoding``)
4. slicing (``slice="start,end"``)
5. whitespace cleanup (``clean`` option)
6. nested marker resolution
7. export to a variant or file (``export``), which emits nothing
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from .attributes import BlockAttributes, is_variant_name, parse_attributes
from .loader import FILE_REFERENCE_TAGS
from .processors.registry import ProcessorContext
from .scanner import BlockMatch, MatchHandler, scan
from .session import BlockOccurrence, BlockRecord, BuildSession, block_key
from .utils.io import atomic_write, read_bytes
from .utils.text import Content, normalize_whitespace, to_text

logger = logging.getLogger(__name__)

REMOVE_TAG = "remove"

_HTML_COMMENT_BODY = re.compile(r"\s*<!--(.*)-->\s*", re.DOTALL)
_BLOCK_COMMENT_BODY = re.compile(r"\s*/\*(.*)\*/\s*", re.DOTALL)
_LEADING_ANGLE = re.compile(r"\s*<")


def strip_comment(text: str) -> str:
    """Remove one outer ``<!-- -->`` or ``/* */`` pair wrapping ``text``."""
    pattern = _HTML_COMMENT_BODY if _LEADING_ANGLE.match(text) else _BLOCK_COMMENT_BODY
    match = pattern.fullmatch(text)
    return match.group(1) if match else text


def _slice_bound(raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning('Ignoring invalid slice bound "%s"', raw)
        return None


def apply_slice(content: Content, spec: str) -> Content:
    """Apply ``slice="start,end"`` with negative bounds counted from the end."""
    parts = spec.split(",")
    start = _slice_bound(parts[0])
    end = _slice_bound(parts[1]) if len(parts) > 1 else None
    return content[start:end]


class ResolveGraph:
    """Expand markers in loaded files, evaluating referenced blocks on demand."""

    def __init__(self, session: BuildSession) -> None:
        self.session = session

    # ----- Public API -----
    def resolve(self, file_path: Path) -> str:
        """Return the fully resolved text of a loaded file ('' if never loaded)."""
        record = self.session.get_record(block_key(file_path))
        if record is None:
            return ""
        return to_text(self.resolve_record(record), self.session.options.encoding)

    def resolve_text(self, text: str, file_path: Path) -> str:
        """Resolve markers in ``text`` as if it appeared in ``file_path``."""
        return scan(text, self.handler(file_path), resolution=True)

    def resolve_record(self, record: BlockRecord) -> Content:
        """Evaluate ``record`` once and return its memoized content."""
        if record.completed:
            return record.content

        self.session.enter(record)
        if record.is_file:
            if record.is_binary:
                content: Content = read_bytes(record.file_path)
            else:
                content = self.resolve_text(record.source or "", record.file_path)
        else:
            content = "\n".join(
                self._resolve_node(record, node) for node in record.ordered_nodes()
            )
        self.session.leave(record, content)
        return content

    # ----- Internals -----
    def _resolve_node(self, record: BlockRecord, node: BlockOccurrence) -> str:
        body = self.resolve_text(node.body, record.file_path)
        if node.attributes.type == "comment":
            body = strip_comment(body)
        return body

    def handler(self, file_path: Path) -> MatchHandler:
        """Build the match handler used when resolving text from ``file_path``."""
        base_dir = file_path.parent
        options = self.session.options
        remove_list = options.remove_list

        def on_match(match: BlockMatch) -> str:
            if match.tag in remove_list:
                return ""

            attrs = parse_attributes(match.tag, match.attr_text, base_dir)
            if attrs.excludes_trigger(options.trigger):
                # Excluded exports vanish without exporting anything.
                if attrs.export:
                    return ""
                return match.text

            if match.tag in FILE_REFERENCE_TAGS:
                return self._emit_reference(match, attrs, file_path)
            if match.tag == REMOVE_TAG:
                return ""

            return match.rebuild(self.resolve_text(match.body, file_path))

        return on_match

    def _emit_reference(self, match: BlockMatch, attrs: BlockAttributes, file_path: Path) -> str:
        session = self.session
        options = session.options

        content: Content = match.body
        is_binary = False
        block_file: Optional[Path] = None
        block_name = ""

        if attrs.file and attrs.file in session.variants:
            content = session.variants.get(attrs.file)
        elif attrs.block or attrs.file:
            if is_variant_name(attrs.file):
                logger.debug('Variant "%s" not defined; emitting nothing', attrs.file)
                return ""
            block_file = attrs.file_path or file_path
            block_name = attrs.block or ""
            record = session.get_record(block_key(block_file, block_name))
            if record is None:
                return ""
            content = self.resolve_record(record)
            is_binary = record.is_binary

        processor = session.registry.get(attrs.encoding)
        if processor is not None:
            if not is_binary:
                content = self.resolve_text(to_text(content, options.encoding), file_path)
            content = processor(ProcessorContext(
                content=content,
                attributes=attrs,
                base_directory=block_file.parent if block_file else file_path.parent,
                block_file=block_file,
                block_name=block_name,
                options=options,
                tag=match.tag,
                scan_block=scan,
                resolve_handler=self.handler(file_path),
                lookup_variant=session.variants.get,
                source_file=file_path,
                registry=session.registry,
            ))

        if attrs.slice:
            content = apply_slice(content, attrs.slice)

        text = to_text(content, options.encoding)
        if options.clean:
            text = normalize_whitespace(text)
        text = self.resolve_text(text, file_path)

        if attrs.export:
            if is_variant_name(attrs.export):
                session.variants.set(attrs.export, text)
                logger.debug('Exported variant "%s" (%d chars)', attrs.export, len(text))
            elif attrs.export_path is not None:
                atomic_write(attrs.export_path, text, options.encoding)
                logger.debug("Exported %s (%d chars)", attrs.export_path, len(text))
            return ""
        return text


__all__ = ["ResolveGraph", "apply_slice", "strip_comment", "REMOVE_TAG"]
