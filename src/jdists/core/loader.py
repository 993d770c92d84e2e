"""Discovery pass: register every tagged block reachable from an entry file."""
from __future__ import annotations

import logging
from pathlib import Path

from .attributes import parse_attributes
from .scanner import BlockMatch, scan
from .session import BlockOccurrence, BuildSession, block_key
from .utils.io import read_text
from .utils.text import normalize_whitespace

logger = logging.getLogger(__name__)

FILE_REFERENCE_TAGS = frozenset({"include", "replace"})


class LoadGraph:
    """Walk files in discovery mode, filling the session's block table.

    Each file is loaded at most once. ``include``/``replace`` markers with a
    ``file`` attribute pull the referenced file into the graph.
    """

    def __init__(self, session: BuildSession) -> None:
        self.session = session

    def load(self, file_path: Path) -> None:
        key = block_key(file_path)
        if self.session.has_record(key):
            return

        record = self.session.create_record(key, is_file=True)
        options = self.session.options

        if not file_path.exists():
            logger.warning('File "%s" not exists.', file_path)
            record.source = ""
            return

        if options.treats_as_binary(file_path):
            record.is_binary = True
            logger.debug("load %s (binary)", file_path)
            return

        logger.debug("load %s", file_path)
        content = read_text(file_path, options.encoding)
        if options.clean:
            content = normalize_whitespace(content)
        record.source = content

        scan(content, self._handler(file_path))

    def _handler(self, file_path: Path):
        base_dir = file_path.parent
        trigger = self.session.options.trigger

        def on_match(match: BlockMatch) -> str:
            attrs = parse_attributes(match.tag, match.attr_text, base_dir)
            if attrs.excludes_trigger(trigger):
                return match.text

            record = self.session.get_or_create_record(block_key(file_path, match.tag))
            record.nodes.append(BlockOccurrence(
                offset=match.offset,
                attributes=attrs,
                body=match.body,
            ))

            if match.tag in FILE_REFERENCE_TAGS and attrs.file_path is not None:
                self.load(attrs.file_path)

            # Nested blocks; offsets stay absolute within the file.
            scan(match.body, on_match, base_offset=match.body_offset)
            return " " * len(match.text)

        return on_match


__all__ = ["LoadGraph", "FILE_REFERENCE_TAGS"]
