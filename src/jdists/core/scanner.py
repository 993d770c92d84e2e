"""Block marker scanner.

Marker syntax (two comment families, two tag shapes):

    <!--include file="a.js" block="main"/-->
    <!--name attr="value"-->body<!--/name-->
    <!--name attr="value">body</name-->
    /*<include file="a.js" block="main"/>*/
    /*<name attr="value">*/body/*</name>*/
    /*<name attr="value">body</name>*/

The scanner walks the text left to right. At each candidate offset (the
nearer of ``<!--`` and ``/*<``) the rules are tried in priority order. A
match is handed to the caller's handler as a :class:`BlockMatch` and replaced
with the handler's return value. When no rule matches, one literal character
is emitted and scanning resumes at the next offset, so malformed markers
always survive as plain text.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

HTML_OPEN = "<!--"
BLOCK_OPEN = "/*<"

_TAG = r"([\w\-.]+)"
_ATTRS = r'((?:\s*[\w\-.]+\s*=\s*"[^"]+")+)?'


class MarkerFamily(Enum):
    """Comment delimiter family of a marker."""
    HTML_COMMENT = "html"     # <!-- ... -->
    BLOCK_COMMENT = "block"   # /*< ... >*/


class TagShape(Enum):
    """How a marker is closed."""
    SELF_CLOSING = "self-closing"   # include only, no body
    MARKER_PAIR = "marker-pair"     # body closed by a full closing marker
    TAG_PAIR = "tag-pair"           # body closed by </name> inside the comment


@dataclass(frozen=True)
class ScanRule:
    family: MarkerFamily
    shape: TagShape
    pattern: re.Pattern


def _rule(family: MarkerFamily, shape: TagShape, regex: str) -> ScanRule:
    return ScanRule(family, shape, re.compile(regex, re.ASCII | re.DOTALL))


# Groups: opening, tag, attrs, opening_close, body, closing
RULES: Tuple[ScanRule, ...] = (
    _rule(MarkerFamily.HTML_COMMENT, TagShape.SELF_CLOSING,
          r"(<!--)(include)" + _ATTRS + r"()()(\s*/?-->)"),
    _rule(MarkerFamily.HTML_COMMENT, TagShape.MARKER_PAIR,
          r"(<!--)" + _TAG + _ATTRS + r"(\s*-->)(.*?)(<!--/\2-->)"),
    _rule(MarkerFamily.HTML_COMMENT, TagShape.TAG_PAIR,
          r"(<!--)" + _TAG + _ATTRS + r"(\s*>)(.*?)(</\2-->)"),
    _rule(MarkerFamily.BLOCK_COMMENT, TagShape.SELF_CLOSING,
          r"(/\*<)(include)" + _ATTRS + r"()()(\s*/?>\*/)"),
    _rule(MarkerFamily.BLOCK_COMMENT, TagShape.MARKER_PAIR,
          r"(/\*<)" + _TAG + _ATTRS + r"(\s*>\*/)(.*?)(/\*</\2>\*/)"),
    _rule(MarkerFamily.BLOCK_COMMENT, TagShape.TAG_PAIR,
          r"(/\*<)" + _TAG + _ATTRS + r"(\s*>)(.*?)(</\2>\*/)"),
)


@dataclass(frozen=True)
class BlockMatch:
    """One matched marker occurrence, decomposed into its parts.

    ``offset`` is absolute: the position of the opening marker within the
    outermost text being scanned (nested scans pass their base offset).
    """

    family: MarkerFamily
    shape: TagShape
    text: str
    opening: str
    tag: str
    attr_text: str
    opening_close: str
    body: str
    closing: str
    offset: int

    @property
    def body_offset(self) -> int:
        """Absolute offset of the first body character."""
        return self.offset + len(self.opening) + len(self.tag) + len(self.attr_text) + len(self.opening_close)

    def rebuild(self, body: str) -> str:
        """Return the marker text with ``body`` substituted for the original body."""
        return self.opening + self.tag + self.attr_text + self.opening_close + body + self.closing


MatchHandler = Callable[[BlockMatch], str]


def _next_candidate(content: str, start: int) -> int:
    a = content.find(HTML_OPEN, start)
    b = content.find(BLOCK_OPEN, start)
    if a < 0:
        return b
    if b < 0:
        return a
    return min(a, b)


def match_at(content: str, pointer: int, base_offset: int = 0) -> Optional[BlockMatch]:
    """Try every rule at ``pointer``; return the first match or None."""
    for rule in RULES:
        m = rule.pattern.match(content, pointer)
        if m is None:
            continue
        opening, tag, attr_text, opening_close, body, closing = (g or "" for g in m.groups())
        return BlockMatch(
            family=rule.family,
            shape=rule.shape,
            text=m.group(0),
            opening=opening,
            tag=tag,
            attr_text=attr_text,
            opening_close=opening_close,
            body=body,
            closing=closing,
            offset=base_offset + pointer,
        )
    return None


# /*#*/ function () { /*! long text */ }  ->  "long text"
_COMMENT_FUNCTION = re.compile(
    r"/\*#\*/\s*function\s*\(\s*\)\s*\{\s*/\*!?(.*?)\*/[\s;]*\}",
    re.DOTALL,
)

# /*,*/ function name(a, b)  ->  ['a', 'b'], function name(a, b)
_SIGNATURE_FUNCTION = re.compile(
    r"/\*,\*/\s*(function(?:\s+[\w$]+)?\s*\(\s*([^()]+)\s*\))",
)

_PARAM_NAME = re.compile(r"[^\s,]+")


def expand_macros(content: str) -> str:
    """Apply the two resolution-time textual macros.

    - a function whose body is a single ``/*! ... */`` comment and which is
      prefixed with ``/*#*/`` becomes a string literal of the comment text;
    - a function prefixed with ``/*,*/`` is preceded by a literal list of its
      parameter names.
    """
    content = _COMMENT_FUNCTION.sub(
        lambda m: json.dumps(m.group(1), ensure_ascii=False),
        content,
    )
    return _SIGNATURE_FUNCTION.sub(
        lambda m: "[" + _PARAM_NAME.sub(lambda p: f"'{p.group(0)}'", m.group(2)) + "], " + m.group(1),
        content,
    )


def scan(
    content: str,
    on_match: MatchHandler,
    resolution: bool = False,
    base_offset: int = 0,
) -> str:
    """Scan ``content`` for markers, replacing each match via ``on_match``.

    Args:
        content: Text to scan
        on_match: Handler returning the replacement text for a match
        resolution: Apply the resolution-time macros to the result
        base_offset: Added to every reported match offset

    Returns:
        Transformed content
    """
    parts: List[str] = []
    start = 0
    length = len(content)
    while start < length:
        pointer = _next_candidate(content, start)
        if pointer < 0:
            break

        match = match_at(content, pointer, base_offset)
        if match is None:
            # Not a marker; keep everything up to and including this character.
            parts.append(content[start:pointer + 1])
            start = pointer + 1
            continue

        parts.append(content[start:pointer])
        parts.append(on_match(match))
        start = pointer + len(match.text)

    parts.append(content[start:])
    result = "".join(parts)

    if resolution:
        result = expand_macros(result)
    return result


__all__ = [
    "MarkerFamily",
    "TagShape",
    "ScanRule",
    "RULES",
    "BlockMatch",
    "MatchHandler",
    "match_at",
    "expand_macros",
    "scan",
]
