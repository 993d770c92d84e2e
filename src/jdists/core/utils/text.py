"""Text helpers shared by the scanner, resolver and encoding processors.

Contains:
  - whitespace normalization (``clean``)
  - HTML entity encoding/decoding
  - JavaScript-compatible URI and legacy ``escape()`` encoders
  - content hashing
"""
from __future__ import annotations

import hashlib
import html
import re
from typing import Union
from urllib.parse import quote

Content = Union[str, bytes]

_TRAILING_WS = re.compile(r"[ \t\f\v]+$", re.MULTILINE)
_BLANK_RUNS = re.compile(r"\n{3,}")

# Characters left untouched by encodeURIComponent (besides alphanumerics).
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Characters left untouched by the legacy escape() function.
_ESCAPE_SAFE = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789@*_+-./"
)


def to_text(content: Content, encoding: str = "utf-8") -> str:
    """Return ``content`` as text, decoding bytes with replacement."""
    if isinstance(content, bytes):
        return content.decode(encoding, errors="replace")
    return content


def to_bytes(content: Content, encoding: str = "utf-8") -> bytes:
    """Return ``content`` as bytes, encoding text as UTF-8."""
    if isinstance(content, bytes):
        return content
    return content.encode(encoding)


def normalize_whitespace(text: str) -> str:
    """Strip trailing blanks from every line and collapse 3+ newlines to one blank line."""
    text = _TRAILING_WS.sub("", text)
    return _BLANK_RUNS.sub("\n\n", text)


def encode_entities(text: str) -> str:
    """Escape ``& < > " '`` as HTML entities."""
    return html.escape(text, quote=True)


def decode_entities(text: str) -> str:
    """Decode HTML entities (named and numeric)."""
    return html.unescape(text)


def encode_uri_component(text: str) -> str:
    """Percent-encode like JavaScript's ``encodeURIComponent``."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def js_escape(text: str) -> str:
    """Percent-encode like JavaScript's legacy ``escape()``.

    Code units below 256 become ``%XX``; everything else becomes ``%uXXXX``
    (astral characters are split into their UTF-16 surrogate pair first).
    """
    parts = []
    for char in text:
        if char in _ESCAPE_SAFE:
            parts.append(char)
            continue
        code = ord(char)
        if code < 256:
            parts.append(f"%{code:02X}")
        elif code < 0x10000:
            parts.append(f"%u{code:04X}")
        else:
            code -= 0x10000
            parts.append(f"%u{0xD800 + (code >> 10):04X}")
            parts.append(f"%u{0xDC00 + (code & 0x3FF):04X}")
    return "".join(parts)


def hash_content(content: Content) -> str:
    """Return the hex MD5 digest of ``content``."""
    return hashlib.md5(to_bytes(content)).hexdigest()


__all__ = [
    "Content",
    "to_text",
    "to_bytes",
    "normalize_whitespace",
    "encode_entities",
    "decode_entities",
    "encode_uri_component",
    "js_escape",
    "hash_content",
]
