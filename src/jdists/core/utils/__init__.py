"""Utility helpers for jdists (text and file I/O)."""
from __future__ import annotations

from .io import atomic_write, ensure_parent_dir, read_bytes, read_text
from .text import (
    Content,
    decode_entities,
    encode_entities,
    encode_uri_component,
    hash_content,
    js_escape,
    normalize_whitespace,
    to_bytes,
    to_text,
)

__all__ = [
    "Content",
    "atomic_write",
    "ensure_parent_dir",
    "read_bytes",
    "read_text",
    "decode_entities",
    "encode_entities",
    "encode_uri_component",
    "hash_content",
    "js_escape",
    "normalize_whitespace",
    "to_bytes",
    "to_text",
]
