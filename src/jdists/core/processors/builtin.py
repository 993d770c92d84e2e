"""Built-in encoding processors."""
from __future__ import annotations

import base64
import json

from ..utils.text import encode_entities, encode_uri_component, hash_content, js_escape, to_bytes, to_text
from .registry import ProcessorContext, register_processor


@register_processor("base64")
def encode_base64(ctx: ProcessorContext) -> str:
    return base64.b64encode(to_bytes(ctx.content)).decode("ascii")


@register_processor("md5")
def encode_md5(ctx: ProcessorContext) -> str:
    return hash_content(ctx.content)


@register_processor("url")
def encode_url(ctx: ProcessorContext) -> str:
    return encode_uri_component(to_text(ctx.content))


@register_processor("html")
def encode_html(ctx: ProcessorContext) -> str:
    return encode_entities(to_text(ctx.content))


@register_processor("string")
def encode_string(ctx: ProcessorContext) -> str:
    """Render content as a double-quoted string literal."""
    return json.dumps(to_text(ctx.content), ensure_ascii=False)


@register_processor("escape")
def encode_escape(ctx: ProcessorContext) -> str:
    return js_escape(to_text(ctx.content))


__all__ = [
    "encode_base64",
    "encode_md5",
    "encode_url",
    "encode_html",
    "encode_string",
    "encode_escape",
]
