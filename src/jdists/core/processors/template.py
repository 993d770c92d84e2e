"""Jinja2 template processor (``encoding="template"``).

The block content is treated as a Jinja2 template. An optional ``data``
attribute points at the template data, either a variant (``#name``) or a
file relative to the block's directory; the text is parsed as YAML (which
also accepts JSON). The rendered output is resolved again, so templates may
emit further markers.

    <!--include file="card.html" encoding="template" data="card.yaml"/-->
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import yaml
from jinja2 import Environment, StrictUndefined

from ..utils.text import to_text
from .registry import ProcessorContext, register_processor

logger = logging.getLogger(__name__)

_ENVIRONMENT = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def _load_data(ctx: ProcessorContext) -> Dict[str, Any]:
    ref = ctx.attributes.get("data")
    if not ref:
        return {}
    text = ctx.read_reference(ref)
    if text is None:
        logger.warning('Template data "%s" not found (block %s)', ref, ctx.block_file or ctx.source_file)
        return {}
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return {"data": data}
    return data


@register_processor("template")
def render_template(ctx: ProcessorContext) -> str:
    content = to_text(ctx.content)
    if not content:
        return content
    template = _ENVIRONMENT.from_string(content)
    rendered = template.render(**_load_data(ctx))
    return ctx.resolve(rendered)


__all__ = ["render_template"]
