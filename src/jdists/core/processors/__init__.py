"""Encoding processors for jdists.

- registry: processor contract, registry and the global registry
- builtin: base64, md5, url, html, string, escape
- template: Jinja2 rendering with YAML/JSON data
"""
from __future__ import annotations

from .registry import (
    Processor,
    ProcessorContext,
    ProcessorRegistry,
    global_registry,
    register_processor,
)
# Importing the modules registers their processors in global_registry.
from . import builtin as _builtin  # noqa: F401
from . import template as _template  # noqa: F401

__all__ = [
    "Processor",
    "ProcessorContext",
    "ProcessorRegistry",
    "global_registry",
    "register_processor",
]
