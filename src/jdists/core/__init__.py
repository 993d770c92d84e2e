"""jdists core: scanner, load/resolve graphs, processors and build session."""
from __future__ import annotations

from .builder import Builder, build, default_builder, get_variant, register_encoding, set_variant
from .config import BuildOptions
from .exceptions import CircularReferenceError, ConfigurationError, JdistsError
from .processors import ProcessorContext, ProcessorRegistry

__all__ = [
    "Builder",
    "BuildOptions",
    "CircularReferenceError",
    "ConfigurationError",
    "JdistsError",
    "ProcessorContext",
    "ProcessorRegistry",
    "build",
    "default_builder",
    "get_variant",
    "register_encoding",
    "set_variant",
]
