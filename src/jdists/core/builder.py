"""Build entry point: load, resolve and clean one entry file.

Usage:
    builder = Builder()
    builder.set_variant("#banner", "/* v1.2.0 */")
    output = builder.build("src/main.js", trigger="release")

Module-level :func:`build`, :func:`register_encoding`, :func:`get_variant`
and :func:`set_variant` operate on a shared default builder.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Union

from .config.options import BuildOptions
from .loader import LoadGraph
from .processors import Processor, ProcessorRegistry, global_registry
from .resolver import ResolveGraph
from .session import BuildSession, VariantStore
from .utils.text import Content, normalize_whitespace

logger = logging.getLogger(__name__)


class Builder:
    """Owns an encoding registry and preset variants; runs isolated builds.

    Every :meth:`build` gets a fresh :class:`BuildSession`. The session
    starts with a copy of the registry and of the preset variants, so
    registrations and exports made during a build never leak into the next
    one. The variant store of the most recent build stays readable through
    :meth:`get_variant`.
    """

    def __init__(self, registry: Optional[ProcessorRegistry] = None) -> None:
        self.registry = registry if registry is not None else global_registry.copy()
        self.variants = VariantStore()
        self.last_session: Optional[BuildSession] = None

    def register_encoding(self, name: str, processor: Processor) -> None:
        self.registry.add(name, processor)

    def get_variant(self, name: str) -> Optional[Content]:
        """Return a variant from the last build, falling back to the presets."""
        if self.last_session is not None and name in self.last_session.variants:
            return self.last_session.variants.get(name)
        return self.variants.get(name)

    def set_variant(self, name: str, content: Content) -> Content:
        """Preset a variant visible to every subsequent build.

        The value also replaces any export of the same name from the last
        build, so ``get_variant`` returns the most recent write.
        """
        if self.last_session is not None:
            self.last_session.variants.set(name, content)
        return self.variants.set(name, content)

    def create_session(self, options: BuildOptions) -> BuildSession:
        return BuildSession(
            options=options,
            registry=self.registry.copy(),
            variants=self.variants.copy(),
        )

    def build(
        self,
        file_path: Union[str, Path],
        options: Optional[BuildOptions] = None,
        **overrides: Any,
    ) -> str:
        """Build ``file_path`` and return the flattened output.

        Args:
            file_path: Entry file (relative paths resolve from the cwd)
            options: Build options; keyword overrides are applied on top
            **overrides: clean, remove, trigger, is_binary, ... (``remove=""``
                keeps the default list; ``remove=[]`` removes nothing)

        Raises:
            CircularReferenceError: When blocks reference each other
        """
        if options is None:
            options = BuildOptions(**overrides)
        elif overrides:
            options = replace(options, **overrides)

        entry = Path(file_path).resolve()
        session = self.create_session(options)
        logger.debug("build %s (trigger=%s, remove=%s)", entry, options.trigger, options.remove_list)

        LoadGraph(session).load(entry)
        result = ResolveGraph(session).resolve(entry)

        if options.clean:
            result = normalize_whitespace(result)

        session.reset()
        self.last_session = session
        return result


default_builder = Builder(registry=global_registry)


def build(file_path: Union[str, Path], **options: Any) -> str:
    """Build ``file_path`` with the default builder."""
    return default_builder.build(file_path, **options)


def register_encoding(name: str, processor: Processor) -> None:
    """Register an encoding processor for all builds of the default builder."""
    default_builder.register_encoding(name, processor)


def get_variant(name: str) -> Optional[Content]:
    return default_builder.get_variant(name)


def set_variant(name: str, content: Content) -> Content:
    return default_builder.set_variant(name, content)


__all__ = [
    "Builder",
    "default_builder",
    "build",
    "register_encoding",
    "get_variant",
    "set_variant",
]
