"""Tests for ProcessorRegistry."""
from __future__ import annotations

import pytest

from jdists.core.processors import ProcessorRegistry


class TestProcessorRegistry:
    def test_register_decorator(self) -> None:
        registry = ProcessorRegistry()

        @registry.register("upper")
        def upper(ctx):
            return ctx.content.upper()

        assert registry.get("upper") is upper
        assert "upper" in registry

    def test_add_replaces_existing(self) -> None:
        registry = ProcessorRegistry()
        first = lambda ctx: "1"  # noqa: E731
        second = lambda ctx: "2"  # noqa: E731
        registry.add("x", first)
        registry.add("x", second)

        assert registry.get("x") is second

    @pytest.mark.parametrize("name,func", [("", lambda ctx: ""), ("x", None)])
    def test_add_requires_name_and_callable(self, name, func) -> None:
        with pytest.raises(ValueError):
            ProcessorRegistry().add(name, func)

    def test_get_unknown_or_empty(self) -> None:
        registry = ProcessorRegistry()
        assert registry.get("nope") is None
        assert registry.get(None) is None
        assert registry.get("") is None

    def test_list_is_sorted(self) -> None:
        registry = ProcessorRegistry()
        for name in ("b", "c", "a"):
            registry.add(name, lambda ctx: "")
        assert registry.list_processors() == ["a", "b", "c"]

    def test_copy_is_independent(self) -> None:
        registry = ProcessorRegistry()
        registry.add("a", lambda ctx: "")
        clone = registry.copy()
        clone.add("b", lambda ctx: "")

        assert "b" not in registry
        assert "a" in clone
