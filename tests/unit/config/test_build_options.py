"""Tests for BuildOptions."""
from __future__ import annotations

from dataclasses import fields
from pathlib import Path

import pytest

from jdists.core.config import BuildOptions
from jdists.data import read_json


class TestBuildOptions:
    def test_defaults(self) -> None:
        options = BuildOptions()

        assert options.clean is True
        assert options.remove_list == ["debug", "test"]
        assert options.trigger == "release"

    @pytest.mark.parametrize(
        "remove,expected",
        [("a, b,,c", ["a", "b", "c"]), (["x", " y "], ["x", "y"]), ([], []), ("", ["debug", "test"]), (None, ["debug", "test"])],
    )
    def test_remove_list(self, remove, expected) -> None:
        assert BuildOptions(remove=remove).remove_list == expected

    def test_empty_trigger_falls_back_to_default(self) -> None:
        assert BuildOptions(trigger="").trigger == "release"

    def test_binary_by_extension_or_predicate(self) -> None:
        options = BuildOptions(binary_extensions=(".dat", "png"), is_binary=lambda p: p.name == "blob")

        assert options.treats_as_binary(Path("a.dat"))
        assert options.treats_as_binary(Path("a.png"))
        assert options.treats_as_binary(Path("blob"))
        assert not options.treats_as_binary(Path("a.js"))

    def test_from_config_ignores_none_overrides(self) -> None:
        cfg = {"build": {"trigger": "debug", "clean": False, "binary_extensions": ["gif"]}, "logging": {}}
        options = BuildOptions.from_config(cfg, trigger=None, clean=None, remove="x")

        assert options.trigger == "debug"
        assert options.clean is False
        assert options.remove_list == ["x"]
        assert options.binary_extensions == ("gif",)

    def test_from_config_rejects_unknown_override(self) -> None:
        with pytest.raises(TypeError):
            BuildOptions.from_config({}, colour="red")

    def test_to_dict(self) -> None:
        data = BuildOptions(remove="a,b").to_dict()
        assert data["remove"] == ["a", "b"]
        assert data["trigger"] == "release"

    def test_fields_mirror_config_schema(self) -> None:
        schema = read_json("schemas", "config.schema.json")
        configurable = {f.name for f in fields(BuildOptions)} - {"is_binary"}
        assert configurable == set(schema["properties"]["build"]["properties"])
