"""Tests for marker attribute parsing."""
from __future__ import annotations

from pathlib import Path

from jdists.core.attributes import is_variant_name, parse_attributes


class TestParseAttributes:
    def test_parses_name_value_pairs(self, tmp_path: Path) -> None:
        attrs = parse_attributes("include", ' block="main" encoding="base64" slice="1,3"', tmp_path)

        assert attrs.block == "main"
        assert attrs.encoding == "base64"
        assert attrs.slice == "1,3"
        assert dict(attrs) == {"block": "main", "encoding": "base64", "slice": "1,3"}

    def test_values_are_entity_decoded(self, tmp_path: Path) -> None:
        attrs = parse_attributes("replace", ' data="&lt;x&gt; &amp; y"', tmp_path)
        assert attrs["data"] == "<x> & y"

    def test_file_and_export_resolve_against_base_dir(self, tmp_path: Path) -> None:
        attrs = parse_attributes("include", ' file="lib/a.js" export="../out/a.js"', tmp_path / "src")

        assert attrs.file == "lib/a.js"
        assert attrs.file_path == (tmp_path / "src" / "lib" / "a.js").resolve()
        assert attrs.export_path == (tmp_path / "out" / "a.js").resolve()

    def test_variant_names_are_not_paths(self, tmp_path: Path) -> None:
        attrs = parse_attributes("include", ' file="#banner" export="#copy"', tmp_path)

        assert attrs.file == "#banner"
        assert attrs.file_path is None
        assert attrs.export_path is None

    def test_empty_attribute_text(self, tmp_path: Path) -> None:
        attrs = parse_attributes("main", "", tmp_path)

        assert len(attrs) == 0
        assert attrs.file is None
        assert attrs.file_path is None

    def test_unknown_keys_pass_through(self, tmp_path: Path) -> None:
        attrs = parse_attributes("replace", ' data="d.yaml" lang="en"', tmp_path)
        assert attrs.get("lang") == "en"
        assert attrs.get("missing") is None


class TestTriggers:
    def test_no_trigger_never_excludes(self, tmp_path: Path) -> None:
        attrs = parse_attributes("main", "", tmp_path)
        assert attrs.excludes_trigger("release") is False

    def test_trigger_list_membership(self, tmp_path: Path) -> None:
        attrs = parse_attributes("main", ' trigger="debug, release"', tmp_path)

        assert attrs.excludes_trigger("release") is False
        assert attrs.excludes_trigger("debug") is False
        assert attrs.excludes_trigger("prod") is True

    def test_trigger_is_not_a_substring_match(self, tmp_path: Path) -> None:
        attrs = parse_attributes("main", ' trigger="prerelease"', tmp_path)
        assert attrs.excludes_trigger("release") is True


def test_is_variant_name() -> None:
    assert is_variant_name("#x")
    assert not is_variant_name("x.js")
    assert not is_variant_name("")
    assert not is_variant_name(None)
