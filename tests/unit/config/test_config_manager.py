"""Tests for layered configuration loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from jdists.core.config import ConfigManager, load_options
from jdists.core.exceptions import ConfigurationError


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLayering:
    def test_bundled_defaults(self, tmp_path: Path) -> None:
        cfg = ConfigManager(tmp_path).load_config()

        assert cfg["build"]["clean"] is True
        assert cfg["build"]["remove"] == "debug,test"
        assert cfg["build"]["trigger"] == "release"
        assert "png" in cfg["build"]["binary_extensions"]
        assert cfg["logging"]["level"] == "WARNING"

    @pytest.mark.parametrize("name", [".jdists.yaml", ".jdists.yml"])
    def test_project_config_overrides_defaults(self, tmp_path: Path, name: str) -> None:
        write(tmp_path / name, "build:\n  trigger: debug\n")
        cfg = ConfigManager(tmp_path).load_config()

        assert cfg["build"]["trigger"] == "debug"
        assert cfg["build"]["clean"] is True

    def test_explicit_config_overrides_project(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "build:\n  trigger: debug\n  remove: legacy\n")
        explicit = write(tmp_path / "ci" / "jdists.yaml", "build:\n  trigger: ci\n")
        cfg = ConfigManager(tmp_path, explicit).load_config()

        assert cfg["build"]["trigger"] == "ci"
        assert cfg["build"]["remove"] == "legacy"

    def test_project_list_can_extend_defaults(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", 'build:\n  binary_extensions: ["+", webp]\n')
        exts = ConfigManager(tmp_path).load_config()["build"]["binary_extensions"]

        assert exts[-1] == "webp"
        assert "png" in exts and "+" not in exts

    def test_empty_project_file_is_ignored(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "")
        assert ConfigManager(tmp_path).load_config()["build"]["trigger"] == "release"


class TestEnvironmentOverrides:
    def test_single_underscore_section_key(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("JDISTS_BUILD_TRIGGER", "staging")
        monkeypatch.setenv("JDISTS_BUILD_CLEAN", "false")
        monkeypatch.setenv("JDISTS_LOGGING_LEVEL", "DEBUG")
        cfg = ConfigManager(tmp_path).load_config()

        assert cfg["build"]["trigger"] == "staging"
        assert cfg["build"]["clean"] is False
        assert cfg["logging"]["level"] == "DEBUG"

    def test_double_underscore_for_keys_with_underscores(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("JDISTS_BUILD__BINARY_EXTENSIONS", '["png", "webp"]')
        cfg = ConfigManager(tmp_path).load_config()
        assert cfg["build"]["binary_extensions"] == ["png", "webp"]

    def test_env_beats_files(self, tmp_path: Path, monkeypatch) -> None:
        write(tmp_path / ".jdists.yaml", "build:\n  trigger: debug\n")
        monkeypatch.setenv("JDISTS_BUILD_TRIGGER", "release")
        assert ConfigManager(tmp_path).load_config()["build"]["trigger"] == "release"

    def test_malformed_key_is_ignored(self, tmp_path: Path, monkeypatch, caplog) -> None:
        monkeypatch.setenv("JDISTS_BUILD__", "x")
        cfg = ConfigManager(tmp_path).load_config()

        assert cfg["build"]["trigger"] == "release"
        assert "Ignoring malformed environment override JDISTS_BUILD__" in caplog.text

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("FALSE", False), ("12", 12), ("[1, 2]", [1, 2]), ("[oops", "[oops"), ("text", "text")],
    )
    def test_coerce_type(self, tmp_path: Path, raw, expected) -> None:
        assert ConfigManager(tmp_path)._coerce_type(raw) == expected


class TestValidation:
    def test_wrong_type_fails_closed(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", 'build:\n  clean: "yes"\n')
        with pytest.raises(ConfigurationError, match="build.clean"):
            ConfigManager(tmp_path).load_config()

    def test_unknown_build_key_fails(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "build:\n  colour: red\n")
        with pytest.raises(ConfigurationError):
            ConfigManager(tmp_path).load_config()

    def test_validation_can_be_skipped(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "build:\n  colour: red\n")
        assert ConfigManager(tmp_path).load_config(validate=False)["build"]["colour"] == "red"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "build: [\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigManager(tmp_path).load_config()

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        write(tmp_path / ".jdists.yaml", "- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(tmp_path).load_config()

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found") as excinfo:
            ConfigManager(tmp_path, tmp_path / "missing.yaml").load_config()
        assert excinfo.value.context["path"].endswith("missing.yaml")


def test_load_options(tmp_path: Path) -> None:
    write(tmp_path / ".jdists.yaml", "build:\n  remove: [debug, legacy]\n")
    options = load_options(tmp_path, trigger="debug", clean=None)

    assert options.trigger == "debug"
    assert options.clean is True
    assert options.remove_list == ["debug", "legacy"]
