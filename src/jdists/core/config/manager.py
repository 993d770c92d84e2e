"""
jdists configuration management (YAML, layered).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from jdists.core.exceptions import ConfigurationError
from jdists.core.utils.merge import deep_merge
from jdists.data import get_data_path, read_json

logger = logging.getLogger(__name__)

try:
    import yaml  # type: ignore
except Exception as err:  # pragma: no cover - surfaced at import time
    raise RuntimeError("PyYAML is required: pip install pyyaml") from err

try:
    import jsonschema  # type: ignore
except Exception as err:  # pragma: no cover - surfaced at import time
    raise RuntimeError("jsonschema is required: pip install jsonschema") from err


PROJECT_CONFIG_NAMES = (".jdists.yaml", ".jdists.yml")
ENV_PREFIX = "JDISTS_"


class ConfigManager:
    """Load, merge, and validate jdists configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: JDISTS_<SECTION>_<KEY> (use ``__`` as the
       separator when a key contains underscores, e.g. JDISTS_BUILD__BINARY_EXTENSIONS)
    2. Explicit config file passed as ``config_path``
    3. Project config: <project_root>/.jdists.yaml (or .jdists.yml)
    4. Bundled defaults: jdists.data/config/defaults.yaml
    """

    def __init__(self, project_root: Optional[Path] = None, config_path: Optional[Path] = None) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.config_path = Path(config_path) if config_path else None
        self.defaults_path = get_data_path("config", "defaults.yaml")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: a config file that exists must parse to a mapping.
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root must be a mapping: {path}", context={"path": str(path)})
        return data

    def project_config_file(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_NAMES:
            candidate = self.project_root / name
            if candidate.is_file():
                return candidate
        return None

    # ----- Environment overrides -----
    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if (s.startswith("[") and s.endswith("]")) or (s.startswith("{") and s.endswith("}")):
            try:
                return json.loads(s)
            except ValueError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__") if "__" in raw else raw.split("_", 1)
            if not raw or any(not seg for seg in segs):
                logger.warning("Ignoring malformed environment override %s", key)
                continue
            yield [seg.lower() for seg in segs], self._coerce_type(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value in self._iter_env_overrides():
            cur = cfg
            for part in path[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[path[-1]] = value
        return cfg

    # ----- Validation -----
    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        try:
            jsonschema.validate(instance=cfg, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigurationError(
                f"Invalid configuration at {location}: {exc.message}",
                context={"path": location},
            ) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load bundled defaults, overlay project/explicit files and env vars."""
        cfg = self.load_yaml(self.defaults_path)

        project_file = self.project_config_file()
        if project_file is not None:
            logger.debug("Loading project config %s", project_file)
            cfg = deep_merge(cfg, self.load_yaml(project_file))

        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigurationError(
                    f"Config file not found: {self.config_path}",
                    context={"path": str(self.config_path)},
                )
            cfg = deep_merge(cfg, self.load_yaml(self.config_path))

        cfg = self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "PROJECT_CONFIG_NAMES", "ENV_PREFIX"]
