"""Configuration loading and build options."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .manager import ConfigManager
from .options import BuildOptions


def load_options(
    project_root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    **overrides: Any,
) -> BuildOptions:
    """Load layered configuration and turn it into :class:`BuildOptions`."""
    cfg = ConfigManager(project_root, config_path).load_config()
    return BuildOptions.from_config(cfg, **overrides)


__all__ = ["BuildOptions", "ConfigManager", "load_options"]
