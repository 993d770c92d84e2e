"""
jdists CLI package.

Commands are auto-discovered from ``jdists.cli.commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
"""
from ._args import add_config_flag, add_json_flag, add_standard_flags, add_verbose_flag
from ._output import OutputFormatter

__all__ = [
    "OutputFormatter",
    "add_config_flag",
    "add_json_flag",
    "add_standard_flags",
    "add_verbose_flag",
]
