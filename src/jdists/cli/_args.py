"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag for an explicit YAML config file."""
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="YAML config file layered over the project config",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts (--json, --verbose, --config)."""
    add_json_flag(parser)
    add_verbose_flag(parser)
    add_config_flag(parser)


__all__ = [
    "add_json_flag",
    "add_verbose_flag",
    "add_config_flag",
    "add_standard_flags",
]
