from __future__ import annotations

import argparse

from jdists.cli._args import add_json_flag
from jdists.cli._output import OutputFormatter
from jdists.core.processors import global_registry


SUMMARY = "List registered encoding processors"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)
    formatter.listing("encodings", global_registry.list_processors())
    return 0
