from __future__ import annotations

import argparse
from pathlib import Path

from jdists.cli._args import add_standard_flags
from jdists.cli._dispatcher import configure_logging
from jdists.cli._output import OutputFormatter
from jdists.core.builder import Builder
from jdists.core.config import BuildOptions, ConfigManager
from jdists.core.exceptions import JdistsError
from jdists.core.utils.io import atomic_write


SUMMARY = "Expand marker blocks in a file and write the flattened output"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)
    parser.add_argument("input", help="Entry file to build")
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument(
        "--remove",
        "-r",
        help="Comma-separated tags whose blocks are dropped (default: debug,test)",
    )
    parser.add_argument(
        "--trigger",
        "-t",
        help="Active trigger name (default: release)",
    )
    parser.add_argument(
        "--no-clean",
        dest="clean",
        action="store_false",
        default=None,
        help="Keep whitespace exactly as produced",
    )


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)
    try:
        manager = ConfigManager(Path.cwd(), Path(args.config) if args.config else None)
        cfg = manager.load_config()
        configure_logging(verbose=args.verbose, level=(cfg.get("logging") or {}).get("level"))

        options = BuildOptions.from_config(
            cfg,
            clean=args.clean,
            remove=args.remove,
            trigger=args.trigger,
        )
        result = Builder().build(args.input, options)
    except JdistsError as exc:
        formatter.error(exc, error_code="build_failed")
        return 1

    output = Path(args.output) if args.output else None
    if output is not None:
        atomic_write(output, result, options.encoding)
    formatter.build_result(Path(args.input), result, output)
    return 0
