"""
Command-line entry point for jdists.

Every module in ``jdists.cli.commands`` is a subcommand. A command module
exposes:

    SUMMARY = "one line shown in --help"
    def register_args(parser): ...
    def main(args) -> int: ...
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pkgutil
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional

from jdists import __version__
from jdists.cli import commands as commands_pkg

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Command:
    name: str
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    main: Optional[Callable[[argparse.Namespace], int]]


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, Command]:
    """Import every public module under ``jdists.cli.commands``."""
    found: dict[str, Command] = {}
    for info in pkgutil.iter_modules(commands_pkg.__path__):
        if info.name.startswith("_"):
            continue
        try:
            module = importlib.import_module(f"{commands_pkg.__name__}.{info.name}")
        except ImportError as exc:
            logger.warning("Skipping command %s: %s", info.name, exc)
            continue
        found[info.name] = Command(
            name=info.name.replace("_", "-"),
            summary=getattr(module, "SUMMARY", info.name),
            register_args=getattr(module, "register_args", None),
            main=getattr(module, "main", None),
        )
    return found


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jdists",
        description="Expand <!--tag--> and /*<tag>*/ marker blocks in source files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", title="commands", metavar="<command>")
    for command in sorted(discover_commands().values(), key=lambda c: c.name):
        sub = subparsers.add_parser(command.name, help=command.summary, description=command.summary)
        if command.register_args is not None:
            command.register_args(sub)
        if command.main is not None:
            sub.set_defaults(_func=command.main)
    return parser


def configure_logging(verbose: bool = False, level: str | None = None) -> None:
    """Send log records to stderr; --verbose forces DEBUG."""
    if verbose:
        resolved = logging.DEBUG
    else:
        resolved = getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, stream=sys.stderr, force=True)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    func = getattr(args, "_func", None)
    if func is None:
        parser.print_help()
        return 0

    configure_logging(verbose=getattr(args, "verbose", False))
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
