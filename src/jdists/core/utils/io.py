"""File I/O helpers.

Single place for the read/write patterns used by the loader, resolver,
template processor and CLI.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

from .text import Content

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def read_text(path: PathLike, encoding: str = "utf-8") -> str:
    """Read a text file, keeping line endings exactly as stored.

    Undecodable bytes become U+FFFD rather than failing the read.
    """
    with open(path, "r", encoding=encoding, errors="replace", newline="") as fh:
        return fh.read()


def read_bytes(path: PathLike) -> bytes:
    return Path(path).read_bytes()


def atomic_write(path: PathLike, content: Content, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` atomically, creating parent directories.

    Data goes to a temporary file in the same directory which is then
    renamed over the target.
    """
    target = Path(path)
    ensure_parent_dir(target)
    data = content.encode(encoding) if isinstance(content, str) else content

    fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "read_text",
    "read_bytes",
    "atomic_write",
]
