"""CLI output formatting.

Commands print through :class:`OutputFormatter` so that ``--json`` switches
every command between plain text on stdout and a single JSON document.
Errors always go to stderr.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, Optional


class OutputFormatter:
    """Text/JSON output for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any, stream=None) -> None:
        print(json.dumps(data, indent=self.indent, default=str, ensure_ascii=False), file=stream or sys.stdout)

    def build_result(self, source: Path, content: str, output: Optional[Path] = None) -> None:
        """Report a finished build.

        Text mode prints the flattened content, or a one-line summary when it
        was written to ``output``. JSON mode prints ``{"status": "success", ...}``
        with either the content or the output path.
        """
        if self.json_mode:
            payload: Dict[str, Any] = {"status": "success", "input": str(source.resolve())}
            if output is not None:
                payload.update(output=str(output.resolve()), length=len(content))
            else:
                payload["content"] = content
            self._dump(payload)
        elif output is not None:
            print(f"Built {source} -> {output}")
        else:
            print(content)

    def listing(self, key: str, items: Iterable[str]) -> None:
        """Print one item per line, or ``{key: [...]}`` in JSON mode."""
        values = list(items)
        if self.json_mode:
            self._dump({key: values})
        else:
            for value in values:
                print(value)

    def error(self, error: Exception, *, error_code: str = "error") -> None:
        """Report ``error`` on stderr, with its JSON payload when available."""
        if self.json_mode:
            to_json = getattr(error, "to_json_error", None)
            payload = to_json() if callable(to_json) else {"message": str(error)}
            self._dump({"error": error_code, **payload}, stream=sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)


__all__ = ["OutputFormatter"]
