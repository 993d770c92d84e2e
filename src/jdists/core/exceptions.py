from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence


class JdistsError(Exception):
    """Base exception for jdists."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class CircularReferenceError(JdistsError, RuntimeError):
    """Raised when a block is requested while it is still being resolved."""

    def __init__(
        self,
        key: Sequence[str],
        chain: Sequence[Sequence[str]] = (),
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("key", list(key))
        ctx.setdefault("chain", [list(k) for k in chain])
        file_path, tag = key
        message = f"Circular reference block: {file_path}#{tag}" if tag else f"Circular reference block: {file_path}"
        JdistsError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.key = tuple(key)
        self.chain = [tuple(k) for k in chain]


class ConfigurationError(JdistsError, ValueError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        JdistsError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "JdistsError",
    "CircularReferenceError",
    "ConfigurationError",
]
