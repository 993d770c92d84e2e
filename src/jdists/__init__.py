"""
jdists - block-marker preprocessor for source trees

Expands ``<!--tag-->`` and ``/*<tag>*/`` marker blocks embedded in comments,
including blocks across files, stripping debug/test code, encoding extracted
content and exporting it to variants or files.
"""

__version__ = "1.0.0"

from jdists.core import (  # noqa: E402
    Builder,
    BuildOptions,
    CircularReferenceError,
    JdistsError,
    ProcessorContext,
    build,
    get_variant,
    register_encoding,
    set_variant,
)

__all__ = [
    "__version__",
    "Builder",
    "BuildOptions",
    "CircularReferenceError",
    "JdistsError",
    "ProcessorContext",
    "build",
    "get_variant",
    "register_encoding",
    "set_variant",
]
