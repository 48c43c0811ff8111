"""Tree-sitter integration: the parser the code-order engine runs on.

Install with: pip install tree-sitter-language-pack
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_AVAILABLE = False
try:
    import tree_sitter_language_pack  # noqa: F401

    _AVAILABLE = True
except ImportError:
    logger.debug("tree-sitter-language-pack not installed; parsing disabled")


def is_available() -> bool:
    """Return True if tree-sitter-language-pack is installed."""
    return _AVAILABLE


def enable_parse_cache() -> None:
    """Enable scan-scoped parse tree cache."""
    from ._cache import enable_parse_cache as _enable

    _enable()


def disable_parse_cache() -> None:
    """Disable parse tree cache and free memory."""
    from ._cache import disable_parse_cache as _disable

    _disable()


# Common exception tuple for tree-sitter parser initialisation failures.
PARSE_INIT_ERRORS: tuple[type[Exception], ...] = (
    ImportError, OSError, ValueError, RuntimeError, LookupError
)

# tree-sitter-javascript parses JSX; TypeScript needs the tsx grammar for it.
GRAMMAR_BY_EXTENSION: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}


def grammar_for_path(filepath: str) -> str | None:
    """Return the grammar name for a file, or None for unsupported extensions."""
    for ext, grammar in GRAMMAR_BY_EXTENSION.items():
        if filepath.endswith(ext):
            return grammar
    return None


from ._cache import parse_file, parse_source  # noqa: E402
from ._nodes import field, node_text, walk  # noqa: E402

__all__ = [
    "GRAMMAR_BY_EXTENSION",
    "PARSE_INIT_ERRORS",
    "disable_parse_cache",
    "enable_parse_cache",
    "field",
    "grammar_for_path",
    "is_available",
    "node_text",
    "parse_file",
    "parse_source",
    "walk",
]
