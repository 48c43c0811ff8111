"""Parser construction and a scan-scoped tree-sitter parse tree cache."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=8)
def get_parser(grammar: str):
    """Get a tree-sitter parser for the given grammar."""
    from tree_sitter_language_pack import get_parser as _get_parser

    return _get_parser(grammar)


def parse_source(source: bytes, grammar: str):
    """Parse in-memory source and return the tree."""
    return get_parser(grammar).parse(source)


class ParseTreeCache:
    """Cache parsed tree-sitter trees during a scan.

    Key: (filepath, grammar_name) -> (source_bytes, parsed_tree)
    Stores source_bytes so callers can use them without re-reading.
    """

    def __init__(self) -> None:
        self._enabled: bool = False
        self._trees: dict[tuple[str, str], tuple[bytes, object]] = {}

    def enable(self) -> None:
        self._enabled = True
        self._trees = {}

    def disable(self) -> None:
        self._enabled = False
        self._trees = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get_or_parse(self, filepath: str, grammar: str) -> tuple[bytes, object] | None:
        """Read file and parse, returning (source_bytes, tree). Uses cache if enabled."""
        key = (filepath, grammar)
        if self._enabled and key in self._trees:
            return self._trees[key]

        try:
            source = Path(filepath).read_bytes()
        except OSError:
            return None

        entry = (source, parse_source(source, grammar))
        if self._enabled:
            self._trees[key] = entry
        return entry


_PARSE_CACHE = ParseTreeCache()


def parse_file(filepath: str, grammar: str) -> tuple[bytes, object] | None:
    """Read and parse a file through the scan-scoped cache."""
    return _PARSE_CACHE.get_or_parse(filepath, grammar)


def enable_parse_cache() -> None:
    """Enable scan-scoped parse tree cache."""
    _PARSE_CACHE.enable()


def disable_parse_cache() -> None:
    """Disable parse tree cache and free memory."""
    _PARSE_CACHE.disable()


__all__ = [
    "ParseTreeCache",
    "disable_parse_cache",
    "enable_parse_cache",
    "get_parser",
    "parse_file",
    "parse_source",
]
