"""Shared helpers for command handlers."""

from __future__ import annotations

import sys
from pathlib import Path

from ..core.fallbacks import print_error
from ..engine.categories import HookNames
from ..treesitter import is_available
from ..utils import find_source_files

EXIT_PARSER_MISSING = 2


def require_parser() -> None:
    """Exit with an install hint when tree-sitter-language-pack is missing."""
    if is_available():
        return
    print_error(
        "tree-sitter-language-pack is not installed "
        "(pip install tree-sitter-language-pack)"
    )
    sys.exit(EXIT_PARSER_MISSING)


def rule_options(args) -> dict:
    """Engine keyword arguments derived from the loaded project config."""
    config = getattr(args, "_config", {}) or {}
    return {
        "hook_names": HookNames.from_config(config),
        "relocate_constants": bool(config.get("relocate_module_constants", True)),
    }


def target_files(args) -> list[str]:
    return find_source_files(Path(args.path))
