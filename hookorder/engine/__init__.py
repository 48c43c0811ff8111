"""Statement reordering engine for React components and custom hooks."""

from hookorder.engine.categories import Category, HookNames
from hookorder.engine.diagnostics import Diagnostic, Edit
from hookorder.engine.rule import check_file, check_source, check_tree

__all__ = [
    "Category",
    "Diagnostic",
    "Edit",
    "HookNames",
    "check_file",
    "check_source",
    "check_tree",
]
