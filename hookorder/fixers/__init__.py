"""Fix application for code-order diagnostics."""

from hookorder.fixers.apply import FixOutcome, apply_edits, fix_files, fix_source

__all__ = ["FixOutcome", "apply_edits", "fix_files", "fix_source"]
