"""Advisory results of the code-order rule: diagnostics carrying text edits."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` (byte offsets) with ``text``."""

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Diagnostic:
    """One finding for one function. ``edits`` apply together or not at all."""

    rule: str  # "code-order" | "module-constant"
    message: str
    line: int
    column: int
    function: str
    edits: tuple[Edit, ...] = ()

    @property
    def fixable(self) -> bool:
        return bool(self.edits)

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "function": self.function,
            "fixable": self.fixable,
        }


__all__ = ["Diagnostic", "Edit"]
