"""Body renderer: re-emit statements in their scheduled order."""

from __future__ import annotations

from collections.abc import Sequence

from hookorder.engine.categories import Category
from hookorder.engine.statements import Statement


def base_indent_at(source: bytes, offset: int) -> str:
    """Leading whitespace of the line containing byte *offset*."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    end = line_start
    while end < len(source) and source[end:end + 1] in (b" ", b"\t"):
        end += 1
    return source[line_start:end].decode("utf-8", errors="replace")


def render(
    statements: Sequence[Statement],
    order: Sequence[int],
    effective: Sequence[Category],
    base_indent: str,
    newline: str = "\n",
) -> str:
    """Text replacing the range from the first statement to the last one.

    The range starts after the first statement's indentation, so the first
    line carries none. A single blank line separates statements whose
    effective categories differ.
    """
    lines: list[str] = []
    previous: Category | None = None
    for position in order:
        category = effective[position]
        if previous is not None and category != previous:
            lines.append("")
        text = statements[position].text.strip()
        lines.append(text if not lines else base_indent + text)
        previous = category
    return newline.join(lines)


__all__ = ["base_indent_at", "render"]
