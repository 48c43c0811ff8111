"""Order validator: is the existing statement order already acceptable?"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from hookorder.engine.categories import ORDER_SUMMARY, Category
from hookorder.engine.statements import Statement


@dataclass(frozen=True)
class Violation:
    kind: str  # "dependency" | "category"
    index: int
    category: Category
    name: str | None = None
    previous: Category | None = None

    def message(self, owner: str) -> str:
        """Human-readable diagnostic; *owner* is "component" or "hook"."""
        if self.kind == "dependency":
            return (
                f'"{self.name or "variable"}" is used before it is declared. '
                f"Reorder statements so dependencies are declared first in {owner}"
            )
        return (
            f'"{self.category.label}" should come before "{self.previous.label}" '
            f"in {owner}. Order: {ORDER_SUMMARY}"
        )


def validate(
    statements: Sequence[Statement], deps: Sequence[frozenset[int]]
) -> Violation | None:
    """Return the first ordering violation, or None when the order is valid.

    Forward references take precedence over category decreases.
    """
    return _first_forward_reference(statements, deps) or _first_category_decrease(statements)


def _first_forward_reference(
    statements: Sequence[Statement], deps: Sequence[frozenset[int]]
) -> Violation | None:
    for position, stmt in enumerate(statements):
        later = sorted(j for j in deps[position] if j > position)
        if not later:
            continue
        target = statements[later[0]]
        shared = sorted(stmt.referenced & target.declared)
        return Violation(
            kind="dependency",
            index=position,
            category=stmt.category,
            name=shared[0] if shared else None,
        )
    return None


def _first_category_decrease(statements: Sequence[Statement]) -> Violation | None:
    highest: Category | None = None
    for position, stmt in enumerate(statements):
        if stmt.category is Category.UNKNOWN:
            continue
        if highest is not None and stmt.category < highest:
            return Violation(
                kind="category",
                index=position,
                category=stmt.category,
                previous=highest,
            )
        highest = stmt.category if highest is None else max(highest, stmt.category)
    return None


__all__ = ["Violation", "validate"]
