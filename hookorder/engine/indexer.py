"""Declaration/dependency index over a function body's statements."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from hookorder.engine.statements import Statement


@dataclass(frozen=True)
class DependencyIndex:
    """``declared_at`` maps a name to its declaring statement index;
    ``deps[i]`` holds the indices statement *i* reads from."""

    declared_at: dict[str, int]
    deps: tuple[frozenset[int], ...]


def build_index(statements: Sequence[Statement]) -> DependencyIndex:
    """Index declarations, then resolve each statement's reads to statements.

    One flat namespace per body: a later declaration of a name replaces the
    earlier one. Names declared nowhere in the body are free and ignored.
    """
    declared_at: dict[str, int] = {}
    for position, stmt in enumerate(statements):
        for name in stmt.declared:
            declared_at[name] = position

    deps: list[frozenset[int]] = []
    for position, stmt in enumerate(statements):
        found: set[int] = set()
        for name in stmt.referenced - stmt.declared:
            target = declared_at.get(name)
            if target is not None and target != position:
                found.add(target)
        deps.append(frozenset(found))

    return DependencyIndex(declared_at=declared_at, deps=tuple(deps))


__all__ = ["DependencyIndex", "build_index"]
