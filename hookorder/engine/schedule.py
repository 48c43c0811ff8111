"""Dependency-aware scheduler: the target order for a function body."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hookorder.engine.categories import Category
from hookorder.engine.statements import Statement

logger = logging.getLogger(__name__)


def effective_categories(
    statements: Sequence[Statement], deps: Sequence[frozenset[int]]
) -> list[Category]:
    """Category each statement is actually placed in.

    An UNKNOWN statement first takes the category of the next categorized
    statement after it (RETURN if there is none). Every statement is then
    promoted to the highest placement among its dependencies, counting an
    UNKNOWN dependency as DERIVED. Promotion is propagated until stable, so a
    dependency that was itself promoted drags its dependents along.
    """
    effective: list[Category] = [stmt.category for stmt in statements]
    following = Category.RETURN
    for position in range(len(statements) - 1, -1, -1):
        if effective[position] is Category.UNKNOWN:
            effective[position] = following
        else:
            following = effective[position]

    changed = True
    while changed:
        changed = False
        for position in range(len(statements)):
            for j in deps[position]:
                floor = (
                    Category.DERIVED
                    if statements[j].category is Category.UNKNOWN
                    else effective[j]
                )
                if floor > effective[position]:
                    effective[position] = floor
                    changed = True
    return effective


def schedule(
    statements: Sequence[Statement],
    deps: Sequence[frozenset[int]],
    effective: Sequence[Category] | None = None,
) -> list[int]:
    """Return the new order as a permutation of statement positions.

    Groups by effective category (ascending), then orders each group
    dependencies-first over intra-group edges, visiting in original order.
    Statements in a dependency cycle stay in their original relative order
    instead of failing.
    """
    if effective is None:
        effective = effective_categories(statements, deps)

    groups: dict[Category, list[int]] = {}
    for position, category in enumerate(effective):
        groups.setdefault(category, []).append(position)

    order: list[int] = []
    for category in sorted(groups):
        order.extend(_topological(groups[category], deps))
    return order


def _topological(members: list[int], deps: Sequence[frozenset[int]]) -> list[int]:
    result: list[int] = []
    for component in strongly_connected(members, deps):
        if len(component) > 1:
            logger.debug("Cyclic dependency between statements %s; keeping their order", component)
        result.extend(component)
    return result


def strongly_connected(members: list[int], deps: Sequence[frozenset[int]]) -> list[list[int]]:
    """Tarjan's algorithm restricted to *members*, iterative.

    Components come out dependencies-first, roots visited in original order,
    so an acyclic group in valid order maps to itself. Members of a cycle are
    kept in their original relative order.
    """
    in_group = set(members)
    number: dict[int, int] = {}
    low: dict[int, int] = {}
    stack: list[int] = []
    on_stack: set[int] = set()
    components: list[list[int]] = []

    def open_node(node: int) -> None:
        number[node] = low[node] = len(number)
        stack.append(node)
        on_stack.add(node)

    for root in members:
        if root in number:
            continue
        open_node(root)
        work = [(root, iter(sorted(deps[root] & in_group)))]
        while work:
            node, pending = work[-1]
            for dep in pending:
                if dep not in number:
                    open_node(dep)
                    work.append((dep, iter(sorted(deps[dep] & in_group))))
                    break
                if dep in on_stack:
                    low[node] = min(low[node], number[dep])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[node])
                if low[node] == number[node]:
                    component: list[int] = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    components.append(sorted(component))
    return components


def is_identity(order: Sequence[int]) -> bool:
    return all(position == value for position, value in enumerate(order))


__all__ = ["effective_categories", "is_identity", "schedule"]
