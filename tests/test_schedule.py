"""Tests for hookorder.engine.schedule: effective categories and target order."""

from __future__ import annotations

import logging

from hookorder.engine.categories import Category
from hookorder.engine.indexer import build_index
from hookorder.engine.schedule import (
    effective_categories,
    is_identity,
    schedule,
    strongly_connected,
)
from hookorder.engine.statements import Statement
from hookorder.engine.validate import validate


def _stmt(index, category, declared=(), referenced=(), text=""):
    return Statement(
        index=index,
        category=category,
        declared=frozenset(declared),
        referenced=frozenset(referenced),
        text=text or f"s{index}",
    )


def _plan(statements):
    deps = build_index(statements).deps
    effective = effective_categories(statements, deps)
    return deps, effective, schedule(statements, deps, effective)


# ── effective_categories ─────────────────────────────────────


class TestEffectiveCategories:
    def test_unchanged_without_dependencies(self):
        stmts = [
            _stmt(0, Category.STATE, ["count"]),
            _stmt(1, Category.CONTEXT, ["theme"]),
            _stmt(2, Category.RETURN),
        ]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps) == [
            Category.STATE, Category.CONTEXT, Category.RETURN,
        ]

    def test_promoted_to_dependency_category(self):
        """A state hook reading a memoized value must move to the memo group."""
        stmts = [
            _stmt(0, Category.STATE, ["value"], ["initial"]),
            _stmt(1, Category.MEMO, ["initial"]),
        ]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps) == [Category.MEMO, Category.MEMO]

    def test_promotion_is_transitive(self):
        stmts = [
            _stmt(0, Category.STATE, ["a"], ["b"]),
            _stmt(1, Category.REF, ["b"], ["c"]),
            _stmt(2, Category.CALLBACK, ["c"]),
        ]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps) == [Category.CALLBACK] * 3

    def test_unknown_takes_following_category(self):
        stmts = [
            _stmt(0, Category.STATE, ["a"]),
            _stmt(1, Category.UNKNOWN),
            _stmt(2, Category.EFFECT),
            _stmt(3, Category.RETURN),
        ]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps)[1] is Category.EFFECT

    def test_trailing_unknown_goes_with_return(self):
        stmts = [_stmt(0, Category.STATE, ["a"]), _stmt(1, Category.UNKNOWN)]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps)[1] is Category.RETURN

    def test_unknown_dependency_counts_as_derived(self):
        stmts = [
            _stmt(0, Category.STATE, ["a"], ["b"]),
            _stmt(1, Category.UNKNOWN, ["b"]),
            _stmt(2, Category.RETURN),
        ]
        deps = build_index(stmts).deps
        assert effective_categories(stmts, deps)[0] is Category.DERIVED


# ── schedule ─────────────────────────────────────────────────


class TestSchedule:
    def test_simple_reorder_by_category(self):
        """[context hook; useState; return] → [useState; context hook; return]."""
        stmts = [
            _stmt(0, Category.CONTEXT, ["theme"]),
            _stmt(1, Category.STATE, ["count", "setCount"]),
            _stmt(2, Category.RETURN, (), ["theme", "count"]),
        ]
        _, _, order = _plan(stmts)
        assert order == [1, 0, 2]

    def test_forward_dependency_placed_first(self):
        """const b = a + 1; const a = 5; → a before b."""
        stmts = [
            _stmt(0, Category.DERIVED, ["b"], ["a"]),
            _stmt(1, Category.DERIVED, ["a"]),
        ]
        _, effective, order = _plan(stmts)
        assert order == [1, 0]
        assert effective[0] >= effective[1]

    def test_cycle_terminates_with_permutation(self):
        """const a = b; const b = a; must not hang."""
        stmts = [
            _stmt(0, Category.DERIVED, ["a"], ["b"]),
            _stmt(1, Category.DERIVED, ["b"], ["a"]),
        ]
        _, _, order = _plan(stmts)
        assert sorted(order) == [0, 1]

    def test_cycle_keeps_original_order(self):
        stmts = [
            _stmt(0, Category.DERIVED, ["a"], ["b"]),
            _stmt(1, Category.DERIVED, ["b"], ["a"]),
        ]
        _, _, order = _plan(stmts)
        assert is_identity(order)

    def test_cycle_is_logged(self, caplog):
        stmts = [
            _stmt(0, Category.DERIVED, ["a"], ["b"]),
            _stmt(1, Category.DERIVED, ["b"], ["a"]),
        ]
        with caplog.at_level(logging.DEBUG, logger="hookorder.engine.schedule"):
            _plan(stmts)
        assert "Cyclic dependency" in caplog.text

    def test_identity_on_valid_input(self):
        stmts = [
            _stmt(0, Category.REF, ["inputRef"]),
            _stmt(1, Category.STATE, ["value", "setValue"]),
            _stmt(2, Category.DERIVED, ["upper"], ["value"]),
            _stmt(3, Category.UNKNOWN, (), ["upper"]),
            _stmt(4, Category.HANDLER, ["onChange"]),
            _stmt(5, Category.RETURN, (), ["upper", "onChange"]),
        ]
        deps = build_index(stmts).deps
        assert validate(stmts, deps) is None
        _, _, order = _plan(stmts)
        assert is_identity(order)

    def test_stable_within_group(self):
        stmts = [
            _stmt(0, Category.HANDLER, ["onA"]),
            _stmt(1, Category.STATE, ["x"]),
            _stmt(2, Category.HANDLER, ["onB"]),
            _stmt(3, Category.HANDLER, ["onC"]),
        ]
        _, _, order = _plan(stmts)
        assert order == [1, 0, 2, 3]

    def test_output_categories_are_monotonic(self):
        stmts = [
            _stmt(0, Category.EFFECT),
            _stmt(1, Category.HANDLER, ["onSave"], ["draft"]),
            _stmt(2, Category.CONTEXT, ["toast"]),
            _stmt(3, Category.STATE, ["draft"], ["seed"]),
            _stmt(4, Category.MEMO, ["seed"]),
            _stmt(5, Category.RETURN),
        ]
        _, effective, order = _plan(stmts)
        placed = [effective[k] for k in order]
        assert placed == sorted(placed)

    def test_schedule_satisfies_dependencies(self):
        stmts = [
            _stmt(0, Category.DERIVED, ["c"], ["b"]),
            _stmt(1, Category.DERIVED, ["b"], ["a"]),
            _stmt(2, Category.DERIVED, ["a"]),
        ]
        deps, _, order = _plan(stmts)
        position = {stmt: k for k, stmt in enumerate(order)}
        for i, targets in enumerate(deps):
            for j in targets:
                assert position[j] < position[i]

    def test_effective_computed_when_omitted(self):
        stmts = [_stmt(0, Category.RETURN), _stmt(1, Category.STATE, ["x"])]
        deps = build_index(stmts).deps
        assert schedule(stmts, deps) == [1, 0]


# ── strongly_connected / is_identity ─────────────────────────


class TestStronglyConnected:
    def test_singletons_dependencies_first(self):
        deps = (frozenset({1}), frozenset(), frozenset({0}))
        assert strongly_connected([0, 1, 2], deps) == [[1], [0], [2]]

    def test_three_cycle_collapsed(self):
        deps = (frozenset({2}), frozenset({0}), frozenset({1}))
        assert strongly_connected([0, 1, 2], deps) == [[0, 1, 2]]

    def test_edges_outside_members_ignored(self):
        deps = (frozenset({5}), frozenset({0}))
        assert strongly_connected([0, 1], deps) == [[0], [1]]


class TestIsIdentity:
    def test_identity(self):
        assert is_identity([0, 1, 2])

    def test_not_identity(self):
        assert not is_identity([1, 0, 2])

    def test_empty(self):
        assert is_identity([])
