"""Statement model: the per-function view the ordering engine works on."""

from __future__ import annotations

from dataclasses import dataclass, field

from hookorder.engine.categories import DEFAULT_HOOK_NAMES, Category, HookNames
from hookorder.treesitter import field as child_field
from hookorder.treesitter import node_text

DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
FUNCTION_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
})
FUNCTION_EXPRESSION_TYPES = frozenset({
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
})


class MalformedTreeError(ValueError):
    """A syntax node is missing a part the engine relies on."""


@dataclass(frozen=True)
class FunctionContext:
    """What the classifier needs to know about the enclosing function."""

    name: str
    kind: str  # "component" | "hook"
    prop_names: frozenset[str] = frozenset()
    local_callables: frozenset[str] = frozenset()
    hook_names: HookNames = DEFAULT_HOOK_NAMES

    @property
    def is_hook(self) -> bool:
        return self.kind == "hook"


@dataclass(frozen=True)
class Statement:
    """One top-level statement of a function body.

    ``start``/``end`` are byte offsets covering the statement plus any comments
    attached to it; synthetic statements (relocated constants) have neither.
    """

    index: int
    category: Category
    declared: frozenset[str] = frozenset()
    referenced: frozenset[str] = frozenset()
    text: str = ""
    start: int | None = None
    end: int | None = None
    synthetic: bool = False
    node: object = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class StatementSpan:
    """A statement node together with the byte range of its attached comments."""

    node: object
    start: int
    end: int
    end_row: int


def body_spans(block) -> list[StatementSpan]:
    """Split a ``statement_block`` into statement spans.

    Comments directly above a statement travel with it; a comment on the same
    line as the end of a statement belongs to that statement. Comments after
    the last statement are not part of any span, nor is a comment on the
    line of the opening brace.
    """
    spans: list[StatementSpan] = []
    pending: list = []
    for child in block.named_children:
        if child.type == "comment":
            if not spans and not pending and child.start_point[0] == block.start_point[0]:
                continue
            if spans and not pending and child.start_point[0] == spans[-1].end_row:
                prev = spans[-1]
                spans[-1] = StatementSpan(prev.node, prev.start, child.end_byte, child.end_point[0])
            else:
                pending.append(child)
            continue
        start = pending[0].start_byte if pending else child.start_byte
        spans.append(StatementSpan(child, start, child.end_byte, child.end_point[0]))
        pending = []
    return spans


def pattern_names(node, source: bytes, names: set[str] | None = None) -> set[str]:
    """Collect every identifier bound by a binding pattern.

    Handles plain identifiers, object/array patterns at any depth, defaults,
    rest elements and TypeScript parameter wrappers.
    """
    if names is None:
        names = set()
    if node is None:
        return names

    kind = node.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        names.add(node_text(source, node))
    elif kind == "pair_pattern":
        pattern_names(child_field(node, "value"), source, names)
    elif kind in ("assignment_pattern", "object_assignment_pattern"):
        pattern_names(child_field(node, "left"), source, names)
    elif kind in ("required_parameter", "optional_parameter"):
        pattern_names(child_field(node, "pattern"), source, names)
    elif kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
        for child in node.named_children:
            pattern_names(child, source, names)
    return names


def declarators(statement) -> list:
    """The ``variable_declarator`` children of a declaration statement."""
    return [c for c in statement.named_children if c.type == "variable_declarator"]


def declaration_kind(statement, source: bytes) -> str:
    """``const``, ``let`` or ``var`` for a declaration statement."""
    kind = child_field(statement, "kind")
    if kind is not None:
        return node_text(source, kind)
    first = statement.children[0] if statement.children else None
    if first is None:
        raise MalformedTreeError(f"empty {statement.type} node")
    return node_text(source, first)


def declared_names(statement, source: bytes) -> frozenset[str]:
    """Names a statement binds: declarator patterns and function names."""
    names: set[str] = set()
    if statement.type in DECLARATION_TYPES:
        for decl in declarators(statement):
            pattern_names(child_field(decl, "name"), source, names)
    elif statement.type in FUNCTION_DECLARATION_TYPES:
        name = child_field(statement, "name")
        if name is not None:
            names.add(node_text(source, name))
    return frozenset(names)


def unwrap_expression(node):
    """Strip parentheses and TypeScript-only wrappers around an expression."""
    while node is not None and node.type in (
        "parenthesized_expression",
        "non_null_expression",
        "as_expression",
        "satisfies_expression",
    ):
        node = node.named_children[0] if node.named_children else None
    return node


__all__ = [
    "DECLARATION_TYPES",
    "FUNCTION_DECLARATION_TYPES",
    "FUNCTION_EXPRESSION_TYPES",
    "FunctionContext",
    "MalformedTreeError",
    "Statement",
    "StatementSpan",
    "body_spans",
    "declaration_kind",
    "declared_names",
    "declarators",
    "pattern_names",
    "unwrap_expression",
]
