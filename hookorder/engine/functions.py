"""Find the component and custom-hook functions in a parsed file."""

from __future__ import annotations

from dataclasses import dataclass

from hookorder.engine.categories import COMPONENT_NAME_RE, is_hook_name
from hookorder.engine.statements import (
    DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    declared_names,
    pattern_names,
)
from hookorder.treesitter import field, node_text, walk

JSX_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})
LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})


@dataclass(frozen=True)
class FunctionCandidate:
    """A function whose body the code-order rule checks."""

    node: object
    body: object
    name: str
    kind: str  # "component" | "hook"


def contains_jsx(node) -> bool:
    """Structural check: can this body/expression evaluate to JSX?

    Looks at JSX nodes directly, at top-level ``return`` arguments of a block,
    and through ternary, logical and parenthesized expressions.
    """
    if node is None:
        return False
    kind = node.type
    if kind in JSX_TYPES:
        return True
    if kind == "statement_block":
        for statement in node.named_children:
            if statement.type != "return_statement":
                continue
            values = [c for c in statement.named_children if c.type != "comment"]
            if values and contains_jsx(values[0]):
                return True
        return False
    if kind == "ternary_expression":
        return contains_jsx(field(node, "consequence")) or contains_jsx(field(node, "alternative"))
    if kind == "binary_expression":
        operator = field(node, "operator")
        if operator is None or operator.type not in LOGICAL_OPERATORS:
            return False
        return contains_jsx(field(node, "left")) or contains_jsx(field(node, "right"))
    if kind == "parenthesized_expression":
        values = [c for c in node.named_children if c.type != "comment"]
        return bool(values) and contains_jsx(values[0])
    return False


def function_name(node, source: bytes) -> str | None:
    """``const Name = () => ...`` / ``function Name() {}`` → ``Name``."""
    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        target = field(parent, "name")
        value = field(parent, "value")
        if (
            target is not None
            and target.type == "identifier"
            and value is not None
            and value.start_byte == node.start_byte
            and value.end_byte == node.end_byte
        ):
            return node_text(source, target)
    name = field(node, "name")
    if name is not None and name.type == "identifier":
        return node_text(source, name)
    return None


def function_kind(node, source: bytes) -> str | None:
    """Return "component", "hook" or None for any other function."""
    name = function_name(node, source)
    if not name:
        return None
    body = field(node, "body")
    if COMPONENT_NAME_RE.match(name):
        return "component" if contains_jsx(body) else None
    if is_hook_name(name):
        if body is None or body.type != "statement_block":
            return None
        return None if contains_jsx(body) else "hook"
    return None


def prop_names(node, source: bytes) -> frozenset[str]:
    """Every identifier bound by the function's parameter list."""
    params = field(node, "parameters")
    if params is None:
        params = field(node, "parameter")
    return frozenset(pattern_names(params, source))


def find_functions(root, source: bytes) -> list[FunctionCandidate]:
    """All components and custom hooks with a block body, in document order."""
    candidates: list[FunctionCandidate] = []
    for node in walk(root):
        if node.type not in FUNCTION_EXPRESSION_TYPES and node.type not in FUNCTION_DECLARATION_TYPES:
            continue
        kind = function_kind(node, source)
        if kind is None:
            continue
        body = field(node, "body")
        if body is None or body.type != "statement_block":
            continue
        candidates.append(
            FunctionCandidate(node=node, body=body, name=function_name(node, source), kind=kind)
        )
    return candidates


def module_declarations(root) -> list:
    """Top-level declaration statements, looking through ``export``."""
    statements = []
    for child in root.named_children:
        if child.type == "export_statement":
            declaration = field(child, "declaration")
            if declaration is not None:
                statements.append(declaration)
            continue
        statements.append(child)
    return [
        s for s in statements
        if s.type in DECLARATION_TYPES or s.type in FUNCTION_DECLARATION_TYPES
    ]


def module_declared_names(root, source: bytes) -> frozenset[str]:
    """Names bound at file scope by declarations (imports excluded)."""
    names: set[str] = set()
    for statement in module_declarations(root):
        names.update(declared_names(statement, source))
    return frozenset(names)


__all__ = [
    "FunctionCandidate",
    "contains_jsx",
    "find_functions",
    "function_kind",
    "function_name",
    "module_declarations",
    "module_declared_names",
    "prop_names",
]
