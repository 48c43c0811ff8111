"""Statement classifier: assigns each body statement one taxonomy category."""

from __future__ import annotations

from hookorder.engine.categories import LEGACY_PROPS_NAME, Category, is_hook_name
from hookorder.engine.statements import (
    DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    FunctionContext,
    declarators,
    unwrap_expression,
)
from hookorder.treesitter import field, node_text


def hook_name(call, source: bytes) -> str | None:
    """Callee name of a call: ``useX(...)`` or ``React.useX(...)``."""
    if call is None or call.type != "call_expression":
        return None
    callee = field(call, "function")
    if callee is None:
        return None
    if callee.type == "identifier":
        return node_text(source, callee)
    if callee.type == "member_expression":
        prop = field(callee, "property")
        if prop is not None and prop.type == "property_identifier":
            return node_text(source, prop)
    return None


def member_root(node):
    """Root object of a ``a.b.c`` chain."""
    while node is not None and node.type in ("member_expression", "subscript_expression"):
        node = field(node, "object")
    return node


def classify(statement, context: FunctionContext, source: bytes) -> Category:
    """Return the taxonomy category of a top-level body statement."""
    kind = statement.type

    if kind == "return_statement":
        return Category.RETURN

    if kind == "expression_statement":
        return _classify_expression_statement(statement, context, source)

    if kind in FUNCTION_DECLARATION_TYPES:
        return Category.HANDLER

    if kind in DECLARATION_TYPES:
        return _classify_declaration(statement, context, source)

    return Category.UNKNOWN


def _classify_expression_statement(statement, context: FunctionContext, source: bytes) -> Category:
    expression = unwrap_expression(statement.named_children[0]) if statement.named_children else None
    name = hook_name(expression, source)
    if name is None:
        return Category.UNKNOWN
    if name in context.hook_names.effect:
        return Category.EFFECT
    if is_hook_name(name):
        return Category.CUSTOM_HOOK
    return Category.UNKNOWN


def _classify_declaration(statement, context: FunctionContext, source: bytes) -> Category:
    decls = [(field(d, "name"), unwrap_expression(field(d, "value"))) for d in declarators(statement)]

    for _, value in decls:
        if value is None:
            continue
        name = hook_name(value, source)
        if name is not None:
            category = context.hook_names.declaration_category(name)
            if category is not None:
                return category
        if value.type in FUNCTION_EXPRESSION_TYPES:
            return Category.HANDLER

    for target, value in decls:
        if target is None or target.type != "object_pattern" or value is None:
            continue
        root = member_root(value)
        if root is not None and root.type == "identifier":
            root_name = node_text(source, root)
            if root_name in context.prop_names:
                return Category.PROPS_DESTRUCTURE_BODY
            if value.type == "identifier" and root_name == LEGACY_PROPS_NAME:
                return Category.PROPS_DESTRUCTURE

    # Calls into a handler defined in this file must sort after that handler.
    for _, value in decls:
        if value is None or value.type != "call_expression":
            continue
        callee = field(value, "function")
        if callee is not None and callee.type == "identifier":
            callee_name = node_text(source, callee)
            if not is_hook_name(callee_name) and callee_name in context.local_callables:
                return Category.HANDLER

    return Category.DERIVED


__all__ = ["classify", "hook_name", "member_root"]
