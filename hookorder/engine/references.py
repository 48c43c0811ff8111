"""Name-reference extraction: which identifiers an expression reads."""

from __future__ import annotations

from hookorder.engine.statements import FUNCTION_DECLARATION_TYPES, FUNCTION_EXPRESSION_TYPES
from hookorder.treesitter import field, node_text

# Wrappers whose operands are all evaluated eagerly.
_ALL_NAMED_CHILDREN = frozenset({
    "arguments",
    "array",
    "binary_expression",
    "ternary_expression",
    "unary_expression",
    "update_expression",
    "await_expression",
    "parenthesized_expression",
    "spread_element",
    "sequence_expression",
    "template_substitution",
    "computed_property_name",
})

# TypeScript wrappers: only the first named child is a value, the rest are types.
_FIRST_NAMED_CHILD = frozenset({
    "non_null_expression",
    "as_expression",
    "satisfies_expression",
})


def extract_references(node, source: bytes) -> set[str]:
    """Return the set of identifier names *node* reads.

    Member chains contribute only their root object (plus computed keys).
    Assignments contribute both sides. Function bodies, JSX and
    unrecognized shapes contribute nothing.
    """
    refs: set[str] = set()
    _collect(node, source, refs)
    return refs


def _collect(node, source: bytes, refs: set[str]) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current is None:
            continue
        kind = current.type

        if kind in (
            "identifier",
            "shorthand_property_identifier",
            "shorthand_property_identifier_pattern",
        ):
            refs.add(node_text(source, current))
        elif kind == "member_expression":
            stack.append(field(current, "object"))
        elif kind == "subscript_expression":
            stack.append(field(current, "object"))
            stack.append(field(current, "index"))
        elif kind == "call_expression":
            stack.append(field(current, "function"))
            stack.append(field(current, "arguments"))
        elif kind in ("assignment_expression", "augmented_assignment_expression"):
            stack.append(field(current, "left"))
            stack.append(field(current, "right"))
        elif kind in ("array_pattern", "rest_pattern"):
            stack.extend(current.named_children)
        elif kind == "object_pattern":
            for prop in current.named_children:
                if prop.type == "shorthand_property_identifier_pattern":
                    refs.add(node_text(source, prop))
                elif prop.type == "pair_pattern":
                    stack.append(field(prop, "value"))
                else:
                    stack.append(prop)
        elif kind in ("assignment_pattern", "object_assignment_pattern"):
            stack.append(field(current, "left"))
            stack.append(field(current, "right"))
        elif kind == "new_expression":
            stack.append(field(current, "constructor"))
            stack.append(field(current, "arguments"))
        elif kind == "object":
            for prop in current.named_children:
                if prop.type == "pair":
                    key = field(prop, "key")
                    if key is not None and key.type == "computed_property_name":
                        stack.append(key)
                    stack.append(field(prop, "value"))
                elif prop.type in ("shorthand_property_identifier", "spread_element"):
                    stack.append(prop)
        elif kind == "template_string":
            stack.extend(c for c in current.named_children if c.type == "template_substitution")
        elif kind == "type_assertion":
            if current.named_children:
                stack.append(current.named_children[-1])
        elif kind in _FIRST_NAMED_CHILD:
            if current.named_children:
                stack.append(current.named_children[0])
        elif kind in _ALL_NAMED_CHILDREN:
            stack.extend(current.named_children)
        # Anything else (literals, functions, JSX, ...) is a leaf.


# Statement-level nodes whose subtrees are not evaluated when the statement runs.
_DEFERRED = FUNCTION_EXPRESSION_TYPES | FUNCTION_DECLARATION_TYPES | frozenset({
    "class",
    "class_declaration",
    "method_definition",
    "type_annotation",
    "type_arguments",
    "type_parameters",
})


def extract_statement_references(node, source: bytes) -> set[str]:
    """Names a compound statement (``if``, loops, ``try``, ...) reads.

    Every identifier in the statement counts except those inside nested
    functions and classes, and those in binding positions (declarator names,
    ``for (const x of ...)`` targets, ``catch`` parameters).
    """
    refs: set[str] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if current is None:
            continue
        kind = current.type
        if kind in _DEFERRED:
            continue
        if kind in ("identifier", "shorthand_property_identifier"):
            refs.add(node_text(source, current))
            continue
        if kind == "variable_declarator":
            stack.append(field(current, "value"))
            continue
        if kind == "for_in_statement" and field(current, "kind") is not None:
            target = field(current, "left")
            stack.extend(
                c for c in current.named_children
                if target is None or c.start_byte != target.start_byte
            )
            continue
        if kind == "catch_clause":
            stack.append(field(current, "body"))
            continue
        stack.extend(current.named_children)
    return refs


__all__ = ["extract_references", "extract_statement_references"]
