"""Small helpers over tree-sitter nodes."""

from __future__ import annotations

from collections.abc import Iterator


def node_text(source: bytes, node) -> str:
    """Get the source text of a node as a str."""
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def field(node, name: str):
    """Return a child by field name, or None when the node is None."""
    if node is None:
        return None
    return node.child_by_field_name(name)


def walk(root) -> Iterator:
    """Pre-order traversal of *root* and all its descendants."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


__all__ = ["field", "node_text", "walk"]
