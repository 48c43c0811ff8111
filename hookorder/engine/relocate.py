"""Module-constant relocator.

Finds file-scope literal constants (``const limit = 10;``) used by exactly one
component or hook (the innermost one when they nest) and plans moving them
into that function. The usage check is a word-boundary text search, not
scope resolution: a name that also shows up anywhere else in the file (other
code, strings, comments, parameter defaults) is left alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from hookorder.engine.categories import CONSTANT_NAME_RE, Category
from hookorder.engine.diagnostics import Edit
from hookorder.engine.functions import FunctionCandidate, prop_names
from hookorder.engine.statements import (
    DECLARATION_TYPES,
    Statement,
    declaration_kind,
    declared_names,
    declarators,
)
from hookorder.treesitter import field, node_text

logger = logging.getLogger(__name__)

LITERAL_TYPES = frozenset({"number", "string", "true", "false"})


@dataclass(frozen=True)
class ModuleConstant:
    name: str
    kind: str  # const | let | var
    declarator_text: str
    terminated: bool
    removal: Edit
    line: int
    column: int
    statement_start: int

    @property
    def declaration(self) -> str:
        return f"{self.kind} {self.declarator_text}{';' if self.terminated else ''}"

    def as_statement(self, index: int) -> Statement:
        """Synthetic statement injected into the target function's body."""
        return Statement(
            index=index,
            category=Category.DERIVED,
            declared=frozenset({self.name}),
            text=self.declaration,
            synthetic=True,
        )


def find_module_constants(root, source: bytes) -> list[ModuleConstant]:
    """Non-exported top-level literal bindings not named in SCREAMING_CASE."""
    constants: list[ModuleConstant] = []
    for statement in root.named_children:
        if statement.type not in DECLARATION_TYPES:
            continue
        decls = declarators(statement)
        kind = declaration_kind(statement, source)
        terminated = node_text(source, statement).rstrip().endswith(";")
        for position, decl in enumerate(decls):
            target = field(decl, "name")
            value = field(decl, "value")
            if target is None or target.type != "identifier" or value is None:
                continue
            if value.type not in LITERAL_TYPES:
                continue
            name = node_text(source, target)
            if CONSTANT_NAME_RE.match(name):
                continue
            constants.append(
                ModuleConstant(
                    name=name,
                    kind=kind,
                    declarator_text=node_text(source, decl),
                    terminated=terminated,
                    removal=_removal_edit(source, statement, decls, position),
                    line=target.start_point[0] + 1,
                    column=target.start_point[1],
                    statement_start=statement.start_byte,
                )
            )
    return constants


def _removal_edit(source: bytes, statement, decls: list, position: int) -> Edit:
    if len(decls) == 1:
        start, end = statement.start_byte, statement.end_byte
        if source.startswith(b"\r\n", end):
            end += 2
        elif source.startswith(b"\n", end):
            end += 1
        # Avoid leaving two blank lines where the statement used to be.
        before = source[:start].rstrip(b" \t")
        blank_before = before == b"" or before.endswith(b"\n\n") or before.endswith(b"\n\r\n")
        if blank_before:
            if source.startswith(b"\r\n", end):
                end += 2
            elif source.startswith(b"\n", end):
                end += 1
        return Edit(start, end, "")
    decl = decls[position]
    if position == len(decls) - 1:
        return Edit(decls[position - 1].end_byte, decl.end_byte, "")
    return Edit(decl.start_byte, decls[position + 1].start_byte, "")


def _name_pattern(name: str) -> re.Pattern[bytes]:
    escaped = re.escape(name.encode("utf-8"))
    return re.compile(rb"(?<![\w$])" + escaped + rb"(?![\w$])")


def plan_relocations(
    constants: list[ModuleConstant],
    candidates: list[FunctionCandidate],
    source: bytes,
) -> dict[int, list[ModuleConstant]]:
    """Map candidate position -> constants to move into that function."""
    plan: dict[int, list[ModuleConstant]] = {}
    # One declarator per declaration statement per pass keeps removals disjoint.
    claimed: set[int] = set()
    for constant in constants:
        if constant.statement_start in claimed:
            continue
        pattern = _name_pattern(constant.name)
        users = [
            position
            for position, candidate in enumerate(candidates)
            if pattern.search(source, candidate.node.start_byte, candidate.node.end_byte)
        ]
        users = _innermost(users, candidates)
        if len(users) != 1:
            continue
        candidate = candidates[users[0]]
        if not candidate.body.named_children:
            continue
        if pattern.search(source, candidate.node.start_byte, candidate.body.start_byte):
            logger.debug(
                "Keeping %s at module level: read outside the body of %s",
                constant.name,
                candidate.name,
            )
            continue
        if _used_elsewhere(pattern, source, candidate, constant):
            logger.debug("Keeping %s at module level: referenced outside %s", constant.name, candidate.name)
            continue
        if _shadowed(constant.name, candidate, source):
            logger.debug("Keeping %s at module level: %s rebinds it", constant.name, candidate.name)
            continue
        plan.setdefault(users[0], []).append(constant)
        claimed.add(constant.statement_start)
    return plan


def _innermost(users: list[int], candidates: list[FunctionCandidate]) -> list[int]:
    """Keep users that contain no other user; an enclosing function's own
    use of the name is caught by the usage check outside the inner one."""
    def encloses(outer: int, inner: int) -> bool:
        a, b = candidates[outer].node, candidates[inner].node
        return outer != inner and a.start_byte <= b.start_byte and b.end_byte <= a.end_byte

    return [
        position for position in users
        if not any(encloses(position, other) for other in users)
    ]


def _used_elsewhere(pattern, source: bytes, candidate: FunctionCandidate, constant: ModuleConstant) -> bool:
    inside = (candidate.node.start_byte, candidate.node.end_byte)
    own = (constant.removal.start, constant.removal.end)
    for match in pattern.finditer(source):
        if inside[0] <= match.start() < inside[1]:
            continue
        if own[0] <= match.start() < own[1]:
            continue
        return True
    return False


def _shadowed(name: str, candidate: FunctionCandidate, source: bytes) -> bool:
    if name in prop_names(candidate.node, source):
        return True
    return any(name in declared_names(child, source) for child in candidate.body.named_children)


__all__ = ["ModuleConstant", "find_module_constants", "plan_relocations"]
