"""Code-order rule: run the ordering engine over every component and hook."""

from __future__ import annotations

import dataclasses
import logging

from hookorder.core.fallbacks import log_best_effort_failure
from hookorder.engine.categories import DEFAULT_HOOK_NAMES, HookNames
from hookorder.engine.classify import classify
from hookorder.engine.diagnostics import Diagnostic, Edit
from hookorder.engine.functions import (
    FunctionCandidate,
    find_functions,
    module_declared_names,
    prop_names,
)
from hookorder.engine.indexer import build_index
from hookorder.engine.references import extract_references, extract_statement_references
from hookorder.engine.relocate import ModuleConstant, find_module_constants, plan_relocations
from hookorder.engine.render import base_indent_at, render
from hookorder.engine.schedule import effective_categories, is_identity, schedule
from hookorder.engine.statements import (
    DECLARATION_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FunctionContext,
    Statement,
    body_spans,
    declared_names,
    declarators,
)
from hookorder.engine.validate import validate
from hookorder.treesitter import (
    PARSE_INIT_ERRORS,
    field,
    grammar_for_path,
    parse_file,
    parse_source,
)

logger = logging.getLogger(__name__)

# A malformed function is skipped; the rest of the file is still checked.
ANALYSIS_ERRORS: tuple[type[Exception], ...] = (
    ValueError, AttributeError, TypeError, IndexError, KeyError
)


def statement_references(node, source: bytes) -> set[str]:
    """Names read by a statement: initializers, expressions, return values.

    Compound statements (``if``, loops, ``try``, ...) read every name in
    their conditions and blocks, nested functions excluded.
    """
    refs: set[str] = set()
    if node.type in DECLARATION_TYPES:
        for decl in declarators(node):
            value = field(decl, "value")
            if value is not None:
                refs |= extract_references(value, source)
    elif node.type in ("expression_statement", "return_statement"):
        for child in node.named_children:
            if child.type != "comment":
                refs |= extract_references(child, source)
    elif node.type not in FUNCTION_DECLARATION_TYPES:
        refs = extract_statement_references(node, source)
    return refs


def analyze_body(body, context: FunctionContext, source: bytes) -> list[Statement]:
    """Build the statement list of a function body."""
    statements: list[Statement] = []
    for position, span in enumerate(body_spans(body)):
        node = span.node
        declared = declared_names(node, source)
        statements.append(
            Statement(
                index=position,
                category=classify(node, context, source),
                declared=declared,
                referenced=frozenset(statement_references(node, source) - declared),
                text=source[span.start : span.end].decode("utf-8", errors="replace").strip(),
                start=span.start,
                end=span.end,
                node=node,
            )
        )
    return statements


def function_context(
    candidate: FunctionCandidate,
    source: bytes,
    *,
    module_names: frozenset[str] = frozenset(),
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
) -> FunctionContext:
    body_names: set[str] = set()
    for child in candidate.body.named_children:
        body_names |= declared_names(child, source)
    return FunctionContext(
        name=candidate.name,
        kind=candidate.kind,
        prop_names=prop_names(candidate.node, source),
        local_callables=module_names | frozenset(body_names),
        hook_names=hook_names,
    )


def check_function(
    candidate: FunctionCandidate,
    source: bytes,
    *,
    module_names: frozenset[str] = frozenset(),
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocations: list[ModuleConstant] | tuple = (),
) -> Diagnostic | None:
    """Check one function; at most one diagnostic, at most one body rewrite."""
    if candidate.body.has_error:
        logger.debug("Skipping %s: body contains syntax errors", candidate.name)
        return None

    context = function_context(
        candidate, source, module_names=module_names, hook_names=hook_names
    )
    real = analyze_body(candidate.body, context, source)
    if not real:
        return None

    injected = [constant.as_statement(k) for k, constant in enumerate(relocations)]
    statements = injected + [
        dataclasses.replace(stmt, index=len(injected) + stmt.index) for stmt in real
    ]
    if len(statements) < 2:
        return None

    index = build_index(statements)
    violation = validate(statements, index.deps)
    if violation is None and not injected:
        return None

    effective = effective_categories(statements, index.deps)
    order = schedule(statements, index.deps, effective)
    if not injected and is_identity(order):
        return None

    newline = "\r\n" if b"\r\n" in source else "\n"
    indent = base_indent_at(source, real[0].node.start_byte)
    body_edit = Edit(
        real[0].start,
        real[-1].end,
        render(statements, order, effective, indent, newline),
    )
    owner = "hook" if context.is_hook else "component"

    if injected:
        first = relocations[0]
        names = ", ".join(f'"{c.name}"' for c in relocations)
        noun = "Constant" if len(relocations) == 1 else "Constants"
        return Diagnostic(
            rule="module-constant",
            message=(
                f"{noun} {names} should be declared inside the {owner} "
                "as derived state, not at module level"
            ),
            line=first.line,
            column=first.column,
            function=candidate.name,
            edits=tuple(c.removal for c in relocations) + (body_edit,),
        )

    offending = statements[violation.index].node
    return Diagnostic(
        rule="code-order",
        message=violation.message(owner),
        line=offending.start_point[0] + 1,
        column=offending.start_point[1],
        function=candidate.name,
        edits=(body_edit,),
    )


def check_tree(
    root,
    source: bytes,
    *,
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocate_constants: bool = True,
) -> list[Diagnostic]:
    """Diagnostics for every component and custom hook under *root*."""
    candidates = find_functions(root, source)
    if not candidates:
        return []
    module_names = module_declared_names(root, source)

    relocations: dict[int, list[ModuleConstant]] = {}
    if relocate_constants:
        try:
            relocations = plan_relocations(find_module_constants(root, source), candidates, source)
        except ANALYSIS_ERRORS as exc:
            log_best_effort_failure(logger, "plan module-constant relocations", exc)

    diagnostics: list[Diagnostic] = []
    for position, candidate in enumerate(candidates):
        try:
            diagnostic = check_function(
                candidate,
                source,
                module_names=module_names,
                hook_names=hook_names,
                relocations=relocations.get(position, ()),
            )
        except ANALYSIS_ERRORS as exc:
            log_best_effort_failure(logger, f"check code order of {candidate.name}", exc)
            continue
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics


def check_source(
    source: bytes | str,
    grammar: str = "tsx",
    *,
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocate_constants: bool = True,
) -> list[Diagnostic]:
    """Parse *source* with *grammar* and check it."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = parse_source(source, grammar)
    return check_tree(
        tree.root_node,
        source,
        hook_names=hook_names,
        relocate_constants=relocate_constants,
    )


def check_file(
    filepath: str,
    *,
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocate_constants: bool = True,
) -> list[Diagnostic] | None:
    """Check a file on disk; None when it is unsupported or unreadable."""
    grammar = grammar_for_path(filepath)
    if grammar is None:
        return None
    try:
        parsed = parse_file(filepath, grammar)
    except PARSE_INIT_ERRORS as exc:
        logger.debug("tree-sitter init failed for %s: %s", filepath, exc)
        return None
    if parsed is None:
        return None
    source, tree = parsed
    return check_tree(
        tree.root_node,
        source,
        hook_names=hook_names,
        relocate_constants=relocate_constants,
    )


__all__ = [
    "ANALYSIS_ERRORS",
    "analyze_body",
    "check_file",
    "check_function",
    "check_source",
    "check_tree",
    "function_context",
    "statement_references",
]
