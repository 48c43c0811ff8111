"""Apply code-order diagnostics: non-overlapping edits, repeated passes."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from hookorder.core.fallbacks import log_best_effort_failure
from hookorder.engine.categories import DEFAULT_HOOK_NAMES, HookNames
from hookorder.engine.diagnostics import Diagnostic, Edit
from hookorder.engine.rule import check_source
from hookorder.treesitter import grammar_for_path
from hookorder.utils import abs_source_path, colorize, rel, safe_write_text

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10


@dataclass
class FixOutcome:
    source: bytes
    passes: int = 0
    fixed: int = 0
    messages: list[str] = field(default_factory=list)


def _overlaps(edit: Edit, accepted: Sequence[Edit]) -> bool:
    return any(edit.start < other.end and other.start < edit.end for other in accepted)


def apply_edits(source: bytes, groups: Iterable[Sequence[Edit]]) -> tuple[bytes, list[int]]:
    """Apply edit groups in order, skipping any group that overlaps one already taken.

    Each group is all-or-nothing. Returns the new source and the positions of
    the groups applied; skipped groups are left for the next pass.
    """
    accepted: list[Edit] = []
    applied: list[int] = []
    for position, group in enumerate(groups):
        edits = list(group)
        if not edits:
            continue
        if any(_overlaps(edit, accepted) for edit in edits):
            continue
        if any(_overlaps(edit, edits[k + 1:]) for k, edit in enumerate(edits)):
            logger.debug("Dropping self-overlapping edit group %s", edits)
            continue
        accepted.extend(edits)
        applied.append(position)

    result = source
    for edit in sorted(accepted, key=lambda e: e.start, reverse=True):
        result = result[: edit.start] + edit.text.encode("utf-8") + result[edit.end :]
    return result, applied


def fix_source(
    source: bytes | str,
    grammar: str = "tsx",
    *,
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocate_constants: bool = True,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> FixOutcome:
    """Check and rewrite until no fixable diagnostic remains (or *max_passes*)."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    outcome = FixOutcome(source=source)
    for _ in range(max_passes):
        diagnostics: list[Diagnostic] = check_source(
            outcome.source,
            grammar,
            hook_names=hook_names,
            relocate_constants=relocate_constants,
        )
        fixable = [d for d in diagnostics if d.fixable]
        if not fixable:
            break
        new_source, applied = apply_edits(outcome.source, (d.edits for d in fixable))
        if not applied or new_source == outcome.source:
            break
        outcome.source = new_source
        outcome.passes += 1
        outcome.fixed += len(applied)
        outcome.messages.extend(fixable[k].message for k in applied)
    return outcome


def fix_files(
    files: list[str],
    *,
    dry_run: bool = False,
    hook_names: HookNames = DEFAULT_HOOK_NAMES,
    relocate_constants: bool = True,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> list[dict]:
    """Shared file loop: read each file, fix it, write back if changed.

    Returns ``[{file, fixed, passes}, ...]`` for changed files.
    """
    results = []
    skipped_files: list[tuple[str, str]] = []
    for filepath in sorted(files):
        try:
            changed = _process_fixer_file(
                filepath,
                dry_run=dry_run,
                hook_names=hook_names,
                relocate_constants=relocate_constants,
                max_passes=max_passes,
            )
            if changed is not None:
                results.append(changed)
        except (OSError, UnicodeDecodeError) as ex:
            skipped_files.append((filepath, str(ex)))
            print(colorize(f"  Skip {rel(str(abs_source_path(filepath)))}: {ex}", "yellow"), file=sys.stderr)

    if skipped_files:
        log_best_effort_failure(
            logger,
            f"fix code order across {len(skipped_files)} skipped file(s)",
            OSError(
                "; ".join(f"{path}: {reason}" for path, reason in skipped_files[:5])
            ),
        )

    return results


def _process_fixer_file(
    filepath: str,
    *,
    dry_run: bool,
    hook_names: HookNames,
    relocate_constants: bool,
    max_passes: int,
) -> dict[str, object] | None:
    grammar = grammar_for_path(filepath)
    if grammar is None:
        return None
    p = abs_source_path(filepath)
    original = p.read_bytes()
    original.decode("utf-8")  # non-UTF-8 files raise and are skipped

    outcome = fix_source(
        original,
        grammar,
        hook_names=hook_names,
        relocate_constants=relocate_constants,
        max_passes=max_passes,
    )
    if outcome.source == original:
        return None

    if not dry_run:
        _write_fixer_content(p, outcome.source.decode("utf-8"))

    return {
        "file": filepath,
        "fixed": outcome.fixed,
        "passes": outcome.passes,
        "messages": outcome.messages,
    }


def _write_fixer_content(path, content: str) -> None:
    try:
        safe_write_text(path, content)
    except OSError as exc:
        log_best_effort_failure(logger, f"write code-order fix output {path}", exc)
        raise


__all__ = ["FixOutcome", "apply_edits", "fix_files", "fix_source"]
