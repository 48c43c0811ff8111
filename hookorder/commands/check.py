"""check command: report code-order diagnostics without touching files."""

import json
import sys

from ..engine.rule import check_file
from ..treesitter import disable_parse_cache, enable_parse_cache
from ..utils import abs_source_path, colorize, print_table
from ._helpers import require_parser, rule_options, target_files


def collect_entries(files: list[str], options: dict) -> list[dict]:
    """Run the rule over *files*; one entry per diagnostic."""
    entries: list[dict] = []
    enable_parse_cache()
    try:
        for filepath in files:
            diagnostics = check_file(str(abs_source_path(filepath)), **options)
            for diagnostic in diagnostics or ():
                entries.append({"file": filepath, **diagnostic.to_dict()})
    finally:
        disable_parse_cache()
    return entries


def cmd_check(args):
    """Report components and hooks whose statements are out of order."""
    require_parser()
    files = target_files(args)
    entries = collect_entries(files, rule_options(args))

    if getattr(args, "json", False):
        print(json.dumps({"files": len(files), "count": len(entries), "entries": entries}, indent=2))
    elif not entries:
        print(colorize(f"No code-order issues in {len(files)} file(s).", "green"))
    else:
        _print_entries(entries, top=getattr(args, "top", 20))

    if entries:
        sys.exit(1)


def _print_entries(entries: list[dict], *, top: int) -> None:
    print(colorize(f"\nCode-order issues: {len(entries)}\n", "bold"))
    rows = [
        [
            f"{e['file']}:{e['line']}",
            e["rule"],
            e["function"],
            e["message"][:90],
        ]
        for e in entries[:top]
    ]
    print_table(["Location", "Rule", "Function", "Message"], rows)
    if len(entries) > top:
        print(f"\n  ... and {len(entries) - top} more")
    fixable = sum(1 for e in entries if e["fixable"])
    if fixable:
        print(colorize(f"\n  {fixable} fixable with `hookorder fix`", "dim"))
