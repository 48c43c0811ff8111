"""fix command: rewrite out-of-order component and hook bodies in place."""

from ..fixers import fix_files
from ..utils import colorize
from ._helpers import require_parser, rule_options, target_files


def cmd_fix(args):
    """Reorder statements (and relocate module constants) across the target path."""
    require_parser()
    dry_run = getattr(args, "dry_run", False)
    config = getattr(args, "_config", {}) or {}

    results = fix_files(
        target_files(args),
        dry_run=dry_run,
        max_passes=int(config.get("max_fix_passes", 10)),
        **rule_options(args),
    )
    if not results:
        print(colorize("No code-order issues found.", "green"))
        return

    total = sum(r["fixed"] for r in results)
    verb = "Would fix" if dry_run else "Fixed"
    print(colorize(f"\n  {verb} {total} issue(s) in {len(results)} file(s):\n", "bold"))
    for result in results:
        print(f"  {result['file']}  ({result['fixed']} fix(es), {result['passes']} pass(es))")
        for message in result["messages"]:
            print(colorize(f"    - {message}", "dim"))
    if dry_run:
        print(colorize("\n  Dry run: no files were modified.", "yellow"))
    print()
