"""CLI entry point: argparse, subcommand routing, shared setup."""

import argparse
import logging
import sys

from . import __version__
from .utils import DEFAULT_PATH, colorize, set_exclusions


USAGE_EXAMPLES = """
workflow:
  check [path]                  Report out-of-order components and hooks
  fix [path]                    Reorder statement bodies in place
  config show|set|unset         Inspect or change .hookorder/config.json

examples:
  hookorder check src
  hookorder check src/components --json
  hookorder check src --exclude generated stories
  hookorder fix src --dry-run
  hookorder config set store_hooks useAppSelector
  hookorder config set relocate_module_constants false
  hookorder config unset store_hooks
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookorder",
        description="hookorder: statement order for React components and custom hooks",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Report code-order diagnostics")
    p_check.add_argument("path", nargs="?", default=None,
                         help="File or directory to check (default: src)")
    p_check.add_argument("--json", action="store_true", help="Emit diagnostics as JSON")
    p_check.add_argument("--top", type=int, default=20, help="Max rows to show (default: 20)")
    p_check.add_argument("--exclude", nargs="+", metavar="DIR",
                         help="Path fragments to skip (added to configured exclusions)")

    p_fix = sub.add_parser("fix", help="Rewrite out-of-order bodies in place")
    p_fix.add_argument("path", nargs="?", default=None,
                       help="File or directory to fix (default: src)")
    p_fix.add_argument("--dry-run", action="store_true",
                       help="Show what would change without modifying files")
    p_fix.add_argument("--exclude", nargs="+", metavar="DIR",
                       help="Path fragments to skip (added to configured exclusions)")

    p_config = sub.add_parser("config", help="Show or change project configuration")
    config_sub = p_config.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Print all config keys")
    p_set = config_sub.add_parser("set", help="Set a config key")
    p_set.add_argument("config_key", type=str, help="Config key name")
    p_set.add_argument("config_value", type=str, help="Value to set")
    p_unset = config_sub.add_parser("unset", help="Reset a config key to its default")
    p_unset.add_argument("config_key", type=str, help="Config key name")

    return parser


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _apply_exclusions(args) -> None:
    """Combine configured exclusions with any --exclude given on this command."""
    configured = list(args._config.get("exclude", []))
    explicit = list(getattr(args, "exclude", None) or [])
    patterns = configured + [p for p in explicit if p not in configured]
    set_exclusions(patterns)
    if explicit:
        print(colorize(f"  Excluding: {', '.join(explicit)}", "dim"), file=sys.stderr)


def main(argv: list[str] | None = None):
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if getattr(args, "path", None) is None:
        args.path = str(DEFAULT_PATH)

    from .config import load_config
    args._config = load_config()
    _apply_exclusions(args)

    # Lazy-load command handlers from commands/
    from .commands.check import cmd_check
    from .commands.config_cmd import cmd_config
    from .commands.fix_cmd import cmd_fix

    commands = {
        "check": cmd_check,
        "fix": cmd_fix,
        "config": cmd_config,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
