"""Shared utilities: paths, colors, output formatting, file discovery."""

import os
import sys
import tempfile
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(os.environ.get("HOOKORDER_ROOT", Path.cwd())).resolve()
DEFAULT_PATH = PROJECT_ROOT / os.environ.get("HOOKORDER_SRC", "src")

# Extensions the code-order rule understands.
SOURCE_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx")

# Directories that are never useful to scan; always pruned during traversal.
DEFAULT_EXCLUSIONS = frozenset({
    "node_modules", ".git", "__pycache__", ".venv", "venv",
    "dist", "build", ".next", ".nuxt", ".output", "coverage",
    ".turbo", ".cache", ".svn", ".hg",
})

# Extra exclusions set via --exclude CLI flag, applied to all file discovery
_extra_exclusions: tuple[str, ...] = ()


def set_exclusions(patterns: list[str]):
    """Set global exclusion patterns (called once from CLI at startup)."""
    global _extra_exclusions
    _extra_exclusions = tuple(patterns)
    _find_source_files_cached.cache_clear()


# ── Atomic file writes ─────────────────────────────────────


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


# ── Terminal output ────────────────────────────────────────

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def colorize(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def print_table(headers: list[str], rows: list[list[str]], widths: list[int] | None = None):
    if not rows:
        return
    if not widths:
        widths = [max(len(str(h)), *(len(str(r[i])) for r in rows)) for i, h in enumerate(headers)]
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    print(colorize(header_line, "bold"))
    print(colorize("─" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in rows:
        print("  ".join(str(v).ljust(w) for v, w in zip(row, widths)))


# ── Paths ──────────────────────────────────────────────────


def rel(path: str) -> str:
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT)).replace("\\", "/")
    except ValueError:
        # Path outside PROJECT_ROOT: normalize to consistent relative form
        return os.path.relpath(str(Path(path).resolve()), str(PROJECT_ROOT)).replace("\\", "/")


def matches_exclusion(rel_path: str, exclusion: str) -> bool:
    """Check if a relative path matches an exclusion pattern (path-component aware).

    Matches if exclusion is a path component (e.g. "test" matches "test/foo.js"
    or "src/test/bar.js") or a directory prefix (e.g. "src/test" matches
    "src/test/bar.js"). Does NOT do substring matching: "test" will NOT match
    "testimony.js".
    """
    parts = Path(rel_path).parts
    if exclusion in parts:
        return True
    if "/" in exclusion or os.sep in exclusion:
        normalized = exclusion.rstrip("/").rstrip(os.sep)
        return rel_path.startswith(normalized + "/") or rel_path.startswith(normalized + os.sep)
    return False


def _is_excluded_dir(name: str, rel_path: str, extra: tuple[str, ...]) -> bool:
    """Check if a directory should be pruned during traversal."""
    if name in DEFAULT_EXCLUSIONS:
        return True
    if extra and any(matches_exclusion(rel_path, ex) or ex == name for ex in extra):
        return True
    return False


@lru_cache(maxsize=16)
def _find_source_files_cached(path: str, extensions: tuple[str, ...],
                              exclusions: tuple[str, ...] | None = None,
                              extra_exclusions: tuple[str, ...] = ()) -> tuple[str, ...]:
    """Cached file discovery using os.walk, pruning during traversal."""
    root = Path(path)
    if not root.is_absolute():
        root = PROJECT_ROOT / root
    if root.is_file():
        return (rel(str(root)),) if root.suffix in extensions else ()
    all_exclusions = (exclusions or ()) + extra_exclusions
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, PROJECT_ROOT).replace("\\", "/")
        dirnames[:] = sorted(
            d for d in dirnames
            if not _is_excluded_dir(d, rel_dir + "/" + d, all_exclusions)
        )
        for fname in filenames:
            if not fname.endswith(extensions) or fname.endswith(".d.ts"):
                continue
            full = os.path.join(dirpath, fname)
            rel_file = os.path.relpath(full, PROJECT_ROOT).replace("\\", "/")
            if all_exclusions and any(matches_exclusion(rel_file, ex) for ex in all_exclusions):
                continue
            files.append(rel_file)
    return tuple(sorted(files))


def find_source_files(path: str | Path, extensions: list[str] | tuple[str, ...] = SOURCE_EXTENSIONS,
                      exclusions: list[str] | None = None) -> list[str]:
    """Find all files with given extensions under a path, excluding patterns."""
    # Pass _extra_exclusions as part of the cache key so changes invalidate cached results
    return list(_find_source_files_cached(
        str(path), tuple(extensions), tuple(exclusions) if exclusions else None,
        _extra_exclusions))


def abs_source_path(filepath: str) -> Path:
    """Absolute path for a discovered (project-relative) file."""
    p = Path(filepath)
    return p if p.is_absolute() else PROJECT_ROOT / filepath
