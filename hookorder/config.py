"""Project-wide configuration management (.hookorder/config.json).

Keys cover exclusions, extra hook names for the classifier, the module-constant
relocator switch and the fix pass cap.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hookorder.core.fallbacks import log_best_effort_failure, warn_best_effort
from hookorder.utils import PROJECT_ROOT, safe_write_text

CONFIG_FILE = PROJECT_ROOT / ".hookorder" / "config.json"
logger = logging.getLogger(__name__)
MAX_FIX_PASSES_LIMIT = 100


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "exclude": ConfigKey(list, [], "Path patterns to exclude from scanning"),
    "relocate_module_constants": ConfigKey(
        bool,
        True,
        "Move module-level literal constants into the one component/hook using them",
    ),
    "store_hooks": ConfigKey(
        list, [], "Extra hook names ordered with useSelector/useDispatch"
    ),
    "router_hooks": ConfigKey(
        list, [], "Extra hook names ordered with router hooks (useNavigate, ...)"
    ),
    "context_hooks": ConfigKey(
        list, [], "Extra hook names ordered with context hooks (useContext, ...)"
    ),
    "effect_hooks": ConfigKey(
        list, [], "Extra hook names ordered with useEffect/useLayoutEffect"
    ),
    "max_fix_passes": ConfigKey(
        int, 10, "Max rewrite passes per file for `fix` (nested functions need several)"
    ),
}


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing keys with defaults.

    Unreadable or malformed files load as defaults.
    """
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            log_best_effort_failure(logger, f"read config {p}", exc)
            warn_best_effort(f"Ignoring unreadable config {p}; using defaults")
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        value = config.get(key)
        wrong_type = not isinstance(value, schema.type) or (
            schema.type is int and isinstance(value, bool)
        )
        if key not in config or wrong_type:
            config[key] = copy.deepcopy(schema.default)

    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    Handles "true"/"false" for bools; list keys append (deduplicated).
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is bool:
        if raw.lower() in ("true", "1", "yes"):
            config[key] = True
        elif raw.lower() in ("false", "0", "no"):
            config[key] = False
        else:
            raise ValueError(f"Expected true/false for {key}, got: {raw}")
    elif schema.type is int:
        value = int(raw)
        if key == "max_fix_passes" and not 1 <= value <= MAX_FIX_PASSES_LIMIT:
            raise ValueError(
                f"Expected integer 1-{MAX_FIX_PASSES_LIMIT} for {key}, got: {raw}"
            )
        config[key] = value
    elif schema.type is list:
        config.setdefault(key, [])
        if raw not in config[key]:
            config[key].append(raw)
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


__all__ = [
    "CONFIG_FILE",
    "CONFIG_SCHEMA",
    "ConfigKey",
    "default_config",
    "load_config",
    "save_config",
    "set_config_value",
    "unset_config_value",
]
