"""Tests for hookorder.config: schema-driven project configuration."""

from __future__ import annotations

import json

import pytest

from hookorder.config import (
    CONFIG_SCHEMA,
    default_config,
    load_config,
    save_config,
    set_config_value,
    unset_config_value,
)
from hookorder.engine.categories import Category, HookNames


# ── load / save ──────────────────────────────────────────────


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "config.json") == default_config()

    def test_round_trip(self, tmp_path):
        path = tmp_path / ".hookorder" / "config.json"
        config = default_config()
        config["store_hooks"] = ["useAppSelector"]
        config["max_fix_passes"] = 3
        save_config(config, path)
        assert load_config(path) == config

    def test_malformed_json_gives_defaults(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(path) == default_config()
        assert "Ignoring unreadable config" in capsys.readouterr().err

    def test_non_object_gives_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert load_config(path) == default_config()

    def test_wrong_types_replaced(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "exclude": "generated",
            "relocate_module_constants": "yes",
            "max_fix_passes": True,
            "router_hooks": ["useTypedRoute"],
        }))
        config = load_config(path)
        assert config["exclude"] == []
        assert config["relocate_module_constants"] is True
        assert config["max_fix_passes"] == 10
        assert config["router_hooks"] == ["useTypedRoute"]

    def test_defaults_not_shared(self):
        first = default_config()
        first["exclude"].append("x")
        assert default_config()["exclude"] == []


# ── set / unset ──────────────────────────────────────────────


class TestSetConfigValue:
    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("yes", True), ("1", True),
        ("false", False), ("no", False), ("0", False),
    ])
    def test_bool(self, raw, expected):
        config = default_config()
        set_config_value(config, "relocate_module_constants", raw)
        assert config["relocate_module_constants"] is expected

    def test_bool_rejects_garbage(self):
        with pytest.raises(ValueError):
            set_config_value(default_config(), "relocate_module_constants", "maybe")

    def test_int_in_range(self):
        config = default_config()
        set_config_value(config, "max_fix_passes", "4")
        assert config["max_fix_passes"] == 4

    @pytest.mark.parametrize("raw", ["0", "101", "many"])
    def test_int_out_of_range(self, raw):
        with pytest.raises(ValueError):
            set_config_value(default_config(), "max_fix_passes", raw)

    def test_list_appends_once(self):
        config = default_config()
        set_config_value(config, "context_hooks", "useSession")
        set_config_value(config, "context_hooks", "useSession")
        set_config_value(config, "context_hooks", "useFeatureFlags")
        assert config["context_hooks"] == ["useSession", "useFeatureFlags"]

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            set_config_value(default_config(), "colour", "blue")

    def test_unset(self):
        config = default_config()
        config["store_hooks"] = ["useAppSelector"]
        unset_config_value(config, "store_hooks")
        assert config["store_hooks"] == CONFIG_SCHEMA["store_hooks"].default

    def test_unset_unknown_key(self):
        with pytest.raises(KeyError):
            unset_config_value(default_config(), "colour")


# ── HookNames.from_config ────────────────────────────────────


class TestHookNamesFromConfig:
    def test_defaults(self):
        names = HookNames.from_config(default_config())
        assert names == HookNames()

    def test_extra_names_extend_builtin_sets(self):
        config = default_config()
        config["router_hooks"] = ["useTypedParams"]
        config["effect_hooks"] = ["useDebouncedEffect"]
        names = HookNames.from_config(config)
        assert names.declaration_category("useTypedParams") is Category.ROUTER
        assert names.declaration_category("useNavigate") is Category.ROUTER
        assert "useDebouncedEffect" in names.effect

    def test_non_hook_name(self):
        assert HookNames().declaration_category("fetchData") is None
        assert HookNames().declaration_category("user") is None
        assert HookNames().declaration_category("useData") is Category.CUSTOM_HOOK
