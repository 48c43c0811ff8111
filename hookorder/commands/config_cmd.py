"""config command: show/set/unset project configuration."""

from ..utils import colorize


def cmd_config(args):
    """Handle config subcommands: show, set, unset."""
    action = getattr(args, "config_action", None)
    if action == "set":
        _config_set(args)
    elif action == "unset":
        _config_unset(args)
    else:
        _config_show(args)


def _config_show(args):
    """Print all config keys with current values and descriptions."""
    from ..config import CONFIG_SCHEMA

    config = args._config

    print(colorize("\n  hookorder configuration\n", "bold"))
    for key, schema in CONFIG_SCHEMA.items():
        value = config.get(key, schema.default)
        is_default = value == schema.default

        if isinstance(value, list):
            display = ", ".join(value) if value else "(empty)"
        else:
            display = str(value)

        default_tag = colorize(" (default)", "dim") if is_default else ""
        print(f"  {key:<27} {display}{default_tag}")
        print(colorize(f"  {'':27} {schema.description}", "dim"))
    print()


def _config_set(args):
    """Set a config key to a value."""
    from ..config import save_config, set_config_value

    config = args._config
    key = args.config_key
    value = args.config_value

    try:
        set_config_value(config, key, value)
    except (KeyError, ValueError) as e:
        print(colorize(f"  Error: {e}", "red"))
        return

    save_config(config)
    print(colorize(f"  Set {key} = {config[key]}", "green"))


def _config_unset(args):
    """Reset a config key to its default."""
    from ..config import CONFIG_SCHEMA, save_config, unset_config_value

    config = args._config
    key = args.config_key

    try:
        unset_config_value(config, key)
    except KeyError as e:
        print(colorize(f"  Error: {e}", "red"))
        return

    save_config(config)
    default = CONFIG_SCHEMA[key].default
    print(colorize(f"  Reset {key} to default ({default})", "green"))
