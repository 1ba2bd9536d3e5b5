"""Rendering settings commands for the hal CLI."""

from cyclopts import App

from hal_resource.config import DEFAULTS, get_config

config_app = App(name="config", help="Manage rendering settings (json.indent, json.ensure_ascii)")


def _format(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a rendering setting.

    The value is checked against the setting's type before it is saved.

    Args:
        key: Setting name, e.g. json.indent
        value: New value, e.g. 4 or true
        global_: Store in the global config instead of the local one.
    """
    config = get_config(use_global=global_)
    stored = config.set(key, value)
    scope = "global" if global_ else "local"
    print(f"Set {key} = {_format(stored)} ({scope})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Remove a setting so the next scope (or the default) applies.

    Args:
        key: Setting name
        global_: Remove from the global config instead of the local one.
    """
    config = get_config(use_global=global_)
    config.unset(key)
    scope = "global" if global_ else "local"
    if key in DEFAULTS:
        print(f"Unset {key} ({scope}); now {_format(config.setting(key))} from {config.source(key)}")
    else:
        print(f"Unset {key} ({scope})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show the effective value of a setting and where it comes from.

    Args:
        key: Setting name
        global_: Ignore the local config.
    """
    config = get_config(use_global=global_)
    print(f"{key} = {_format(config.setting(key))} ({config.source(key)})")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List every rendering setting with its effective value.

    Args:
        global_: Ignore the local config.
    """
    config = get_config(use_global=global_)
    for key in DEFAULTS:
        print(f"{key} = {_format(config.setting(key))} ({config.source(key)})")

    unknown = sorted(key for key in config.list() if key not in DEFAULTS)
    if unknown:
        print(f"\nIgnored unknown settings: {', '.join(unknown)}")
