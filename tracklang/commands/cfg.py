import ast
from typing import Any, Optional

import click
import pytomlpp

from tracklang.config import filenames
from tracklang.constants import MAX_PREFERENCES
from tracklang.utils import Logger, parse_preferences
from tracklang.utils.io import load_toml, save_toml


def parse_value(value: str) -> Any:
    """Read a value as a Python literal, falling back to the raw string, e.g. `en-US, en`."""
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


def check_preferences(key: str, value: Any) -> None:
    """
    Make sure a value stored under `preferences` is usable as a preference list.
    The value is stored as given, it's only parsed to check it.
    """
    if not isinstance(value, (str, list)):
        raise click.BadParameter(
            f"Preferred languages must be a string or a list of strings, not {type(value).__name__}.",
            param_hint=key
        )
    if isinstance(value, list) and not all(isinstance(x, str) for x in value):
        raise click.BadParameter("Preferred languages must only contain strings.", param_hint=key)
    languages = parse_preferences(value)
    if not languages:
        raise click.BadParameter("At least one preferred language must be given.", param_hint=key)
    if len(languages) > MAX_PREFERENCES:
        raise click.BadParameter(
            f"At most {MAX_PREFERENCES} languages can be preferred, got {len(languages)}.",
            param_hint=key
        )


def find_node(data: dict, tree: list[str], create: bool = False) -> Optional[dict]:
    """Get the table holding the last key of a dotted key path, optionally creating missing tables."""
    node = data
    for t in tree[:-1]:
        if not isinstance(node.get(t), dict):
            if not create:
                return None
            node[t] = {}
        node = node[t]
    return node


@click.command(name="cfg", short_help="Manage configuration values, e.g. preferred languages.")
@click.argument("key", type=str, required=False)
@click.argument("value", type=str, required=False)
@click.option("--unset", is_flag=True, default=False, help="Unset/remove the configuration value.")
@click.option("--list", "list_", is_flag=True, default=False, help="List all set configuration values.")
@click.pass_context
def cfg(ctx: click.Context, key: Optional[str], value: Optional[str], unset: bool, list_: bool) -> None:
    """
    Get or set KEY of the config, where KEY is a dot separated path.
    Values under `preferences` must be a language list, as a string or a list.

    \b
    Example:
        tracklang cfg preferences.audio "['ja', 'en']"
        tracklang cfg preferences.subtitle "en-US, en"
    """
    log = Logger.getLogger("cfg")
    data = load_toml(filenames.root_config)

    if list_:
        if not data:
            log.warning(f"{filenames.root_config} has no configuration data, yet")
        print(pytomlpp.dumps(data).rstrip())
        return
    if not key:
        raise click.UsageError("Nothing to do.", ctx)

    tree = key.split(".")

    if unset:
        node = find_node(data, tree)
        if node is not None and tree[-1] in node:
            del node[tree[-1]]
            save_toml(data, filenames.root_config)
        log.info(f"Unset {key}")
        return

    if value is None:
        node = find_node(data, tree)
        if node is None or tree[-1] not in node:
            raise click.ClickException(f"Key {key} does not exist in the config.")
        print(f"{key}: {node[tree[-1]]}")
        return

    parsed = parse_value(value)
    if tree[0] == "preferences":
        if len(tree) != 2:
            raise click.BadParameter("Preferences are set per axis, e.g. `preferences.audio`.", param_hint=key)
        check_preferences(key, parsed)

    find_node(data, tree, create=True)[tree[-1]] = parsed
    save_toml(data, filenames.root_config)
    log.info(f"Set {key} to {parsed!r}")
