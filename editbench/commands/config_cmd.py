"""CLI handlers for config commands."""

from __future__ import annotations

import json

import click

from editbench.commands._helpers import get_config
from editbench.config import DEFAULT_CONFIG_PATH, init_config

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


def _selected_path(ctx: click.Context):
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


@click.group("config")
def config_group():
    """Manage configuration."""
    pass


@config_group.command("init")
@click.pass_context
def config_init(ctx):
    """Create default configuration file."""
    path = init_config(_selected_path(ctx))
    click.echo(f"Configuration created at: {path}")


@config_group.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    config = get_config(ctx)
    click.echo(f"Config file: {config.config_path}")
    click.echo(f"  Agent: {config.agent.provider}/{config.resolved_model}")
    click.echo(f"  Tool: {config.agent.tool_name} ({config.agent.tool_type})")
    click.echo(f"  Max tokens: {config.agent.max_tokens}")
    rounds = config.agent.max_rounds or "unlimited"
    click.echo(f"  Max rounds: {rounds}")
    click.echo(f"  Backup suffix: {config.editor.backup_suffix}")
    click.echo(f"  Encoding: {config.editor.encoding}")

    click.echo("\n  Providers:")
    for name, prov in config.providers.items():
        has_key = "configured" if prov.api_key else "not set"
        click.echo(f"    {name}: model={prov.default_model}, key={has_key}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key: str, value: str):
    """Set a configuration value.

    Modifies the TOML config file. Key uses dot notation, e.g.:
    agent.max_rounds, editor.backup_suffix
    """
    import tomli_w

    path = _selected_path(ctx)
    if not path.exists():
        click.echo("No config file found. Run 'editbench config init' first.", err=True)
        ctx.exit(1)

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Navigate dot-separated key
    parts = key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            target[part] = {}
        target = target[part]

    # Type coercion
    final_key = parts[-1]
    if value.lower() in ("true", "false"):
        target[final_key] = value.lower() == "true"
    elif value.isdigit():
        target[final_key] = int(value)
    elif value.startswith("[") or value.startswith("{"):
        try:
            target[final_key] = json.loads(value)
        except json.JSONDecodeError:
            target[final_key] = value
    else:
        target[final_key] = value

    with open(path, "wb") as f:
        tomli_w.dump(data, f)

    click.echo(f"Set {key} = {value}")
