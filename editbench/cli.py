"""Click CLI definitions - main entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from editbench.commands.config_cmd import config_group
from editbench.commands.edit_cmd import edit_group
from editbench.commands.run_cmd import run_command


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/editbench/config.toml)",
)
@click.pass_context
def cli(ctx, debug: bool, config_path: Path | None) -> None:
    """editbench - LLM-driven, backup-protected file editor."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path


cli.add_command(run_command, "run")
cli.add_command(edit_group, "edit")
cli.add_command(config_group, "config")


if __name__ == "__main__":
    cli()
