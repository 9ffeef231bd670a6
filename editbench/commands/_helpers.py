"""CLI helpers shared by command modules."""

from __future__ import annotations

import asyncio

import click

from editbench.config import AppConfig, load_config


def run(coro):
    """Run an async function from sync context."""
    return asyncio.run(coro)


def get_config(ctx: click.Context) -> AppConfig:
    """Load the config selected by the root ``--config`` option."""
    obj = ctx.find_root().obj or {}
    try:
        return load_config(obj.get("config_path"))
    except ValueError as e:
        raise click.ClickException(str(e)) from e
