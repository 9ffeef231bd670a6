"""CLI handlers for running single editor commands directly."""

from __future__ import annotations

import click

from editbench.commands._helpers import get_config, run
from editbench.errors import is_error_result
from editbench.services.editor_service import EditorService


def _editor(ctx: click.Context) -> EditorService:
    return EditorService(get_config(ctx).editor)


def _report(ctx: click.Context, result: str) -> None:
    if is_error_result(result):
        click.echo(click.style(result, fg="red"), err=True)
        ctx.exit(1)
    click.echo(result)


@click.group("edit")
def edit_group():
    """Run a single editor command on a file."""
    pass


@edit_group.command("view")
@click.argument("path")
@click.option(
    "--range", "view_range", type=int, nargs=2, default=None,
    help="1-based inclusive START END (END=-1 for end of file)",
)
@click.pass_context
def edit_view(ctx, path: str, view_range: tuple[int, int] | None):
    """Show PATH with line numbers."""
    _report(ctx, run(_editor(ctx).view(path, view_range)))


@edit_group.command("replace")
@click.argument("path")
@click.argument("old")
@click.argument("new")
@click.pass_context
def edit_replace(ctx, path: str, old: str, new: str):
    """Replace the single occurrence of OLD with NEW in PATH."""
    _report(ctx, run(_editor(ctx).replace(path, old, new)))


@edit_group.command("insert")
@click.argument("path")
@click.argument("line", type=int)
@click.argument("text")
@click.pass_context
def edit_insert(ctx, path: str, line: int, text: str):
    """Insert TEXT as a new line before zero-based LINE in PATH."""
    _report(ctx, run(_editor(ctx).insert(path, line, text)))


@edit_group.command("create")
@click.argument("path")
@click.argument("text", required=False)
@click.pass_context
def edit_create(ctx, path: str, text: str | None):
    """Write TEXT (or stdin) to PATH, backing up any existing file."""
    if text is None:
        text = click.get_text_stream("stdin").read()
    _report(ctx, run(_editor(ctx).create(path, text)))


@edit_group.command("undo")
@click.argument("path")
@click.pass_context
def edit_undo(ctx, path: str):
    """Restore PATH from its backup."""
    _report(ctx, run(_editor(ctx).undo(path)))
