"""CLI handler for running an agent-driven edit task."""

from __future__ import annotations

from pathlib import Path

import click

from editbench.commands._helpers import get_config, run
from editbench.infra.providers.registry import get_provider
from editbench.models.task import TaskState
from editbench.services.dispatch_service import DispatchService
from editbench.services.editor_service import EditorService

_EXIT_CODES = {
    TaskState.COMPLETE: 0,
    TaskState.ABORTED: 1,
    TaskState.ROUND_LIMIT_EXCEEDED: 2,
}


def _cli_progress(text: str) -> None:
    if text.startswith("[tool]"):
        click.echo(click.style(f"  >> {text[7:]}", dim=True))
    else:
        click.echo(f"\nAgent: {text}")


def _ask(prompt: str) -> str:
    try:
        return click.prompt(prompt, default="", show_default=False, prompt_suffix="")
    except click.Abort:
        return ""


@click.command("run")
@click.argument("file", type=click.Path(path_type=Path))
@click.argument("instruction", required=False)
@click.option(
    "--max-rounds", type=click.IntRange(min=0), default=None, help="Round limit (0 = unlimited)",
)
@click.option("--model", default="", help="Model override")
@click.pass_context
def run_command(
    ctx, file: Path, instruction: str | None, max_rounds: int | None, model: str
):
    """Ask the agent to edit FILE according to INSTRUCTION."""
    config = get_config(ctx)

    if not config.api_key:
        prov = config.providers.get(config.agent.provider)
        env_name = prov.api_key_env if prov and prov.api_key_env else "ANTHROPIC_API_KEY"
        click.echo(click.style(f"{env_name} environment variable is not set.", fg="red"), err=True)
        click.echo(f"Please set it with: export {env_name}=your_key_here", err=True)
        ctx.exit(1)

    if not file.is_file():
        click.echo(click.style(f"File not found: {file}", fg="red"), err=True)
        ctx.exit(1)

    if not instruction:
        instruction = click.prompt(
            "Describe the refactoring task", default=config.agent.default_instruction
        )

    service = DispatchService(
        provider=get_provider(config.agent.provider, config),
        editor=EditorService(config.editor),
        config=config.agent,
        ask=_ask,
        model=model or config.resolved_model,
    )

    click.echo(f"\nStarting refactoring task for: {file}")
    click.echo(f"Task: {instruction}\n")

    outcome = run(service.run_task(
        str(file), instruction, on_progress=_cli_progress, max_rounds=max_rounds,
    ))

    if outcome.succeeded:
        click.echo(click.style("\nRefactoring task completed!", fg="green"))
    elif outcome.state == TaskState.ROUND_LIMIT_EXCEEDED:
        click.echo(
            click.style(f"\nStopped after {outcome.rounds} rounds without finishing.", fg="yellow"),
            err=True,
        )
    else:
        click.echo(click.style("\nRefactoring task aborted.", fg="red"), err=True)

    click.echo(
        f"Rounds: {outcome.rounds}, tokens: "
        f"{outcome.usage.get('input_tokens', 0)} in / {outcome.usage.get('output_tokens', 0)} out"
    )
    ctx.exit(_EXIT_CODES[outcome.state])
