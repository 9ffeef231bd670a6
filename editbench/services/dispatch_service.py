"""Dispatch loop: drives an edit task through the agent, one command per round.

The loop owns the transcript. Each round it sends the whole transcript to
the provider; a response without a tool call completes the task, otherwise
the first tool call is validated into a typed editor command, executed,
and echoed back together with its result. Provider failures leave the
transcript untouched and ask the user whether to retry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from editbench.config import AgentConfig
from editbench.errors import ERROR_PREFIX, EditorError, format_error
from editbench.infra.providers.base import LLMProvider, ProviderError
from editbench.models.command import parse_command
from editbench.models.provider import LLMConfig, LLMMessage, LLMResponse, ToolCall
from editbench.models.task import TaskOutcome, TaskState, build_task_prompt
from editbench.services.editor_service import EditorService

logger = logging.getLogger(__name__)

RETRY_PROMPT = "\nDo you want to continue? (y/n): "

_PREVIEW_CHARS = 100


def _preview(text: str) -> str:
    return f"{text[:_PREVIEW_CHARS]}..." if len(text) > _PREVIEW_CHARS else text


class DispatchService:
    """Runs edit tasks against an LLM provider and the editor engine."""

    def __init__(
        self,
        provider: LLMProvider,
        editor: EditorService,
        config: AgentConfig | None = None,
        ask: Callable[[str], str] | None = None,
        model: str = "",
    ) -> None:
        self._provider = provider
        self._editor = editor
        self._config = config or AgentConfig()
        self._ask = ask or input
        self._llm_config = LLMConfig(
            model=model or self._config.model,
            max_tokens=self._config.max_tokens,
            tools=[self._config.tool_definition],
        )

    async def run_task(
        self,
        path: str,
        instruction: str,
        on_progress: Callable[[str], None] | None = None,
        max_rounds: int | None = None,
    ) -> TaskOutcome:
        """Run one edit task until it completes, is aborted or hits the round limit.

        Args:
            path: File the agent is asked to edit.
            instruction: Freeform description of the change.
            on_progress: Optional callback receiving agent text and
                ``[tool] ...`` markers as the task advances.
            max_rounds: Overrides the configured round limit; 0 disables it.

        Raises:
            ValueError: If the round limit is negative or not an integer.
        """
        limit = self._config.max_rounds if max_rounds is None else max_rounds
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValueError(f"max_rounds must be a non-negative integer, got {limit!r}")
        transcript: list[LLMMessage] = [
            LLMMessage(role="user", content=build_task_prompt(path, instruction))
        ]
        usage = {"input_tokens": 0, "output_tokens": 0}
        rounds = 0
        state = TaskState.RUNNING
        final_text = ""

        logger.info("Starting edit task for %s", path)

        while not state.is_terminal:
            if limit and rounds >= limit:
                logger.warning("Edit task for %s stopped after %d rounds", path, rounds)
                state = TaskState.ROUND_LIMIT_EXCEEDED
                break

            response = await self._request(transcript)
            if response is None:
                state = TaskState.ABORTED
                break

            rounds += 1
            usage["input_tokens"] += response.usage.get("input_tokens", 0)
            usage["output_tokens"] += response.usage.get("output_tokens", 0)

            if response.content:
                logger.info("Agent: %s", response.content)
                if on_progress:
                    on_progress(response.content)

            if not response.has_tool_calls:
                transcript.append(LLMMessage(role="assistant", content=response.content))
                final_text = response.content
                state = TaskState.COMPLETE
                break

            # Only the first tool call is acted upon each round
            tool_call = response.tool_calls[0]
            if len(response.tool_calls) > 1:
                logger.debug(
                    "Ignoring %d extra tool calls in round %d",
                    len(response.tool_calls) - 1, rounds,
                )

            if on_progress:
                on_progress(self._describe(tool_call))

            result = await self._dispatch(tool_call)
            logger.info("Tool result: %s", _preview(result))

            transcript.append(LLMMessage(
                role="assistant",
                content="",
                tool_calls=[tool_call.to_dict()],
            ))
            transcript.append(LLMMessage(
                role="tool",
                content=result,
                tool_call_id=tool_call.id,
                name=tool_call.name,
            ))

        logger.info("Edit task for %s finished: %s after %d rounds", path, state.value, rounds)
        return TaskOutcome(
            state=state,
            rounds=rounds,
            final_text=final_text,
            transcript=tuple(transcript),
            usage=usage,
        )

    async def _request(self, transcript: list[LLMMessage]) -> LLMResponse | None:
        """Ask the provider for the next action, retrying while the user agrees.

        Returns None when the user declines to retry after a failure.
        """
        while True:
            try:
                return await self._provider.complete(list(transcript), self._llm_config)
            except ProviderError as e:
                logger.error("Agent request failed: %s", e)
                answer = self._ask(RETRY_PROMPT)
                if answer.strip().lower() != "y":
                    logger.info("User declined to retry; aborting")
                    return None
                logger.info("Retrying agent request")

    async def _dispatch(self, tool_call: ToolCall) -> str:
        """Validate a tool call into an editor command and execute it."""
        if tool_call.name != self._config.tool_name:
            logger.warning("Agent called unknown tool %s", tool_call.name)
            return f"{ERROR_PREFIX} Unknown tool '{tool_call.name}'"

        try:
            command = parse_command(tool_call.arguments)
        except EditorError as e:
            logger.warning(
                "Rejected tool input [%s] %s: %s", e.kind.value, tool_call.arguments, e
            )
            return format_error(e)

        return await self._editor.execute(command)

    @staticmethod
    def _describe(tool_call: ToolCall) -> str:
        command = tool_call.arguments.get("command", "")
        path = tool_call.arguments.get("path", "")
        return f"[tool] {command} {path}".rstrip()
