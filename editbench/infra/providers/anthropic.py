"""Anthropic LLM provider using the anthropic SDK."""

from __future__ import annotations

import logging

import anthropic

from editbench.infra.providers.base import ProviderError
from editbench.models.provider import LLMConfig, LLMMessage, LLMResponse, ToolCall

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"


class AnthropicProvider:
    """LLM provider using the Anthropic API."""

    def __init__(self, api_key: str = "", model: str = "") -> None:
        self._client = anthropic.AsyncAnthropic(api_key=api_key or None)
        self._default_model = model or DEFAULT_MODEL

    def _convert_messages(self, messages: list[LLMMessage]) -> list[dict]:
        """Convert LLMMessages to Anthropic content-block format."""
        converted = []

        for msg in messages:
            if msg.role == "tool":
                converted.append({
                    "role": "user",
                    "content": [{
                        "type": "tool_result",
                        "tool_use_id": msg.tool_call_id,
                        "content": msg.content,
                    }],
                })
            elif msg.tool_calls:
                # Assistant message with tool calls
                content_blocks: list[dict] = []
                if msg.content:
                    content_blocks.append({"type": "text", "text": msg.content})
                for tc in msg.tool_calls:
                    content_blocks.append({
                        "type": "tool_use",
                        "id": tc["id"],
                        "name": tc["name"],
                        "input": tc.get("arguments", {}),
                    })
                converted.append({"role": msg.role, "content": content_blocks})
            else:
                converted.append({"role": msg.role, "content": msg.content})

        return converted

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion using the Anthropic API."""
        config = config or LLMConfig()
        model = config.model or self._default_model
        converted = self._convert_messages(messages)

        kwargs: dict = {
            "model": model,
            "max_tokens": config.max_tokens,
            "messages": converted,
        }
        if config.tools:
            # Anthropic-defined tools such as the text editor are sent as declared
            kwargs["tools"] = [dict(tool) for tool in config.tools]

        try:
            response = await self._client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.warning("Anthropic request failed: %s", e)
            raise ProviderError(str(e)) from e

        # Parse response
        content_text = ""
        tool_calls = []

        for block in response.content:
            if block.type == "text":
                content_text += block.text
            elif block.type == "tool_use":
                tool_calls.append(ToolCall(
                    id=block.id,
                    name=block.name,
                    arguments=dict(block.input) if block.input else {},
                ))

        return LLMResponse(
            content=content_text,
            model=response.model,
            finish_reason=response.stop_reason or "",
            tool_calls=tool_calls,
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
        )
