"""Tests for provider registry and the Anthropic provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from editbench.config import AppConfig, ProviderConfig
from editbench.infra.providers.anthropic import AnthropicProvider
from editbench.infra.providers.base import LLMProvider, ProviderError
from editbench.infra.providers.registry import get_provider
from editbench.models.provider import LLMConfig, LLMMessage, ProviderType


class TestProviderRegistry:
    def _make_config(self) -> AppConfig:
        return AppConfig(
            providers={
                "anthropic": ProviderConfig(api_key="test-key", default_model="test-model"),
            }
        )

    def test_get_anthropic(self):
        provider = get_provider(ProviderType.ANTHROPIC, self._make_config())
        assert isinstance(provider, AnthropicProvider)
        assert isinstance(provider, LLMProvider)

    def test_get_by_string(self):
        provider = get_provider("anthropic", self._make_config())
        assert isinstance(provider, AnthropicProvider)

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            get_provider("nonexistent", self._make_config())


def _fake_response(*blocks):
    return SimpleNamespace(
        content=list(blocks),
        model="claude-test",
        stop_reason="end_turn",
        usage=SimpleNamespace(input_tokens=12, output_tokens=4),
    )


class TestAnthropicProvider:
    def _provider(self) -> AnthropicProvider:
        provider = AnthropicProvider(api_key="test-key", model="claude-test")
        provider._client = SimpleNamespace(messages=SimpleNamespace(create=AsyncMock()))
        return provider

    def test_convert_tool_round(self):
        provider = self._provider()
        converted = provider._convert_messages([
            LLMMessage(role="user", content="edit it"),
            LLMMessage(
                role="assistant",
                content="",
                tool_calls=[{"id": "tu_1", "name": "ed", "arguments": {"command": "view"}}],
            ),
            LLMMessage(role="tool", content="1: a", tool_call_id="tu_1", name="ed"),
        ])
        assert converted == [
            {"role": "user", "content": "edit it"},
            {
                "role": "assistant",
                "content": [
                    {"type": "tool_use", "id": "tu_1", "name": "ed", "input": {"command": "view"}},
                ],
            },
            {
                "role": "user",
                "content": [{"type": "tool_result", "tool_use_id": "tu_1", "content": "1: a"}],
            },
        ]

    @pytest.mark.asyncio
    async def test_complete_parses_blocks(self):
        provider = self._provider()
        provider._client.messages.create.return_value = _fake_response(
            SimpleNamespace(type="text", text="Looking."),
            SimpleNamespace(type="tool_use", id="tu_1", name="ed", input={"command": "view", "path": "a"}),
        )
        response = await provider.complete(
            [LLMMessage(role="user", content="hi")],
            LLMConfig(tools=[{"type": "text_editor_20250124", "name": "ed"}]),
        )
        assert response.content == "Looking."
        assert response.tool_calls[0].id == "tu_1"
        assert response.tool_calls[0].arguments == {"command": "view", "path": "a"}
        assert response.usage == {"input_tokens": 12, "output_tokens": 4}

        kwargs = provider._client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == 4096
        assert kwargs["tools"] == [{"type": "text_editor_20250124", "name": "ed"}]

    @pytest.mark.asyncio
    async def test_tools_omitted_when_none_declared(self):
        provider = self._provider()
        provider._client.messages.create.return_value = _fake_response(
            SimpleNamespace(type="text", text="ok"),
        )
        await provider.complete([LLMMessage(role="user", content="hi")])
        assert "tools" not in provider._client.messages.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_api_error_becomes_provider_error(self):
        provider = self._provider()
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        provider._client.messages.create.side_effect = anthropic.APIConnectionError(request=request)
        with pytest.raises(ProviderError):
            await provider.complete([LLMMessage(role="user", content="hi")])
