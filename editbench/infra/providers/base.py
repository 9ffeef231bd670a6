"""LLM provider protocol definition."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from editbench.models.provider import LLMConfig, LLMMessage, LLMResponse


class ProviderError(Exception):
    """The provider call itself failed (transport, auth, rate limit)."""


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for LLM providers."""

    async def complete(
        self,
        messages: list[LLMMessage],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """Generate a completion from the model.

        Raises:
            ProviderError: the request could not be completed.
        """
        ...
