"""LLM provider factory/registry."""

from __future__ import annotations

import logging

from editbench.config import AppConfig
from editbench.infra.providers.anthropic import AnthropicProvider
from editbench.infra.providers.base import LLMProvider
from editbench.models.provider import ProviderType

logger = logging.getLogger(__name__)


def _build_provider(provider_type: ProviderType, config: AppConfig) -> LLMProvider:
    """Build a single provider instance."""
    if provider_type == ProviderType.ANTHROPIC:
        prov_config = config.providers.get("anthropic")
        return AnthropicProvider(
            api_key=prov_config.api_key if prov_config else "",
            model=config.resolved_model,
        )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider(provider_type: ProviderType | str, config: AppConfig) -> LLMProvider:
    """Get an LLM provider instance by type, configured from AppConfig."""
    if isinstance(provider_type, str):
        provider_type = ProviderType(provider_type)
    logger.debug("Using provider %s (model=%s)", provider_type.value, config.resolved_model)
    return _build_provider(provider_type, config)
