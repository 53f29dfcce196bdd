from __future__ import annotations

import logging

from openai import AzureOpenAI, OpenAI, OpenAIError

from config import AIProvider, EnrichmentConfig

logger = logging.getLogger("legal_intake.openai")


def create_client(config: EnrichmentConfig) -> OpenAI | None:
    """Return an OpenAI (or Azure OpenAI) client for ``config``.

    Returns ``None`` when the configuration is incomplete or the SDK rejects
    it, so callers can fall back to their unavailable payloads.
    """

    provider = config.provider
    if provider is AIProvider.NONE:
        return None
    try:
        if provider is AIProvider.AZURE:
            return AzureOpenAI(
                api_key=config.api_key,
                azure_endpoint=config.azure_endpoint,
                api_version=config.azure_api_version,
                timeout=config.request_timeout,
                max_retries=0,
            )
        return OpenAI(
            api_key=config.api_key,
            base_url=config.base_url or None,
            timeout=config.request_timeout,
            max_retries=0,
        )
    except OpenAIError:
        logger.error("Failed to initialise the %s client", provider.value, exc_info=True)
        return None


__all__ = ["create_client"]
