from __future__ import annotations

import pytest

import config
from config import AIProvider, EnrichmentConfig, load_enrichment_config, load_wizard_settings
from config.languages import DEFAULT_LANGUAGE_CODE, get_language, is_supported_language


def test_no_credentials_disables_enrichment() -> None:
    cfg = load_enrichment_config({}, secrets={})

    assert cfg.provider is AIProvider.NONE
    assert cfg.guidance_configured is False
    assert cfg.translation_configured is False
    assert cfg.model == config.DEFAULT_OPENAI_MODEL


def test_openai_key_resolution_order() -> None:
    env = {"OPENAI_API_KEY": "env-key", "OPENAI_MODEL": "gpt-4o"}

    assert load_enrichment_config(env, secrets={"OPENAI_API_KEY": "secret-key"}).api_key == "secret-key"
    cfg = load_enrichment_config(env, secrets={})
    assert cfg.api_key == "env-key"
    assert cfg.model == "gpt-4o"
    assert cfg.provider is AIProvider.OPENAI


def test_azure_requires_deployment() -> None:
    env = {"AZURE_OPENAI_ENDPOINT": "https://legal.openai.azure.com", "AZURE_OPENAI_API_KEY": "az-key"}

    assert load_enrichment_config(env, secrets={}).provider is AIProvider.NONE

    env["AZURE_OPENAI_DEPLOYMENT"] = "gpt-4"
    cfg = load_enrichment_config(env, secrets={})
    assert cfg.provider is AIProvider.AZURE
    assert cfg.model == "gpt-4"
    assert cfg.azure_api_version == config.DEFAULT_AZURE_API_VERSION


def test_translation_settings() -> None:
    env = {"TRANSLATION_API_URL": "https://mt.example/api/", "BHASHINI_API_KEY": "mt-key"}

    cfg = load_enrichment_config(env, secrets={})

    assert cfg.translation_api_url == "https://mt.example/api"
    assert cfg.translation_api_key == "mt-key"
    assert cfg.translation_configured is True


def test_invalid_timeout_warns_and_falls_back() -> None:
    with pytest.warns(RuntimeWarning):
        cfg = load_enrichment_config({"ENRICHMENT_REQUEST_TIMEOUT": "soon"}, secrets={})

    assert cfg.request_timeout == config.DEFAULT_REQUEST_TIMEOUT


def test_wizard_settings_from_environment() -> None:
    settings = load_wizard_settings(
        {"GUIDANCE_DEBOUNCE_MS": "250", "GUIDANCE_MIN_LENGTH": "20", "MAX_ATTACHMENT_MB": "5"}
    )

    assert settings.debounce_seconds == 0.25
    assert settings.guidance_min_length == 20
    assert settings.max_attachment_bytes == 5 * 1024 * 1024


def test_wizard_settings_defaults() -> None:
    settings = load_wizard_settings({})

    assert settings.debounce_seconds == 1.0
    assert settings.guidance_min_length == 50
    assert settings.max_attachment_bytes == 10 * 1024 * 1024


def test_provider_of_bare_config() -> None:
    assert EnrichmentConfig(api_key="k", model="m").provider is AIProvider.OPENAI


def test_language_lookup() -> None:
    assert get_language(DEFAULT_LANGUAGE_CODE).primary_subtag == "hi"
    assert get_language("bn-IN").display_name == "বাংলা (Bengali)"
    assert is_supported_language("fr-FR") is False
    with pytest.raises(ValueError):
        get_language("fr-FR")
