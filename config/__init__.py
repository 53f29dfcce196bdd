"""Central configuration for the Legal Filing Assistant.

Enrichment services (AI guidance, document validation, speech transcription
and machine translation) are optional collaborators. Their endpoints and
credentials are read from Streamlit secrets or environment variables once at
startup and resolved into an :class:`EnrichmentConfig` that is passed to the
client constructors. Missing values only disable the matching feature; the
form itself always works.

Azure OpenAI is used when ``AZURE_OPENAI_ENDPOINT`` is set, otherwise the
standard OpenAI API is used with ``OPENAI_API_KEY``.
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

import streamlit as st
from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger("legal_intake.config")

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_AZURE_API_VERSION = "2024-06-01"
DEFAULT_TRANSCRIPTION_MODEL = "whisper-1"
DEFAULT_TRANSLATION_API_URL = "https://bhashini.gov.in/api/v1"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_DEBOUNCE_MS = 1000
DEFAULT_GUIDANCE_MIN_LENGTH = 50
DEFAULT_MAX_ATTACHMENT_MB = 10

# Language every transcript is translated into before field extraction.
PROCESSING_LANGUAGE = "en"


class AIProvider(StrEnum):
    """Backends supported for the guidance and speech services."""

    AZURE = "azure"
    OPENAI = "openai"
    NONE = "none"


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _coerce_secret_value(value: object) -> str:
    """Return ``value`` as a trimmed string without raising on unexpected types."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (bytes, bytearray)):
        try:
            return value.decode("utf-8").strip()
        except UnicodeDecodeError:
            return ""
    return str(value).strip()


def _parse_positive_number(value: object | None, *, env_var: str, default: float) -> float:
    """Return a positive number parsed from ``value`` or ``default``."""

    if value is None:
        return default
    candidate = value
    if isinstance(candidate, str):
        stripped = candidate.strip()
        if not stripped:
            return default
        try:
            candidate = float(stripped)
        except ValueError:
            warnings.warn(
                "Unsupported %s '%s'; falling back to %s." % (env_var, stripped, default),
                RuntimeWarning,
            )
            return default
    if isinstance(candidate, (int, float)) and not isinstance(candidate, bool) and candidate > 0:
        return float(candidate)
    warnings.warn(
        "%s must be a positive number; falling back to %s." % (env_var, default),
        RuntimeWarning,
    )
    return default


def _streamlit_secrets() -> Mapping[str, object]:
    try:
        secrets = st.secrets
        # Accessing a key forces Streamlit to parse secrets.toml, which raises
        # when the file does not exist.
        secrets.get("__probe__")
    except Exception:
        return {}
    return secrets


def _lookup(
    names: tuple[str, ...],
    *,
    environ: Mapping[str, str],
    secrets: Mapping[str, object],
) -> str:
    """Return the first non-empty value for ``names`` from secrets, then ``environ``."""

    for name in names:
        value = _coerce_secret_value(secrets.get(name)) if name in secrets else ""
        if value:
            return value
    for name in names:
        value = _coerce_secret_value(environ.get(name))
        if value:
            return value
    return ""


@dataclass(frozen=True)
class EnrichmentConfig:
    """Resolved settings for every external text-intelligence collaborator."""

    api_key: str = ""
    azure_endpoint: str = ""
    azure_api_version: str = DEFAULT_AZURE_API_VERSION
    model: str = ""
    base_url: str = ""
    transcription_model: str = DEFAULT_TRANSCRIPTION_MODEL
    translation_api_url: str = DEFAULT_TRANSLATION_API_URL
    translation_api_key: str = ""
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def provider(self) -> AIProvider:
        if not self.api_key:
            return AIProvider.NONE
        if self.azure_endpoint:
            return AIProvider.AZURE if self.model else AIProvider.NONE
        return AIProvider.OPENAI

    @property
    def guidance_configured(self) -> bool:
        return self.provider is not AIProvider.NONE

    @property
    def translation_configured(self) -> bool:
        return bool(self.translation_api_url and self.translation_api_key)


@dataclass(frozen=True)
class WizardSettings:
    """Tunables for the intake wizard itself."""

    debounce_seconds: float = DEFAULT_DEBOUNCE_MS / 1000
    guidance_min_length: int = DEFAULT_GUIDANCE_MIN_LENGTH
    max_attachment_bytes: int = DEFAULT_MAX_ATTACHMENT_MB * 1024 * 1024


def load_enrichment_config(
    environ: Mapping[str, str] | None = None,
    *,
    secrets: Mapping[str, object] | None = None,
) -> EnrichmentConfig:
    """Resolve :class:`EnrichmentConfig` from secrets and environment variables."""

    env = os.environ if environ is None else environ
    secret_values = _streamlit_secrets() if secrets is None else secrets

    def lookup(*names: str) -> str:
        return _lookup(names, environ=env, secrets=secret_values)

    azure_endpoint = lookup("AZURE_OPENAI_ENDPOINT")
    if azure_endpoint:
        api_key = lookup("AZURE_OPENAI_API_KEY", "OPENAI_API_KEY")
        model = lookup("AZURE_OPENAI_DEPLOYMENT")
        if api_key and not model:
            logger.warning("AZURE_OPENAI_DEPLOYMENT not set; AI guidance is disabled.")
    else:
        api_key = lookup("OPENAI_API_KEY")
        model = lookup("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL
    if not api_key:
        logger.info("No OpenAI credentials configured; AI guidance and speech input are disabled.")

    translation_key = lookup("TRANSLATION_API_KEY", "BHASHINI_API_KEY")
    if not translation_key:
        logger.info("TRANSLATION_API_KEY not configured; transcripts are used untranslated.")

    return EnrichmentConfig(
        api_key=api_key,
        azure_endpoint=azure_endpoint,
        azure_api_version=lookup("AZURE_OPENAI_API_VERSION") or DEFAULT_AZURE_API_VERSION,
        model=model,
        base_url=lookup("OPENAI_BASE_URL"),
        transcription_model=lookup("OPENAI_TRANSCRIPTION_MODEL") or DEFAULT_TRANSCRIPTION_MODEL,
        translation_api_url=(lookup("TRANSLATION_API_URL") or DEFAULT_TRANSLATION_API_URL).rstrip("/"),
        translation_api_key=translation_key,
        request_timeout=_parse_positive_number(
            env.get("ENRICHMENT_REQUEST_TIMEOUT"),
            env_var="ENRICHMENT_REQUEST_TIMEOUT",
            default=DEFAULT_REQUEST_TIMEOUT,
        ),
    )


def load_wizard_settings(environ: Mapping[str, str] | None = None) -> WizardSettings:
    """Resolve :class:`WizardSettings` from environment variables."""

    env = os.environ if environ is None else environ
    debounce_ms = _parse_positive_number(
        env.get("GUIDANCE_DEBOUNCE_MS"), env_var="GUIDANCE_DEBOUNCE_MS", default=DEFAULT_DEBOUNCE_MS
    )
    min_length = _parse_positive_number(
        env.get("GUIDANCE_MIN_LENGTH"), env_var="GUIDANCE_MIN_LENGTH", default=DEFAULT_GUIDANCE_MIN_LENGTH
    )
    max_mb = _parse_positive_number(
        env.get("MAX_ATTACHMENT_MB"), env_var="MAX_ATTACHMENT_MB", default=DEFAULT_MAX_ATTACHMENT_MB
    )
    return WizardSettings(
        debounce_seconds=debounce_ms / 1000,
        guidance_min_length=int(min_length),
        max_attachment_bytes=int(max_mb * 1024 * 1024),
    )


DEBUG_MODE = _is_truthy_flag(os.getenv("DEBUG"))
LOG_LEVEL = (os.getenv("LOG_LEVEL") or ("DEBUG" if DEBUG_MODE else "INFO")).strip().upper()


__all__ = [
    "AIProvider",
    "DEBUG_MODE",
    "DEFAULT_OPENAI_MODEL",
    "EnrichmentConfig",
    "LOG_LEVEL",
    "PROCESSING_LANGUAGE",
    "WizardSettings",
    "load_enrichment_config",
    "load_wizard_settings",
]
