"""HTTP client for the machine-translation service.

The service speaks a small JSON protocol (Bhashini style)::

    POST {url}/translate  {"text", "sourceLanguage", "targetLanguage"}
      -> {"translatedText", "sourceLanguage", "targetLanguage"}
    POST {url}/detect     {"text"} -> {"language"}

Every failure, including missing credentials, surfaces as
:class:`core.errors.TranslationError`; callers treat it as "unavailable".
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import requests
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from config import EnrichmentConfig
from core.errors import TranslationError
from models.intake import TranslationResult
from utils.logging_context import log_context
from utils.retry import HTTP_RETRY_EXCEPTIONS, retry_with_backoff

logger = logging.getLogger("legal_intake.translation")
tracer = trace.get_tracer(__name__)


class TranslationClient:
    """Translate short transcripts between the supported languages."""

    def __init__(self, config: EnrichmentConfig, *, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def configured(self) -> bool:
        return self._config.translation_configured

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """Translate ``text`` from ``source_language`` into ``target_language``.

        Raises:
            TranslationError: On any configuration, transport, or payload problem.
        """

        with tracer.start_as_current_span("translation.translate") as span:
            span.set_attribute("translation.source", source_language)
            span.set_attribute("translation.target", target_language)
            span.set_attribute("translation.chars", len(text))
            payload = self._post(
                "translate",
                {"text": text, "sourceLanguage": source_language, "targetLanguage": target_language},
                span=span,
            )
            try:
                return TranslationResult.model_validate(payload)
            except ValidationError as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, "invalid payload"))
                logger.warning("Translation service returned an unexpected payload")
                raise TranslationError(original=exc) from exc

    def detect_language(self, text: str) -> str:
        """Return the language code the service detects for ``text``.

        Raises:
            TranslationError: On any configuration, transport, or payload problem.
        """

        with tracer.start_as_current_span("translation.detect") as span:
            payload = self._post("detect", {"text": text}, span=span)
            language = payload.get("language")
            if not isinstance(language, str) or not language.strip():
                span.set_status(Status(StatusCode.ERROR, "invalid payload"))
                raise TranslationError("Language detection failed")
            return language.strip()

    def _post(self, route: str, body: Mapping[str, Any], *, span: trace.Span) -> Mapping[str, Any]:
        if not self.configured:
            span.set_status(Status(StatusCode.ERROR, "not configured"))
            raise TranslationError("Translation service is not configured")
        try:
            with log_context(service="translation"):
                response = self._send(route, body)
                response.raise_for_status()
                payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
            logger.warning("Translation request to '%s' failed", route, exc_info=True)
            raise TranslationError(original=exc) from exc
        if not isinstance(payload, Mapping):
            span.set_status(Status(StatusCode.ERROR, "invalid payload"))
            raise TranslationError("Translation service returned a non-object payload")
        return payload

    @retry_with_backoff(exceptions=HTTP_RETRY_EXCEPTIONS, max_tries=2)
    def _send(self, route: str, body: Mapping[str, Any]) -> requests.Response:
        return self._session.post(
            f"{self._config.translation_api_url}/{route}",
            json=dict(body),
            headers={
                "Authorization": f"Bearer {self._config.translation_api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._config.request_timeout,
        )


__all__ = ["TranslationClient"]
