"""AI advisory services for case descriptions and legal documents.

None of the public methods raise: an unconfigured client yields the
"unavailable" payload and a failing call yields the "failed" payload, so the
wizard can treat guidance as purely advisory.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from openai import OpenAI
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from config import EnrichmentConfig
from models.intake import DocumentValidationResult, GuidanceResult
from openai_utils import create_client
from utils.logging_context import log_context
from utils.retry import OPENAI_RETRY_EXCEPTIONS, retry_with_backoff

from .prompts import case_guidance_messages, document_validation_messages, translation_review_messages

logger = logging.getLogger("legal_intake.guidance")
tracer = trace.get_tracer(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class EmptyCompletionError(RuntimeError):
    """Raised internally when the model returns no content."""


def _parse_json_object(content: str) -> Mapping[str, Any] | None:
    """Return ``content`` decoded as a JSON object, tolerating code fences."""

    candidate = content.strip()
    fenced = _CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, Mapping) else None


class GuidanceClient:
    """Chat-completion backed legal advisory collaborator."""

    def __init__(self, config: EnrichmentConfig, *, client: OpenAI | None = None) -> None:
        self._config = config
        self._client = client if client is not None else create_client(config)

    @property
    def configured(self) -> bool:
        return self._client is not None and bool(self._config.model)

    def analyze_case_description(self, description: str) -> GuidanceResult:
        """Return structured guidance for ``description``."""

        if not self.configured:
            return GuidanceResult.unavailable()
        with tracer.start_as_current_span("guidance.analyze") as span:
            span.set_attribute("guidance.chars", len(description))
            try:
                content = self._complete(case_guidance_messages(description), temperature=0.7, max_tokens=800)
            except Exception as exc:  # noqa: BLE001 - advisory calls never raise
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
                logger.warning("Case analysis failed", exc_info=True)
                return GuidanceResult.failed()
            parsed = _parse_json_object(content)
            if parsed is None:
                return GuidanceResult(explanation=content)
            try:
                return GuidanceResult.model_validate(parsed)
            except ValidationError:
                logger.info("Guidance payload did not match the expected shape; using raw text")
                return GuidanceResult(explanation=content)

    def validate_document(self, document_text: str) -> DocumentValidationResult:
        """Check ``document_text`` for completeness and legal requirements."""

        if not self.configured:
            return DocumentValidationResult.unavailable()
        with tracer.start_as_current_span("guidance.validate_document") as span:
            span.set_attribute("guidance.chars", len(document_text))
            try:
                content = self._complete(document_validation_messages(document_text), temperature=0.2, max_tokens=1000)
            except Exception as exc:  # noqa: BLE001 - advisory calls never raise
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
                logger.warning("Document validation failed", exc_info=True)
                return DocumentValidationResult.failed()
            parsed = _parse_json_object(content)
            if parsed is not None:
                try:
                    return DocumentValidationResult.model_validate(parsed)
                except ValidationError:
                    logger.info("Validation payload did not match the expected shape; using raw text")
            return DocumentValidationResult(is_valid=True, suggestions=[content])

    def improve_translation(self, original_text: str, translated_text: str, context: str) -> str:
        """Return a refined translation, or ``translated_text`` when unavailable."""

        if not self.configured:
            return translated_text
        with tracer.start_as_current_span("guidance.improve_translation") as span:
            try:
                content = self._complete(
                    translation_review_messages(original_text, translated_text, context),
                    temperature=0.3,
                    max_tokens=500,
                )
            except Exception as exc:  # noqa: BLE001 - advisory calls never raise
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
                logger.warning("Translation refinement failed", exc_info=True)
                return translated_text
            return content or translated_text

    def _complete(self, messages: list[dict[str, str]], *, temperature: float, max_tokens: int) -> str:
        with log_context(service="guidance"):
            return self._request_completion(messages, temperature=temperature, max_tokens=max_tokens)

    @retry_with_backoff(exceptions=OPENAI_RETRY_EXCEPTIONS, max_tries=2)
    def _request_completion(self, messages: list[dict[str, str]], *, temperature: float, max_tokens: int) -> str:
        assert self._client is not None
        response = self._client.chat.completions.create(
            model=self._config.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = (getattr(message, "content", None) or "").strip()
        if not content:
            raise EmptyCompletionError("No content received from the model")
        return content


__all__ = ["EmptyCompletionError", "GuidanceClient"]
