"""Capability detection and recognizers for voice input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from openai import OpenAI
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from config import EnrichmentConfig
from core.errors import SpeechCaptureError
from openai_utils import create_client
from utils.logging_context import log_context

logger = logging.getLogger("legal_intake.speech")
tracer = trace.get_tracer(__name__)


class SpeechRecognizer(Protocol):
    """Turns one audio chunk into text in the given language."""

    def transcribe(self, audio: bytes, language: str) -> str: ...


class WhisperRecognizer:
    """Speech recognizer backed by the OpenAI audio transcription endpoint."""

    def __init__(self, client: OpenAI, *, model: str, filename: str = "speech.wav") -> None:
        self._client = client
        self._model = model
        self._filename = filename

    def transcribe(self, audio: bytes, language: str) -> str:
        """Return the transcript of ``audio`` spoken in ``language`` (ISO 639-1).

        Raises:
            SpeechCaptureError: If the chunk is empty or the service call fails.
        """

        if not audio:
            raise SpeechCaptureError("Received an empty audio chunk")
        with log_context(service="speech"), tracer.start_as_current_span("speech.transcribe") as span:
            span.set_attribute("speech.language", language)
            span.set_attribute("speech.bytes", len(audio))
            try:
                response = self._client.audio.transcriptions.create(
                    model=self._model,
                    file=(self._filename, audio),
                    language=language,
                    response_format="text",
                )
            except Exception as exc:  # noqa: BLE001 - surfaced as a capture error
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
                raise SpeechCaptureError(original=exc) from exc
        text = response if isinstance(response, str) else getattr(response, "text", "")
        return str(text or "").strip()


@dataclass(frozen=True)
class Available:
    """Speech input can be used through ``recognizer``."""

    recognizer: SpeechRecognizer


@dataclass(frozen=True)
class Unavailable:
    """Speech input is disabled; ``reason`` is shown to the user."""

    reason: str


SpeechBackend: TypeAlias = Available | Unavailable


def detect_speech_backend(config: EnrichmentConfig, *, client: OpenAI | None = None) -> SpeechBackend:
    """Return the speech capability for ``config``."""

    resolved = client if client is not None else create_client(config)
    if resolved is None:
        logger.info("Speech input disabled: no OpenAI credentials configured")
        return Unavailable("Voice input needs an OpenAI API key.")
    return Available(WhisperRecognizer(resolved, model=config.transcription_model))


__all__ = [
    "Available",
    "SpeechBackend",
    "SpeechRecognizer",
    "Unavailable",
    "WhisperRecognizer",
    "detect_speech_backend",
]
