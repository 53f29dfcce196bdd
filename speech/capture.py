"""Listening session that turns speech into translated transcripts."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Callable, Protocol

from config import PROCESSING_LANGUAGE
from config.languages import DEFAULT_LANGUAGE_CODE, LanguageOption, get_language
from core.errors import SpeechCaptureError, TranslationError
from models.intake import TranslationResult

from .backends import Available, SpeechBackend, SpeechRecognizer

logger = logging.getLogger("legal_intake.speech")

TranscriptConsumer = Callable[[str], object]


class Translator(Protocol):
    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult: ...


class ListeningState(StrEnum):
    IDLE = "idle"
    LISTENING = "listening"


class SpeechCapture:
    """Continuous transcription with translation into the processing language."""

    def __init__(
        self,
        backend: SpeechBackend,
        translator: Translator,
        consumer: TranscriptConsumer,
        *,
        language: str = DEFAULT_LANGUAGE_CODE,
        target_language: str = PROCESSING_LANGUAGE,
    ) -> None:
        self._backend = backend
        self._translator = translator
        self._consumer = consumer
        self._language: LanguageOption = get_language(language)
        self._target_language = target_language
        self._state = ListeningState.IDLE
        self._segments: list[str] = []
        self._is_translating = False

    @property
    def available(self) -> bool:
        return isinstance(self._backend, Available)

    @property
    def unavailable_reason(self) -> str | None:
        return None if isinstance(self._backend, Available) else self._backend.reason

    @property
    def state(self) -> ListeningState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state is ListeningState.LISTENING

    @property
    def is_translating(self) -> bool:
        return self._is_translating

    @property
    def language(self) -> LanguageOption:
        return self._language

    @property
    def transcript(self) -> str:
        return " ".join(self._segments)

    def start(self) -> bool:
        """Begin a new listening session; ``False`` when it cannot start."""

        if not self.available:
            return False
        if self._is_translating:
            logger.debug("Ignoring start request while a translation is running")
            return False
        if self.is_listening:
            return True
        self._segments = []
        self._state = ListeningState.LISTENING
        logger.info("Listening in %s", self._language.code)
        return True

    def stop(self) -> None:
        if self.is_listening:
            logger.info("Stopped listening")
        self._state = ListeningState.IDLE

    def toggle(self) -> bool:
        """Flip between idle and listening; returns the new listening flag."""

        if self.is_listening:
            self.stop()
        else:
            self.start()
        return self.is_listening

    def set_language(self, code: str) -> None:
        """Select the spoken language; an active session is stopped first.

        Raises:
            ValueError: If ``code`` is not a supported language.
        """

        language = get_language(code)
        if language == self._language:
            return
        self.stop()
        self._language = language

    def feed_audio(self, audio: bytes) -> str | None:
        """Recognise ``audio`` and handle the resulting segment.

        Returns:
            The text forwarded to the consumer, or ``None`` when nothing was.
        """

        if not self.is_listening or not isinstance(self._backend, Available):
            return None
        recognizer: SpeechRecognizer = self._backend.recognizer
        try:
            segment = recognizer.transcribe(audio, self._language.primary_subtag)
        except SpeechCaptureError:
            logger.warning("Speech recognition error; stopping the session", exc_info=True)
            self.stop()
            return None
        return self.handle_segment(segment)

    def handle_segment(self, text: str) -> str | None:
        """Accumulate ``text`` and forward the translated session transcript."""

        if not self.is_listening:
            return None
        segment = (text or "").strip()
        if not segment:
            return None
        self._segments.append(segment)
        transcript = self.transcript
        self._is_translating = True
        try:
            forwarded = self._translate(transcript)
        finally:
            self._is_translating = False
        self._consumer(forwarded)
        return forwarded

    def _translate(self, transcript: str) -> str:
        try:
            result = self._translator.translate(
                transcript,
                self._language.primary_subtag,
                self._target_language,
            )
        except TranslationError:
            logger.warning("Translation unavailable; forwarding the original transcript")
            return transcript
        return result.translated_text or transcript


__all__ = ["ListeningState", "SpeechCapture", "TranscriptConsumer", "Translator"]
