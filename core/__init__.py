"""Core package for the legal filing assistant."""

from .errors import EnrichmentServiceError, IntakeError, SpeechCaptureError, TranslationError, UnknownFieldError

__all__ = [
    "EnrichmentServiceError",
    "IntakeError",
    "SpeechCaptureError",
    "TranslationError",
    "UnknownFieldError",
]
