"""Exception types for the intake wizard and its enrichment collaborators."""

from __future__ import annotations


class IntakeError(Exception):
    """Base exception for the Legal Filing Assistant."""


class UnknownFieldError(IntakeError, KeyError):
    """Raised when a value is written to a field no step defines."""

    def __init__(self, field_id: str) -> None:
        super().__init__(field_id)
        self.field_id = field_id

    def __str__(self) -> str:
        return f"Unknown form field: {self.field_id!r}"


class EnrichmentServiceError(IntakeError):
    """Raised when an external text-intelligence service cannot be used."""

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.original = original


class TranslationError(EnrichmentServiceError):
    """Raised for any translation failure, including missing credentials."""

    def __init__(self, message: str = "Translation failed", *, original: Exception | None = None) -> None:
        super().__init__(message, service="translation", original=original)


class SpeechCaptureError(EnrichmentServiceError):
    """Raised when audio could not be turned into a transcript."""

    def __init__(self, message: str = "Speech recognition failed", *, original: Exception | None = None) -> None:
        super().__init__(message, service="speech", original=original)


__all__ = [
    "EnrichmentServiceError",
    "IntakeError",
    "SpeechCaptureError",
    "TranslationError",
    "UnknownFieldError",
]
