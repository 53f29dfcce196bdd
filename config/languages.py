"""Spoken languages supported by voice input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class LanguageOption:
    """A speech-recognition locale with its English and native display names."""

    code: str
    name: str
    native_name: str

    @property
    def primary_subtag(self) -> str:
        """Return the ISO 639-1 part of ``code`` (``"hi"`` for ``"hi-IN"``)."""

        return self.code.split("-", 1)[0].lower()

    @property
    def display_name(self) -> str:
        return f"{self.native_name} ({self.name})"


SUPPORTED_LANGUAGES: Final[tuple[LanguageOption, ...]] = (
    LanguageOption("hi-IN", "Hindi", "हिन्दी"),
    LanguageOption("bn-IN", "Bengali", "বাংলা"),
    LanguageOption("te-IN", "Telugu", "తెలుగు"),
    LanguageOption("ta-IN", "Tamil", "தமிழ்"),
    LanguageOption("mr-IN", "Marathi", "मराठी"),
    LanguageOption("gu-IN", "Gujarati", "ગુજરાતી"),
    LanguageOption("kn-IN", "Kannada", "ಕನ್ನಡ"),
    LanguageOption("ml-IN", "Malayalam", "മലയാളം"),
)

DEFAULT_LANGUAGE_CODE: Final[str] = "hi-IN"

_LANGUAGES_BY_CODE: Final[dict[str, LanguageOption]] = {lang.code: lang for lang in SUPPORTED_LANGUAGES}


def get_language(code: str) -> LanguageOption:
    """Return the :class:`LanguageOption` for ``code``.

    Raises:
        ValueError: If ``code`` is not one of :data:`SUPPORTED_LANGUAGES`.
    """

    try:
        return _LANGUAGES_BY_CODE[code]
    except KeyError:
        raise ValueError(f"Unsupported language code: {code!r}") from None


def is_supported_language(code: str) -> bool:
    return code in _LANGUAGES_BY_CODE


__all__ = [
    "DEFAULT_LANGUAGE_CODE",
    "LanguageOption",
    "SUPPORTED_LANGUAGES",
    "get_language",
    "is_supported_language",
]
