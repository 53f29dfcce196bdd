"""Prompt templates for the legal advisory services."""

from __future__ import annotations

from typing import Final

CASE_GUIDANCE_SYSTEM: Final[str] = (
    "You are a legal assistant helping to analyze case descriptions and provide guidance. "
    "Reply with a JSON object with the keys \"explanation\" (string), "
    "\"requirements\" (list of strings), and \"suggestions\" (list of strings)."
)

DOCUMENT_VALIDATION_SYSTEM: Final[str] = (
    "You are a legal document validator. Check the document for completeness and legal requirements. "
    "Reply with a JSON object with the keys \"isValid\" (boolean), \"issues\" (list of strings), "
    "and \"suggestions\" (list of strings)."
)

TRANSLATION_REVIEW_SYSTEM: Final[str] = (
    "You are a legal translation expert. Improve the machine translation while maintaining legal accuracy. "
    "Reply with the improved translation only."
)


def case_guidance_messages(description: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": CASE_GUIDANCE_SYSTEM},
        {
            "role": "user",
            "content": f"Please analyze this legal case description and provide guidance: {description}",
        },
    ]


def document_validation_messages(document_text: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": DOCUMENT_VALIDATION_SYSTEM},
        {"role": "user", "content": f"Please validate this legal document: {document_text}"},
    ]


def translation_review_messages(original: str, translated: str, context: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": TRANSLATION_REVIEW_SYSTEM},
        {
            "role": "user",
            "content": (
                f"Original text: {original}\nMachine translation: {translated}\n"
                f"Context: {context}\nPlease improve this translation."
            ),
        },
    ]


__all__ = [
    "CASE_GUIDANCE_SYSTEM",
    "DOCUMENT_VALIDATION_SYSTEM",
    "TRANSLATION_REVIEW_SYSTEM",
    "case_guidance_messages",
    "document_validation_messages",
    "translation_review_messages",
]
