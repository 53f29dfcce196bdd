"""Keyword-anchored extraction of field values from spoken transcripts."""

from __future__ import annotations

import logging
from typing import Callable, Final, Mapping, Sequence

logger = logging.getLogger("legal_intake.extraction")

# Trigger keywords per field, including transliterations and Devanagari forms.
FIELD_KEYWORDS: Final[Mapping[str, tuple[str, ...]]] = {
    "name": ("name", "naam", "नाम"),
    "address": ("address", "pata", "पता"),
    "caseDescription": ("case", "description", "मामला", "विवरण"),
}


def extract_fields(
    transcript: str,
    set_field: Callable[[str, str], None],
    keyword_table: Mapping[str, Sequence[str]] = FIELD_KEYWORDS,
) -> dict[str, str]:
    """Forward keyword-anchored values found in ``transcript`` to ``set_field``.

    The transcript is lowercased and split on whitespace. For every keyword the
    first token containing it anchors the match and all following tokens are
    joined into the value. A keyword in the final position yields nothing.
    Values run to the end of the transcript, so an earlier field also captures
    text that follows later keywords.

    Returns:
        The field values that were forwarded, last match per field winning.
    """

    applied: dict[str, str] = {}
    if not isinstance(transcript, str) or not transcript.strip():
        return applied
    tokens = transcript.lower().split()
    for field_id, keywords in keyword_table.items():
        for keyword in keywords:
            needle = keyword.lower()
            if not needle:
                continue
            index = next((pos for pos, token in enumerate(tokens) if needle in token), None)
            if index is None or index + 1 >= len(tokens):
                continue
            value = " ".join(tokens[index + 1 :])
            try:
                set_field(field_id, value)
            except Exception:
                logger.warning("Could not apply extracted value for '%s'", field_id, exc_info=True)
                continue
            applied[field_id] = value
    if applied:
        logger.debug("Extracted fields from transcript: %s", ", ".join(applied))
    return applied


__all__ = ["FIELD_KEYWORDS", "extract_fields"]
