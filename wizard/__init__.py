"""Wizard helpers package."""

from __future__ import annotations

from .analyzer import AnalyzerPhase, DebouncedAnalyzer
from .controller import SUBMITTED_COMMENT, WizardController, WizardState
from .extraction import FIELD_KEYWORDS, extract_fields
from .step_registry import (
    CASE_DESCRIPTION_FIELD,
    DATA_STEPS,
    REVIEW_STEP_INDEX,
    STATUS_STEP_INDEX,
    WIZARD_STEPS,
    get_field_spec,
)
from .validation import validate_field, validate_step

__all__ = [
    "AnalyzerPhase",
    "CASE_DESCRIPTION_FIELD",
    "DATA_STEPS",
    "DebouncedAnalyzer",
    "FIELD_KEYWORDS",
    "REVIEW_STEP_INDEX",
    "STATUS_STEP_INDEX",
    "SUBMITTED_COMMENT",
    "WIZARD_STEPS",
    "WizardController",
    "WizardState",
    "extract_fields",
    "get_field_spec",
    "validate_field",
    "validate_step",
]
