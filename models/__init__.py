"""Data models for the intake wizard and its enrichment services."""

from .intake import (
    ApplicationStatus,
    AttachmentHandle,
    DocumentValidationResult,
    FieldKind,
    FieldSpec,
    FieldValue,
    FormValues,
    GuidanceResult,
    StatusCode,
    StepSpec,
    TranslationResult,
    ValidationErrors,
    ValidationRule,
)

__all__ = [
    "ApplicationStatus",
    "AttachmentHandle",
    "DocumentValidationResult",
    "FieldKind",
    "FieldSpec",
    "FieldValue",
    "FormValues",
    "GuidanceResult",
    "StatusCode",
    "StepSpec",
    "TranslationResult",
    "ValidationErrors",
    "ValidationRule",
]
