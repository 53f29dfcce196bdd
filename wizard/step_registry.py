"""Registry for wizard steps, field metadata, and canonical order."""

from __future__ import annotations

from typing import Final

from core.errors import UnknownFieldError
from models.intake import FieldKind, FieldSpec, StepSpec, ValidationRule

CASE_DESCRIPTION_FIELD: Final[str] = "caseDescription"

CASE_TYPES: Final[tuple[str, ...]] = (
    "Civil Case",
    "Criminal Case",
    "Family Matter",
    "Property Dispute",
    "Consumer Complaint",
)

ACCEPTED_ATTACHMENT_TYPES: Final[tuple[str, ...]] = ("pdf", "doc", "docx", "png", "jpg", "jpeg", "gif", "webp")
ACCEPTED_ATTACHMENT_MIME_TYPES: Final[tuple[str, ...]] = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

PERSONAL_STEP: Final[StepSpec] = StepSpec(
    key="personal",
    title="Personal Information",
    label="Personal Info",
    fields=(
        FieldSpec(
            id="name",
            label="Full Name",
            kind=FieldKind.TEXT,
            help_text="Enter your legal name as it appears on official documents",
            required=True,
            validation=ValidationRule(
                pattern=r"[a-zA-Z\s]{2,50}",
                message="Please enter a valid name (2-50 characters, letters only)",
            ),
        ),
        FieldSpec(
            id="dob",
            label="Date of Birth",
            kind=FieldKind.DATE,
            help_text="Your date of birth as per official records",
            required=True,
            validation=ValidationRule(
                pattern=r"\d{4}-\d{2}-\d{2}",
                message="Please enter a valid date (YYYY-MM-DD)",
            ),
        ),
        FieldSpec(
            id="address",
            label="Current Address",
            kind=FieldKind.TEXT,
            help_text="Your complete residential address",
            required=True,
            validation=ValidationRule(pattern=r".{10,}", message="Please enter a complete address"),
        ),
        FieldSpec(
            id="idProof",
            label="Identity Proof",
            kind=FieldKind.FILE,
            help_text="Upload a government-issued ID proof (Aadhaar, PAN, etc.)",
            required=True,
        ),
    ),
)

CASE_STEP: Final[StepSpec] = StepSpec(
    key="case",
    title="Case Information",
    label="Case Details",
    fields=(
        FieldSpec(
            id="caseType",
            label="Type of Case",
            kind=FieldKind.SELECT,
            help_text="Select the category that best describes your legal matter",
            required=True,
            options=CASE_TYPES,
        ),
        FieldSpec(
            id=CASE_DESCRIPTION_FIELD,
            label="Case Description",
            kind=FieldKind.TEXT,
            help_text="Briefly describe your legal matter",
            required=True,
            validation=ValidationRule(pattern=r".{50,}", message="Please provide a detailed description"),
        ),
        FieldSpec(
            id="supportingDocs",
            label="Supporting Documents",
            kind=FieldKind.FILE,
            help_text="Upload any relevant documents supporting your case",
            required=True,
        ),
    ),
)

REVIEW_STEP: Final[StepSpec] = StepSpec(key="review", title="Review Your Information", label="Review")
STATUS_STEP: Final[StepSpec] = StepSpec(key="status", title="Application Status", label="Submit")

DATA_STEPS: Final[tuple[StepSpec, ...]] = (PERSONAL_STEP, CASE_STEP)
WIZARD_STEPS: Final[tuple[StepSpec, ...]] = (*DATA_STEPS, REVIEW_STEP, STATUS_STEP)

REVIEW_STEP_INDEX: Final[int] = WIZARD_STEPS.index(REVIEW_STEP)
STATUS_STEP_INDEX: Final[int] = WIZARD_STEPS.index(STATUS_STEP)

_FIELDS_BY_ID: Final[dict[str, FieldSpec]] = {spec.id: spec for step in DATA_STEPS for spec in step.fields}


def step_keys() -> tuple[str, ...]:
    """Return the registered step keys in canonical order."""

    return tuple(step.key for step in WIZARD_STEPS)


def step_labels(steps: tuple[StepSpec, ...] = WIZARD_STEPS) -> tuple[str, ...]:
    return tuple(step.label for step in steps)


def get_field_spec(field_id: str) -> FieldSpec:
    """Return the :class:`FieldSpec` registered for ``field_id``.

    Raises:
        UnknownFieldError: If no data step defines ``field_id``.
    """

    try:
        return _FIELDS_BY_ID[field_id]
    except KeyError:
        raise UnknownFieldError(field_id) from None


def is_known_field(field_id: str) -> bool:
    return field_id in _FIELDS_BY_ID


__all__ = [
    "ACCEPTED_ATTACHMENT_MIME_TYPES",
    "ACCEPTED_ATTACHMENT_TYPES",
    "CASE_DESCRIPTION_FIELD",
    "CASE_STEP",
    "CASE_TYPES",
    "DATA_STEPS",
    "PERSONAL_STEP",
    "REVIEW_STEP",
    "REVIEW_STEP_INDEX",
    "STATUS_STEP",
    "STATUS_STEP_INDEX",
    "WIZARD_STEPS",
    "get_field_spec",
    "is_known_field",
    "step_keys",
    "step_labels",
]
