"""Per-step validation of form values."""

from __future__ import annotations

import logging
from typing import Mapping

from config import WizardSettings
from models.intake import AttachmentHandle, FieldKind, FieldSpec, StepSpec, ValidationErrors
from wizard.step_registry import ACCEPTED_ATTACHMENT_MIME_TYPES, ACCEPTED_ATTACHMENT_TYPES

logger = logging.getLogger("legal_intake.validation")

REQUIRED_MESSAGE = "This field is required"
OPTION_MESSAGE = "Please select one of the listed options"
ATTACHMENT_MESSAGE = "Please upload a file"
ATTACHMENT_TYPE_MESSAGE = "Please upload a PDF, Word document or image"


def is_value_present(value: object | None) -> bool:
    """Return ``True`` when ``value`` should count as populated."""

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, AttachmentHandle):
        return True
    return bool(value)


def is_accepted_attachment(handle: AttachmentHandle) -> bool:
    """Return ``True`` for PDF, Word and image uploads.

    The file extension decides when there is one; the MIME type is only
    consulted for extensionless names.
    """

    _stem, dot, extension = handle.name.rpartition(".")
    if dot:
        return extension.lower() in ACCEPTED_ATTACHMENT_TYPES
    mime_type = handle.mime_type.lower()
    return mime_type.startswith("image/") or mime_type in ACCEPTED_ATTACHMENT_MIME_TYPES


def _attachment_limit_message(max_bytes: int) -> str:
    return f"File size should not exceed {max_bytes // (1024 * 1024)}MB"


def validate_field(
    spec: FieldSpec,
    value: object | None,
    *,
    max_attachment_bytes: int = WizardSettings.max_attachment_bytes,
) -> str | None:
    """Return the error message for ``value`` or ``None`` when it is acceptable.

    Presence is checked first; shape rules only run on populated values, so a
    field never yields more than one message.
    """

    if not is_value_present(value):
        return REQUIRED_MESSAGE if spec.required else None

    if spec.kind is FieldKind.FILE:
        if not isinstance(value, AttachmentHandle):
            return ATTACHMENT_MESSAGE
        if not is_accepted_attachment(value):
            return ATTACHMENT_TYPE_MESSAGE
        if value.size > max_attachment_bytes:
            return _attachment_limit_message(max_attachment_bytes)
        return None

    if not isinstance(value, str):
        return spec.validation.message if spec.validation else REQUIRED_MESSAGE
    if spec.kind is FieldKind.SELECT and spec.options and value not in spec.options:
        return OPTION_MESSAGE
    if spec.validation is not None and not spec.validation.matches(value):
        return spec.validation.message
    return None


def validate_step(
    step: StepSpec,
    values: Mapping[str, object],
    *,
    max_attachment_bytes: int = WizardSettings.max_attachment_bytes,
) -> ValidationErrors:
    """Validate only the fields belonging to ``step``.

    Returns:
        Mapping of failing field ids to messages; empty when the step passes.
    """

    errors: ValidationErrors = {}
    for spec in step.fields:
        message = validate_field(spec, values.get(spec.id), max_attachment_bytes=max_attachment_bytes)
        if message is not None:
            errors[spec.id] = message
    if errors:
        logger.info("Step '%s' failed validation for fields: %s", step.key, ", ".join(errors))
    return errors


__all__ = [
    "ATTACHMENT_MESSAGE",
    "ATTACHMENT_TYPE_MESSAGE",
    "OPTION_MESSAGE",
    "REQUIRED_MESSAGE",
    "is_accepted_attachment",
    "is_value_present",
    "validate_field",
    "validate_step",
]
