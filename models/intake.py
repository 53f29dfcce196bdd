"""Data model for the legal case intake form."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, ClassVar, Protocol, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldKind(StrEnum):
    """Input widget kinds a :class:`FieldSpec` can request."""

    TEXT = "text"
    SELECT = "select"
    DATE = "date"
    FILE = "file"


@dataclass(frozen=True)
class ValidationRule:
    """Shape constraint applied to a populated text value."""

    pattern: str
    message: str

    def matches(self, value: str) -> bool:
        return re.fullmatch(self.pattern, value, flags=re.DOTALL) is not None


@dataclass(frozen=True)
class FieldSpec:
    """Static description of a single form input."""

    id: str
    label: str
    kind: FieldKind
    help_text: str
    required: bool = False
    options: tuple[str, ...] = ()
    validation: ValidationRule | None = None


@dataclass(frozen=True)
class StepSpec:
    """A wizard stage and the ordered fields it collects."""

    key: str
    title: str
    label: str
    fields: tuple[FieldSpec, ...] = ()

    @property
    def field_ids(self) -> tuple[str, ...]:
        return tuple(spec.id for spec in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.id for spec in self.fields if spec.required)


class _UploadedFile(Protocol):
    name: str
    size: int
    type: str

    def getvalue(self) -> bytes: ...


@dataclass(frozen=True)
class AttachmentHandle:
    """Opaque handle for an uploaded document."""

    name: str
    size: int
    mime_type: str = "application/octet-stream"
    data: bytes = field(default=b"", repr=False, compare=False)

    @classmethod
    def from_upload(cls, uploaded: _UploadedFile) -> "AttachmentHandle":
        """Wrap a Streamlit ``UploadedFile``."""

        data = uploaded.getvalue()
        return cls(
            name=uploaded.name,
            size=getattr(uploaded, "size", len(data)),
            mime_type=getattr(uploaded, "type", None) or "application/octet-stream",
            data=data,
        )


FieldValue: TypeAlias = str | AttachmentHandle
FormValues: TypeAlias = dict[str, FieldValue]
ValidationErrors: TypeAlias = dict[str, str]


def _coerce_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return [str(value)]


class GuidanceResult(BaseModel):
    """Advisory output for a case description."""

    model_config = ConfigDict(frozen=True)

    UNAVAILABLE_MESSAGE: ClassVar[str] = (
        "AI analysis is currently unavailable. Please proceed with your application."
    )
    FAILURE_MESSAGE: ClassVar[str] = (
        "Unable to analyze the case at this moment. Please continue with your application."
    )

    explanation: str = ""
    requirements: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("explanation", mode="before")
    @classmethod
    def _coerce_explanation(cls, value: object) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("requirements", "suggestions", mode="before")
    @classmethod
    def _coerce_lists(cls, value: object) -> list[str]:
        return _coerce_str_list(value)

    @classmethod
    def unavailable(cls) -> "GuidanceResult":
        return cls(explanation=cls.UNAVAILABLE_MESSAGE)

    @classmethod
    def failed(cls) -> "GuidanceResult":
        return cls(explanation=cls.FAILURE_MESSAGE)


class DocumentValidationResult(BaseModel):
    """Advisory completeness check for a legal document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_valid: bool = Field(default=True, alias="isValid")
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("issues", "suggestions", mode="before")
    @classmethod
    def _coerce_lists(cls, value: object) -> list[str]:
        return _coerce_str_list(value)

    @classmethod
    def unavailable(cls) -> "DocumentValidationResult":
        return cls(is_valid=True, suggestions=["Document validation is currently unavailable."])

    @classmethod
    def failed(cls) -> "DocumentValidationResult":
        return cls(
            is_valid=False,
            issues=["Failed to validate document"],
            suggestions=["Please try again later or proceed with manual validation."],
        )


class TranslationResult(BaseModel):
    """Payload returned by the translation service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    translated_text: str = Field(alias="translatedText")
    source_language: str = Field(alias="sourceLanguage")
    target_language: str = Field(alias="targetLanguage")


class StatusCode(StrEnum):
    """Lifecycle of a submitted application."""

    PENDING = "pending"
    REVIEWING = "reviewing"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK: dict[StatusCode, int] = {
    StatusCode.PENDING: 0,
    StatusCode.REVIEWING: 1,
    StatusCode.APPROVED: 2,
    StatusCode.REJECTED: 2,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationStatus(BaseModel):
    """Processing status shown on the terminal wizard step."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    status: StatusCode = StatusCode.PENDING
    last_updated: datetime = Field(default_factory=_utcnow)
    comment: str | None = "Your application is being processed."

    def can_transition_to(self, target: StatusCode) -> bool:
        """Return ``True`` when ``target`` moves the status strictly forward."""

        return target.rank > self.status.rank

    def transition(self, target: StatusCode, *, comment: str | None = None) -> "ApplicationStatus":
        """Return a copy moved to ``target`` with a fresh timestamp.

        Raises:
            ValueError: If ``target`` would not move the status forward.
        """

        if not self.can_transition_to(target):
            raise ValueError(f"Cannot move application from {self.status.value} to {target.value}")
        return self.model_copy(
            update={
                "status": target,
                "last_updated": _utcnow(),
                "comment": comment if comment is not None else self.comment,
            }
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
