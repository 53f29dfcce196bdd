"""Read-only summary of the collected application."""

from __future__ import annotations

from typing import Mapping, Sequence

import streamlit as st

from models.intake import AttachmentHandle, FieldKind, FieldSpec, FieldValue, StepSpec

NOT_PROVIDED = "Not provided"
NO_FILE = "No file uploaded"


def display_value(spec: FieldSpec, value: FieldValue | None) -> str:
    """Return the text shown for ``value`` on the review page."""

    if spec.kind is FieldKind.FILE:
        return value.name if isinstance(value, AttachmentHandle) else NO_FILE
    if isinstance(value, str) and value.strip():
        return value
    return NOT_PROVIDED


def review_rows(steps: Sequence[StepSpec], values: Mapping[str, FieldValue]) -> list[tuple[str, str, str]]:
    """Return ``(step title, field label, display text)`` rows for every field."""

    return [(step.title, spec.label, display_value(spec, values.get(spec.id))) for step in steps for spec in step.fields]


def render_review(steps: Sequence[StepSpec], values: Mapping[str, FieldValue]) -> None:
    current_title: str | None = None
    for title, label, text in review_rows(steps, values):
        if title != current_title:
            st.markdown(f"#### {title}")
            current_title = title
        st.markdown(f"**{label}:** {text}")


__all__ = ["NOT_PROVIDED", "NO_FILE", "display_value", "render_review", "review_rows"]
