"""Form widgets for the data steps and the live guidance panel."""

from __future__ import annotations

from datetime import date

import streamlit as st

from constants.keys import UIKeys
from models.intake import AttachmentHandle, FieldKind, FieldSpec, FieldValue, GuidanceResult, StepSpec
from wizard.controller import WizardController
from wizard.step_registry import ACCEPTED_ATTACHMENT_TYPES, CASE_DESCRIPTION_FIELD

GUIDANCE_REFRESH_SECONDS = 0.5
_MIN_BIRTH_DATE = date(1900, 1, 1)


def _as_text(value: FieldValue | None) -> str:
    """Return ``value`` normalised as a string."""

    if value is None or isinstance(value, AttachmentHandle):
        return ""
    return value


def _as_date(value: FieldValue | None) -> date | None:
    text = _as_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _field_label(spec: FieldSpec) -> str:
    return f"{spec.label} *" if spec.required else spec.label


def _sync_widget_state(key: str, value: object) -> None:
    """Mirror the controller value into the widget so transcript edits show up."""

    if st.session_state.get(key) != value:
        st.session_state[key] = value


def _widget_value(spec: FieldSpec, raw: object) -> FieldValue:
    """Convert a widget's session-state value into a form value."""

    if spec.kind is FieldKind.FILE:
        return AttachmentHandle.from_upload(raw) if raw is not None else ""
    if spec.kind is FieldKind.DATE:
        return raw.isoformat() if isinstance(raw, date) else ""
    return raw if isinstance(raw, str) else ""


def _push_to_controller(controller: WizardController, spec: FieldSpec) -> None:
    value = _widget_value(spec, st.session_state.get(UIKeys.field(spec.id)))
    if value != (controller.get_field(spec.id) or ""):
        controller.set_field(spec.id, value)


def _render_widget(controller: WizardController, spec: FieldSpec) -> None:
    key = UIKeys.field(spec.id)
    label = _field_label(spec)
    current = controller.get_field(spec.id)
    common = {"key": key, "help": spec.help_text, "on_change": _push_to_controller, "args": (controller, spec)}
    if spec.kind is FieldKind.FILE:
        st.file_uploader(label, type=list(ACCEPTED_ATTACHMENT_TYPES), **common)
        if isinstance(current, AttachmentHandle):
            st.caption(f"Uploaded: {current.name}")
        return
    if spec.kind is FieldKind.SELECT:
        text = _as_text(current)
        _sync_widget_state(key, text if text in spec.options else None)
        st.selectbox(label, list(spec.options), placeholder="Select...", **common)
        return
    if spec.kind is FieldKind.DATE:
        _sync_widget_state(key, _as_date(current))
        st.date_input(label, min_value=_MIN_BIRTH_DATE, max_value=date.today(), **common)
        return
    _sync_widget_state(key, _as_text(current))
    if spec.id == CASE_DESCRIPTION_FIELD:
        st.text_area(label, height=180, **common)
    else:
        st.text_input(label, **common)


def render_field(controller: WizardController, spec: FieldSpec) -> None:
    """Render one field bound to ``controller`` and show its error."""

    _render_widget(controller, spec)
    error = controller.errors.get(spec.id)
    if error:
        st.error(error)


def render_guidance(guidance: GuidanceResult) -> None:
    if guidance.explanation:
        st.markdown(guidance.explanation)
    if guidance.requirements:
        st.markdown("**Requirements**")
        st.markdown("\n".join(f"- {item}" for item in guidance.requirements))
    if guidance.suggestions:
        st.markdown("**Suggestions**")
        st.markdown("\n".join(f"- {item}" for item in guidance.suggestions))


def render_guidance_panel(controller: WizardController) -> None:
    """Auto-refreshing panel that drives the analyzer and shows its guidance."""

    @st.fragment(run_every=GUIDANCE_REFRESH_SECONDS)
    def _panel() -> None:
        controller.poll()
        state = controller.state
        if state.is_analyzing:
            st.info("Analyzing your case...")
        guidance = controller.visible_guidance
        if guidance is None:
            return
        with st.container(border=True):
            st.markdown("#### AI Legal Guidance")
            render_guidance(guidance)

    _panel()


def render_form_section(controller: WizardController, step: StepSpec) -> None:
    """Render every field of ``step``; the case step also gets the guidance panel."""

    st.subheader(step.title)
    for spec in step.fields:
        render_field(controller, spec)
    if CASE_DESCRIPTION_FIELD in step.field_ids:
        render_guidance_panel(controller)


__all__ = [
    "GUIDANCE_REFRESH_SECONDS",
    "render_field",
    "render_form_section",
    "render_guidance",
    "render_guidance_panel",
]
