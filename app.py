# app.py: Legal Filing Assistant (Streamlit entrypoint)
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
for candidate in (APP_ROOT, APP_ROOT.parent):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from config import LOG_LEVEL  # noqa: E402
from components.form_section import render_form_section  # noqa: E402
from components.progress_tracker import render_progress_tracker  # noqa: E402
from components.review import render_review  # noqa: E402
from components.speech_input import render_speech_input  # noqa: E402
from components.status_tracker import render_status_tracker  # noqa: E402
from constants.keys import UIKeys  # noqa: E402
from state import ensure_state, get_controller, get_speech, reset_state  # noqa: E402
from utils.logging_context import configure_logging  # noqa: E402
from utils.telemetry import setup_tracing  # noqa: E402
from wizard.controller import WizardController  # noqa: E402
from wizard.step_registry import DATA_STEPS, REVIEW_STEP_INDEX, step_labels  # noqa: E402

APP_VERSION = "1.0.0"

configure_logging(level=LOG_LEVEL)
setup_tracing()

st.set_page_config(
    page_title="Legal Filing Assistant",
    page_icon="⚖️",
    layout="centered",
)

ensure_state()
st.session_state.setdefault("app_version", APP_VERSION)


def render_navigation(controller: WizardController) -> None:
    """Render Previous/Next or Submit for the active step."""

    previous_col, _spacer, next_col = st.columns([1, 2, 1])
    with previous_col:
        if st.button("Previous", key=UIKeys.NAV_PREVIOUS, disabled=controller.current_step == 0):
            controller.retreat()
            st.rerun()
    with next_col:
        if controller.current_step == REVIEW_STEP_INDEX:
            if st.button("Submit", key=UIKeys.NAV_SUBMIT, type="primary"):
                if controller.submit():
                    st.rerun()
        elif st.button("Next", key=UIKeys.NAV_NEXT, type="primary"):
            if controller.advance():
                st.rerun()


def render_active_step(controller: WizardController) -> None:
    step = controller.active_step
    if controller.is_terminal:
        st.subheader(step.title)
        render_status_tracker(controller.state.status)
        if st.button("Start a new application"):
            reset_state()
            st.rerun()
        return
    if controller.current_step == REVIEW_STEP_INDEX:
        st.subheader(step.title)
        render_review(DATA_STEPS, controller.values)
    else:
        with st.expander("Voice input", expanded=get_speech().is_listening):
            render_speech_input(get_speech())
        render_form_section(controller, step)
    render_navigation(controller)


def main() -> None:
    controller = get_controller()
    controller.poll()
    st.title("⚖️ Legal Filing Assistant")
    render_progress_tracker(controller.current_step, step_labels(controller.steps))
    render_active_step(controller)


main()
