from __future__ import annotations

import streamlit as st

from constants.keys import StateKeys, UIKeys
from speech import SpeechCapture
from state import ensure_state, get_controller, reset_state
from wizard.controller import WizardController


def test_ensure_state_builds_services_once() -> None:
    ensure_state()
    controller = st.session_state[StateKeys.CONTROLLER]
    speech = st.session_state[StateKeys.SPEECH]

    ensure_state()

    assert isinstance(controller, WizardController)
    assert isinstance(speech, SpeechCapture)
    assert st.session_state[StateKeys.CONTROLLER] is controller
    assert speech.available is False
    assert len(st.session_state[StateKeys.SESSION_ID]) == 8


def test_ensure_state_stores_only_session_entries() -> None:
    ensure_state()

    assert set(st.session_state) == {
        StateKeys.SESSION_ID,
        StateKeys.ENRICHMENT_CONFIG,
        StateKeys.WIZARD_SETTINGS,
        StateKeys.CONTROLLER,
        StateKeys.SPEECH,
        UIKeys.LAST_AUDIO_DIGEST,
    }
    st.session_state[StateKeys.CONTROLLER].close()


def test_reset_state_starts_fresh_application() -> None:
    controller = get_controller()
    controller.set_field("name", "Asha Devi")

    reset_state()

    fresh = get_controller()
    assert fresh is not controller
    assert fresh.get_field("name") is None
    controller.close()
