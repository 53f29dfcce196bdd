"""Voice input controls: language choice, listen toggle, and microphone capture."""

from __future__ import annotations

import hashlib
import logging

import streamlit as st

from config.languages import SUPPORTED_LANGUAGES
from constants.keys import UIKeys
from speech import SpeechCapture

logger = logging.getLogger("legal_intake.speech")

_LANGUAGE_LABELS = {lang.code: lang.display_name for lang in SUPPORTED_LANGUAGES}


def _audio_digest(audio: bytes) -> str:
    return hashlib.sha1(audio, usedforsecurity=False).hexdigest()


def _on_language_change(speech: SpeechCapture) -> None:
    speech.set_language(st.session_state[UIKeys.LANGUAGE_SELECT])


def _on_listen_toggle(speech: SpeechCapture) -> None:
    if st.session_state[UIKeys.LISTEN_TOGGLE]:
        speech.start()
    else:
        speech.stop()


def render_speech_input(speech: SpeechCapture) -> None:
    """Render voice input; recognised text is forwarded by ``speech`` itself."""

    if not speech.available:
        st.caption(speech.unavailable_reason or "Voice input is unavailable.")
        return

    language_col, toggle_col = st.columns([3, 1])
    if st.session_state.get(UIKeys.LANGUAGE_SELECT) != speech.language.code:
        st.session_state[UIKeys.LANGUAGE_SELECT] = speech.language.code
    if st.session_state.get(UIKeys.LISTEN_TOGGLE) != speech.is_listening:
        st.session_state[UIKeys.LISTEN_TOGGLE] = speech.is_listening
    with language_col:
        st.selectbox(
            "Spoken language",
            list(_LANGUAGE_LABELS),
            format_func=_LANGUAGE_LABELS.__getitem__,
            key=UIKeys.LANGUAGE_SELECT,
            on_change=_on_language_change,
            args=(speech,),
        )
    with toggle_col:
        st.toggle(
            "Listen",
            disabled=speech.is_translating,
            key=UIKeys.LISTEN_TOGGLE,
            on_change=_on_listen_toggle,
            args=(speech,),
        )

    if not speech.is_listening:
        return
    recording = st.audio_input("Speak now", key=UIKeys.AUDIO_INPUT)
    if recording is None:
        return
    audio = recording.getvalue()
    digest = _audio_digest(audio)
    if st.session_state.get(UIKeys.LAST_AUDIO_DIGEST) == digest:
        return
    st.session_state[UIKeys.LAST_AUDIO_DIGEST] = digest
    with st.spinner("Translating..."):
        forwarded = speech.feed_audio(audio)
    if forwarded:
        st.caption(f"Heard: {forwarded}")
    elif not speech.is_listening:
        st.warning("Speech recognition error. Please try again.")


__all__ = ["render_speech_input"]
