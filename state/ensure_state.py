"""Helpers for initializing Streamlit session state."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

import streamlit as st

from config import EnrichmentConfig, WizardSettings, load_enrichment_config, load_wizard_settings
from constants.keys import StateKeys, UIKeys
from integrations.translation import TranslationClient
from llm.guidance import GuidanceClient
from openai_utils import create_client
from speech import SpeechCapture, detect_speech_backend
from utils.logging_context import set_session_id
from wizard.analyzer import DebouncedAnalyzer
from wizard.controller import WizardController

logger = logging.getLogger("legal_intake.state")


_DEFAULT_STATE_FACTORIES: Mapping[str, Callable[[], Any]] = MappingProxyType(
    {
        StateKeys.SESSION_ID: lambda: uuid.uuid4().hex[:8],
        UIKeys.LAST_AUDIO_DIGEST: lambda: "",
    }
)


def ensure_state() -> None:
    """Initialize ``st.session_state`` with the wizard and its collaborators.

    Existing keys are preserved so reruns keep the user's progress.
    """

    for key, factory in _DEFAULT_STATE_FACTORIES.items():
        if key not in st.session_state:
            st.session_state[key] = factory()
    set_session_id(st.session_state[StateKeys.SESSION_ID])

    config = st.session_state.get(StateKeys.ENRICHMENT_CONFIG)
    if not isinstance(config, EnrichmentConfig):
        config = load_enrichment_config()
        st.session_state[StateKeys.ENRICHMENT_CONFIG] = config
    settings = st.session_state.get(StateKeys.WIZARD_SETTINGS)
    if not isinstance(settings, WizardSettings):
        settings = load_wizard_settings()
        st.session_state[StateKeys.WIZARD_SETTINGS] = settings

    if not isinstance(st.session_state.get(StateKeys.CONTROLLER), WizardController):
        _build_services(config, settings)


def _build_services(config: EnrichmentConfig, settings: WizardSettings) -> None:
    openai_client = create_client(config)
    guidance = GuidanceClient(config, client=openai_client)
    translator = TranslationClient(config)
    analyzer = DebouncedAnalyzer(
        guidance,
        quiet_period=settings.debounce_seconds,
        min_length=settings.guidance_min_length,
    )
    controller = WizardController(analyzer=analyzer, settings=settings)
    backend = detect_speech_backend(config, client=openai_client)
    speech = SpeechCapture(backend, translator, controller.apply_transcript)
    controller.attach_speech(speech)

    st.session_state[StateKeys.CONTROLLER] = controller
    st.session_state[StateKeys.SPEECH] = speech
    logger.info(
        "Wizard session ready (provider=%s, translation=%s, speech=%s)",
        config.provider,
        "on" if translator.configured else "off",
        "on" if speech.available else "off",
    )


def get_controller() -> WizardController:
    ensure_state()
    return st.session_state[StateKeys.CONTROLLER]


def get_speech() -> SpeechCapture:
    ensure_state()
    return st.session_state[StateKeys.SPEECH]


def reset_state() -> None:
    """Close the current wizard and start a fresh application."""

    controller = st.session_state.get(StateKeys.CONTROLLER)
    if isinstance(controller, WizardController):
        controller.close()
    for key in list(st.session_state.keys()):
        if key in (StateKeys.ENRICHMENT_CONFIG, StateKeys.WIZARD_SETTINGS):
            continue
        del st.session_state[key]
    ensure_state()
