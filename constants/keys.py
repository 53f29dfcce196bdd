class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    FIELD_PREFIX = "ui.field."
    LANGUAGE_SELECT = "ui.speech.language"
    AUDIO_INPUT = "ui.speech.audio"
    LAST_AUDIO_DIGEST = "ui.speech.last_audio_digest"
    NAV_PREVIOUS = "ui.nav.previous"
    NAV_NEXT = "ui.nav.next"
    NAV_SUBMIT = "ui.nav.submit"
    LISTEN_TOGGLE = "ui.speech.toggle"

    @classmethod
    def field(cls, field_id: str) -> str:
        return f"{cls.FIELD_PREFIX}{field_id}"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    SESSION_ID = "session_id"
    ENRICHMENT_CONFIG = "enrichment_config"
    WIZARD_SETTINGS = "wizard_settings"
    CONTROLLER = "wizard_controller"
    SPEECH = "speech_capture"
