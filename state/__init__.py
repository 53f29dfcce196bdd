"""Session state utilities."""

from .ensure_state import ensure_state, get_controller, get_speech, reset_state

__all__ = ["ensure_state", "get_controller", "get_speech", "reset_state"]
