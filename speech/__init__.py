"""Voice input: capability detection, recognizers, and the listening session."""

from .backends import Available, SpeechBackend, Unavailable, WhisperRecognizer, detect_speech_backend
from .capture import ListeningState, SpeechCapture

__all__ = [
    "Available",
    "ListeningState",
    "SpeechBackend",
    "SpeechCapture",
    "Unavailable",
    "WhisperRecognizer",
    "detect_speech_backend",
]
