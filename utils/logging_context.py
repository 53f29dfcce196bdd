"""Logging context for wizard sessions and masking of applicant identifiers."""

from __future__ import annotations

import contextvars
import logging
import os
import re
from contextlib import contextmanager
from typing import Iterator

_DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [session=%(session_id)s step=%(wizard_step)s "
    "service=%(service)s] %(name)s: %(message)s"
)

# Aadhaar numbers are 12 digits, often grouped in fours; PAN is AAAAA9999A.
_AADHAAR_PATTERN = re.compile(r"\b\d{4}[ -]?\d{4}[ -]?\d{4}\b")
_PAN_PATTERN = re.compile(r"\b[A-Z]{5}\d{4}[A-Z]\b")
_SECRET_ENV_VARS = ("OPENAI_API_KEY", "AZURE_OPENAI_API_KEY", "TRANSLATION_API_KEY", "BHASHINI_API_KEY")

_session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("session_id", default="-")
_wizard_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("wizard_step", default="-")
_service_var: contextvars.ContextVar[str] = contextvars.ContextVar("service", default="-")
_DEFAULT_RECORD_FACTORY = logging.getLogRecordFactory()
_RECORD_FACTORY_INSTALLED = False


def redact_identifiers(text: str) -> str:
    """Mask Aadhaar and PAN numbers and configured API keys in ``text``."""

    for name in _SECRET_ENV_VARS:
        secret = os.getenv(name)
        if secret:
            text = text.replace(secret, "[redacted]")
    text = _AADHAAR_PATTERN.sub("[aadhaar]", text)
    return _PAN_PATTERN.sub("[pan]", text)


class RedactingFormatter(logging.Formatter):
    """Formatter whose output never contains applicant identifiers or API keys."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_identifiers(super().format(record))


def _apply_context(record: logging.LogRecord) -> None:
    record.session_id = _session_id_var.get("-")
    record.wizard_step = _wizard_step_var.get("-")
    record.service = _service_var.get("-")


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _apply_context(record)
        return True


def _coerce(value: str | None) -> str:
    if value is None:
        return "-"
    stripped = value.strip()
    return stripped or "-"


def configure_logging(*, level: int | str = logging.INFO) -> None:
    """Format root log output with session context and masked identifiers."""

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level)
    else:
        root.setLevel(level)
    for handler in root.handlers:
        if not isinstance(handler.formatter, RedactingFormatter):
            handler.setFormatter(RedactingFormatter(_DEFAULT_LOG_FORMAT))
    if not any(isinstance(flt, _ContextFilter) for flt in root.filters):
        root.addFilter(_ContextFilter())
    global _RECORD_FACTORY_INSTALLED
    if not _RECORD_FACTORY_INSTALLED:
        default_factory = _DEFAULT_RECORD_FACTORY

        def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
            record = default_factory(*args, **kwargs)
            _apply_context(record)
            return record

        logging.setLogRecordFactory(_record_factory)
        _RECORD_FACTORY_INSTALLED = True


def set_session_id(session_id: str | None) -> None:
    _session_id_var.set(_coerce(session_id))


def set_wizard_step(step: str | None) -> None:
    """Bind the active wizard step to the logging context."""

    _wizard_step_var.set(_coerce(step))


def current_context() -> dict[str, str]:
    return {
        "session_id": _session_id_var.get("-"),
        "wizard_step": _wizard_step_var.get("-"),
        "service": _service_var.get("-"),
    }


@contextmanager
def log_context(*, wizard_step: str | None = None, service: str | None = None) -> Iterator[None]:
    """Temporarily bind the wizard step or the calling service."""

    tokens: list[tuple[contextvars.ContextVar[str], contextvars.Token[str]]] = []
    if wizard_step is not None:
        tokens.append((_wizard_step_var, _wizard_step_var.set(_coerce(wizard_step))))
    if service is not None:
        tokens.append((_service_var, _service_var.set(_coerce(service))))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = [
    "RedactingFormatter",
    "configure_logging",
    "current_context",
    "log_context",
    "redact_identifiers",
    "set_session_id",
    "set_wizard_step",
]
