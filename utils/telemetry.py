"""Telemetry bootstrap helpers for OpenTelemetry tracing."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, Sampler, TraceIdRatioBased

LOGGER = logging.getLogger("legal_intake.telemetry")

_INITIALISED = False


def _coerce_ratio(raw: str, *, default: float) -> float:
    """Convert ``raw`` to a float ratio within [0.0, 1.0]."""

    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Invalid OTEL_TRACES_SAMPLER_ARG '%s'; using default %.2f", raw, default)
        return default
    return max(0.0, min(1.0, value))


def _build_sampler(environ: Mapping[str, str]) -> Sampler:
    ratio = _coerce_ratio(environ.get("OTEL_TRACES_SAMPLER_ARG", "").strip(), default=1.0)
    return ParentBased(TraceIdRatioBased(ratio))


def setup_tracing(*, force: bool = False, environ: Mapping[str, str] | None = None) -> bool:
    """Install a console-exporting tracer provider when requested.

    Tracing stays a no-op unless ``OTEL_TRACES_EXPORTER=console``; spans
    created through :func:`opentelemetry.trace.get_tracer` are then cheap
    non-recording spans.

    Returns:
        ``True`` when a provider was installed by this call.
    """

    global _INITIALISED
    if _INITIALISED and not force:
        return False

    env = os.environ if environ is None else environ
    exporter_name = env.get("OTEL_TRACES_EXPORTER", "").strip().lower()
    if exporter_name != "console":
        LOGGER.debug("No console exporter requested; skipping telemetry bootstrap")
        return False

    service_name = env.get("OTEL_SERVICE_NAME", "legal-filing-assistant")
    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name}),
        sampler=_build_sampler(env),
    )
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    _INITIALISED = True
    LOGGER.info("OpenTelemetry tracing initialised for service '%s'", service_name)
    return True


__all__ = ["setup_tracing"]
