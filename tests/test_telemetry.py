"""Tests for telemetry bootstrap helpers."""

from __future__ import annotations

from opentelemetry import trace

from utils import telemetry


def test_setup_tracing_skips_without_console_exporter(monkeypatch) -> None:
    """No exporter selection means tracing is not initialised."""

    telemetry._INITIALISED = False
    calls: list[object] = []
    monkeypatch.setattr(trace, "set_tracer_provider", calls.append)

    assert telemetry.setup_tracing(force=True, environ={}) is False

    assert calls == []
    assert telemetry._INITIALISED is False


def test_setup_tracing_installs_console_provider(monkeypatch) -> None:
    telemetry._INITIALISED = False
    calls: list[object] = []
    monkeypatch.setattr(trace, "set_tracer_provider", calls.append)

    installed = telemetry.setup_tracing(
        force=True,
        environ={"OTEL_TRACES_EXPORTER": "console", "OTEL_SERVICE_NAME": "intake-test"},
    )

    assert installed is True
    assert len(calls) == 1
    assert calls[0].resource.attributes["service.name"] == "intake-test"
    assert telemetry.setup_tracing(environ={"OTEL_TRACES_EXPORTER": "console"}) is False
    telemetry._INITIALISED = False


def test_invalid_sampler_ratio_falls_back() -> None:
    assert telemetry._coerce_ratio("abc", default=1.0) == 1.0
    assert telemetry._coerce_ratio("2.5", default=1.0) == 1.0
    assert telemetry._coerce_ratio("0.25", default=1.0) == 0.25
