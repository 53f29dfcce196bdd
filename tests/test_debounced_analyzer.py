from __future__ import annotations

from models.intake import GuidanceResult
from utils.logging_context import current_context, set_session_id
from wizard.analyzer import AnalyzerPhase, DebouncedAnalyzer

LONG_TEXT = "My landlord has refused to return my security deposit after I moved out."


class RecordingClient:
    def __init__(self, result: GuidanceResult | None = None, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.result = result or GuidanceResult(explanation="Tenant dispute", suggestions=["Keep receipts"])
        self.error = error

    def analyze_case_description(self, description: str) -> GuidanceResult:
        self.calls.append(description)
        if self.error is not None:
            raise self.error
        return self.result


def _analyzer(client, manual_executor, fake_clock, **kwargs) -> DebouncedAnalyzer:
    return DebouncedAnalyzer(client, executor=manual_executor, clock=fake_clock, **kwargs)


def test_short_text_never_arms(manual_executor, fake_clock) -> None:
    client = RecordingClient()
    analyzer = _analyzer(client, manual_executor, fake_clock)

    analyzer.on_edit("x" * 49)
    fake_clock.advance(5)
    assert analyzer.poll() is False

    assert analyzer.phase is AnalyzerPhase.IDLE
    assert analyzer.requests_issued == 0
    assert manual_executor.calls == []


def test_threshold_length_arms_timer(manual_executor, fake_clock) -> None:
    analyzer = _analyzer(RecordingClient(), manual_executor, fake_clock)

    analyzer.on_edit("x" * 50)

    assert analyzer.phase is AnalyzerPhase.ARMED
    assert analyzer.pending_deadline == 1.0


def test_rapid_edits_issue_single_request(manual_executor, fake_clock) -> None:
    client = RecordingClient()
    analyzer = _analyzer(client, manual_executor, fake_clock)

    for suffix in ("a", "ab", "abc"):
        analyzer.on_edit(LONG_TEXT + suffix)
        fake_clock.advance(0.4)
        analyzer.poll()
    assert analyzer.requests_issued == 0

    fake_clock.advance(1.0)
    analyzer.poll()
    assert analyzer.requests_issued == 1
    assert analyzer.is_analyzing is True
    assert analyzer.phase is AnalyzerPhase.IN_FLIGHT

    manual_executor.run()
    assert analyzer.poll() is True
    assert client.calls == [LONG_TEXT + "abc"]
    assert analyzer.result == client.result
    assert analyzer.is_analyzing is False
    assert analyzer.phase is AnalyzerPhase.IDLE


def test_client_failure_yields_fallback_and_clears_busy_flag(manual_executor, fake_clock) -> None:
    client = RecordingClient(error=RuntimeError("boom"))
    analyzer = _analyzer(client, manual_executor, fake_clock)

    analyzer.on_edit(LONG_TEXT)
    fake_clock.advance(1.0)
    analyzer.poll()
    manual_executor.run()

    assert analyzer.poll() is True
    assert analyzer.result == GuidanceResult.failed()
    assert analyzer.is_analyzing is False


def test_stale_result_is_discarded(manual_executor, fake_clock) -> None:
    client = RecordingClient()
    analyzer = _analyzer(client, manual_executor, fake_clock)

    analyzer.on_edit(LONG_TEXT)
    fake_clock.advance(1.0)
    analyzer.poll()
    analyzer.on_edit(LONG_TEXT + " More detail.")
    manual_executor.run(0)

    assert analyzer.poll() is False
    assert analyzer.result is None
    assert analyzer.is_analyzing is False

    fake_clock.advance(1.0)
    analyzer.poll()
    manual_executor.run(1)
    assert analyzer.poll() is True
    assert client.calls[-1] == LONG_TEXT + " More detail."
    assert analyzer.requests_issued == 2


def test_edit_below_threshold_cancels_pending_timer(manual_executor, fake_clock) -> None:
    analyzer = _analyzer(RecordingClient(), manual_executor, fake_clock)

    analyzer.on_edit(LONG_TEXT)
    analyzer.on_edit("short")
    fake_clock.advance(2.0)
    analyzer.poll()

    assert analyzer.requests_issued == 0
    assert analyzer.phase is AnalyzerPhase.IDLE


def test_non_guidance_value_is_replaced_by_fallback(manual_executor, fake_clock) -> None:
    client = RecordingClient()
    client.result = "not a result"  # type: ignore[assignment]
    analyzer = _analyzer(client, manual_executor, fake_clock)

    analyzer.on_edit(LONG_TEXT)
    fake_clock.advance(1.0)
    analyzer.poll()
    manual_executor.run()
    analyzer.poll()

    assert analyzer.result == GuidanceResult.failed()


def test_close_cancels_owned_executor(fake_clock) -> None:
    analyzer = DebouncedAnalyzer(RecordingClient(), clock=fake_clock)
    analyzer.on_edit(LONG_TEXT)

    analyzer.close()

    assert analyzer.phase is AnalyzerPhase.IDLE
    assert analyzer.poll() is False


def test_worker_sees_callers_logging_context(manual_executor, fake_clock) -> None:
    seen: list[str] = []

    class ContextClient:
        def analyze_case_description(self, description: str) -> GuidanceResult:
            seen.append(current_context()["session_id"])
            return GuidanceResult(explanation="ok")

    set_session_id("abc123")
    analyzer = _analyzer(ContextClient(), manual_executor, fake_clock)
    analyzer.on_edit(LONG_TEXT)
    fake_clock.advance(1.0)
    analyzer.poll()
    set_session_id("other")
    manual_executor.run()

    assert seen == ["abc123"]
