from pathlib import Path
import sys
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


_ENRICHMENT_ENV_VARS = (
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_DEPLOYMENT",
    "AZURE_OPENAI_API_VERSION",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OPENAI_TRANSCRIPTION_MODEL",
    "TRANSLATION_API_URL",
    "TRANSLATION_API_KEY",
    "BHASHINI_API_KEY",
    "ENRICHMENT_REQUEST_TIMEOUT",
    "GUIDANCE_DEBOUNCE_MS",
    "GUIDANCE_MIN_LENGTH",
    "MAX_ATTACHMENT_MB",
    "OTEL_TRACES_EXPORTER",
)


@pytest.fixture(autouse=True)
def _clear_enrichment_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials from leaking into tests."""

    for name in _ENRICHMENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


class ManualExecutor:
    """Executor whose futures settle only when the test says so."""

    def __init__(self) -> None:
        self.calls: list[tuple[Callable[..., Any], tuple[Any, ...]]] = []
        self.futures: list[Future] = []

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        future: Future = Future()
        self.calls.append((fn, args))
        self.futures.append(future)
        return future

    def run(self, index: int = -1) -> None:
        fn, args = self.calls[index]
        future = self.futures[index]
        try:
            future.set_result(fn(*args))
        except Exception as exc:  # noqa: BLE001 - mirrors executor semantics
            future.set_exception(exc)

    def run_all(self) -> None:
        for index, future in enumerate(self.futures):
            if not future.done():
                self.run(index)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        if cancel_futures:
            for future in self.futures:
                future.cancel()


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, delta: float) -> float:
        self.now += delta
        return self.now


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
