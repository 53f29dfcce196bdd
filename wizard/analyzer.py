"""Debounced AI guidance for the case description field.

The analyzer is an explicit state machine driven by two kinds of events:

* ``on_edit(text)`` whenever the description changes, and
* ``poll()`` on every rerun, which fires an elapsed timer and collects settled
  requests.

Requests run on an executor so the UI never blocks. Only the script thread
calls ``on_edit`` and ``poll``, so every state transition happens there and
worker threads only execute the client call, inside a copy of the caller's
logging context.
"""

from __future__ import annotations

import contextvars
import logging
import time
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Protocol

from config import DEFAULT_GUIDANCE_MIN_LENGTH
from models.intake import GuidanceResult

logger = logging.getLogger("legal_intake.analyzer")

DEFAULT_QUIET_PERIOD = 1.0


class GuidanceProvider(Protocol):
    def analyze_case_description(self, description: str) -> GuidanceResult: ...


class AnalyzerPhase(StrEnum):
    """Observable phase of the :class:`DebouncedAnalyzer`."""

    IDLE = "idle"
    ARMED = "armed"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True)
class ArmedTimer:
    """Pending quiet-period timer for a specific edit."""

    deadline: float
    text: str
    generation: int


@dataclass(frozen=True)
class GuidanceRequest:
    """Dispatched request; ``generation`` is the fencing token for its result."""

    generation: int
    text: str
    future: Future


class DebouncedAnalyzer:
    """Invoke the guidance client once per settled description value."""

    def __init__(
        self,
        client: GuidanceProvider,
        *,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        min_length: int = DEFAULT_GUIDANCE_MIN_LENGTH,
        executor: Executor | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if quiet_period < 0:
            raise ValueError("quiet_period must be >= 0")
        if min_length < 0:
            raise ValueError("min_length must be >= 0")
        self._client = client
        self.quiet_period = quiet_period
        self.min_length = min_length
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="guidance")
        self._clock = clock or time.monotonic
        self._generation = 0
        self._timer: ArmedTimer | None = None
        self._in_flight: list[GuidanceRequest] = []
        self._latest_dispatched: int | None = None
        self._result: GuidanceResult | None = None
        self._is_analyzing = False
        self._requests_issued = 0

    @property
    def phase(self) -> AnalyzerPhase:
        if self._timer is not None:
            return AnalyzerPhase.ARMED
        if self._in_flight:
            return AnalyzerPhase.IN_FLIGHT
        return AnalyzerPhase.IDLE

    @property
    def is_analyzing(self) -> bool:
        return self._is_analyzing

    @property
    def result(self) -> GuidanceResult | None:
        return self._result

    @property
    def requests_issued(self) -> int:
        return self._requests_issued

    @property
    def pending_deadline(self) -> float | None:
        return self._timer.deadline if self._timer is not None else None

    def on_edit(self, text: str | None) -> None:
        """Restart the quiet period for ``text``; short text disarms the timer."""

        self._generation += 1
        self._timer = None
        value = text or ""
        if len(value) < self.min_length:
            return
        self._timer = ArmedTimer(
            deadline=self._clock() + self.quiet_period,
            text=value,
            generation=self._generation,
        )

    def poll(self) -> bool:
        """Fire an elapsed timer and apply settled results.

        Returns:
            ``True`` when the stored guidance changed.
        """

        timer = self._timer
        if timer is not None and self._clock() >= timer.deadline:
            self._timer = None
            self._dispatch(timer)
        return self._collect()

    def cancel(self) -> None:
        """Drop the armed timer; in-flight requests settle but are ignored."""

        self._timer = None
        self._generation += 1

    def close(self) -> None:
        self.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def _dispatch(self, timer: ArmedTimer) -> None:
        logger.info("Requesting case guidance for %d characters", len(timer.text))
        try:
            context = contextvars.copy_context()
            future = self._executor.submit(context.run, self._client.analyze_case_description, timer.text)
        except RuntimeError:
            logger.warning("Guidance executor unavailable; using fallback guidance", exc_info=True)
            future = Future()
            future.set_result(GuidanceResult.failed())
        self._in_flight.append(GuidanceRequest(generation=timer.generation, text=timer.text, future=future))
        self._latest_dispatched = timer.generation
        self._requests_issued += 1
        self._is_analyzing = True

    def _collect(self) -> bool:
        changed = False
        still_running: list[GuidanceRequest] = []
        for request in self._in_flight:
            if not request.future.done():
                still_running.append(request)
                continue
            result = self._settle(request)
            if request.generation == self._latest_dispatched:
                self._is_analyzing = False
            if request.generation != self._generation:
                logger.debug("Discarding stale guidance for generation %d", request.generation)
                continue
            self._result = result
            changed = True
        self._in_flight = still_running
        return changed

    @staticmethod
    def _settle(request: GuidanceRequest) -> GuidanceResult:
        try:
            result = request.future.result()
        except (CancelledError, Exception):
            logger.warning("Guidance request failed; using fallback guidance", exc_info=True)
            return GuidanceResult.failed()
        if not isinstance(result, GuidanceResult):
            logger.warning("Guidance client returned %s; using fallback guidance", type(result).__name__)
            return GuidanceResult.failed()
        return result


__all__ = [
    "AnalyzerPhase",
    "ArmedTimer",
    "DEFAULT_QUIET_PERIOD",
    "DebouncedAnalyzer",
    "GuidanceProvider",
    "GuidanceRequest",
]
