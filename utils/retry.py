"""Retry helpers with exponential backoff for enrichment services."""

from __future__ import annotations

from typing import Any, Callable, Iterable, ParamSpec, TypeVar

import backoff
import requests
from openai import APIConnectionError, APITimeoutError, InternalServerError, RateLimitError

T = TypeVar("T")
P = ParamSpec("P")

# Transient OpenAI failures worth a second attempt.
OPENAI_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    APITimeoutError,
    APIConnectionError,
    RateLimitError,
    InternalServerError,
)

# Transport-level failures from plain HTTP collaborators.
HTTP_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    requests.ConnectionError,
    requests.Timeout,
)

ENRICHMENT_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = OPENAI_RETRY_EXCEPTIONS + HTTP_RETRY_EXCEPTIONS


def retry_with_backoff(
    *,
    exceptions: Iterable[type[Exception]] = ENRICHMENT_RETRY_EXCEPTIONS,
    max_tries: int = 2,
    max_time: float | None = None,
    giveup: Callable[[Exception], bool] | None = None,
    jitter: Any = backoff.full_jitter,
    logger: Any = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Return a decorator applying exponential backoff for ``exceptions``.

    Enrichment calls sit on an interactive path, so the defaults keep the
    number of attempts small; the last exception propagates to the caller.
    """

    exception_tuple: tuple[type[Exception], ...] = tuple(exceptions)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        return backoff.on_exception(
            backoff.expo,
            exception_tuple,
            max_tries=max_tries,
            max_time=max_time,
            jitter=jitter,
            giveup=giveup or (lambda _exc: False),
            logger=logger,
        )(func)

    return decorator


__all__ = [
    "ENRICHMENT_RETRY_EXCEPTIONS",
    "HTTP_RETRY_EXCEPTIONS",
    "OPENAI_RETRY_EXCEPTIONS",
    "retry_with_backoff",
]
