"""Bounded exponential backoff for transient network failures."""

import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from document_analyzer.cancellation import CancellationToken
from document_analyzer.config.settings import Settings
from document_analyzer.exceptions import NetworkError
from document_analyzer.logging.logger import Log

T = TypeVar("T")


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, NetworkError) and exc.is_transient


class RetryPolicy:
    """Retries a call on transport failures and 429/5xx responses only.

    Any other error, including non-transient HTTP statuses, propagates on the
    first attempt.
    """

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        initial_backoff_seconds: float = 0.5,
        max_backoff_seconds: float = 8.0,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._wait = wait_exponential(
            multiplier=initial_backoff_seconds, max=max_backoff_seconds
        )
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.retry_max_attempts,
            initial_backoff_seconds=settings.retry_initial_backoff_seconds,
            max_backoff_seconds=settings.retry_max_backoff_seconds,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def call(
        self,
        operation: str,
        func: Callable[[], T],
        cancel_token: CancellationToken | None = None,
    ) -> T:
        """Invoke `func`, retrying transient NetworkErrors with backoff.

        With a cancel token, the backoff wait is interruptible and no further
        attempt starts once the run is cancelled.
        """
        for attempt in self._retrying(operation, cancel_token):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            with attempt:
                return func()
        raise RuntimeError("Retry loop failed to return a result")

    def _retrying(
        self,
        operation: str,
        cancel_token: CancellationToken | None,
    ) -> Retrying:
        def _log_retry(state: RetryCallState) -> None:
            exc = state.outcome.exception() if state.outcome else None
            Log.warning(
                f"{operation} failed (attempt {state.attempt_number}/"
                f"{self._max_attempts}), retrying: {exc}"
            )

        sleep = self._sleep
        if sleep is None:
            sleep = cancel_token.sleep if cancel_token is not None else time.sleep
        return Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception(_is_transient),
            before_sleep=_log_retry,
            reraise=True,
            sleep=sleep,
        )
