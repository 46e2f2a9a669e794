from unittest.mock import MagicMock

import pytest

from document_analyzer.cancellation import CancellationToken
from document_analyzer.config.settings import Settings
from document_analyzer.exceptions import (
    MalformedResponseError,
    NetworkError,
    PipelineCancelledError,
)
from document_analyzer.retry import RetryPolicy


class TestRetryPolicy:
    def test_returns_result_without_retry(self) -> None:
        sleep = MagicMock()
        func = MagicMock(return_value="ok")

        assert RetryPolicy(sleep=sleep).call("op", func) == "ok"
        func.assert_called_once()
        sleep.assert_not_called()

    def test_retries_transient_errors_with_growing_backoff(self) -> None:
        sleep = MagicMock()
        func = MagicMock(
            side_effect=[NetworkError("down"), NetworkError("busy", status_code=503), "ok"]
        )
        policy = RetryPolicy(
            max_attempts=3,
            initial_backoff_seconds=0.5,
            max_backoff_seconds=8.0,
            sleep=sleep,
        )

        assert policy.call("op", func) == "ok"
        assert func.call_count == 3
        waits = [c.args[0] for c in sleep.call_args_list]
        assert len(waits) == 2
        assert waits[0] <= waits[1] <= 8.0

    def test_gives_up_after_max_attempts(self) -> None:
        sleep = MagicMock()
        func = MagicMock(side_effect=NetworkError("busy", status_code=429))

        with pytest.raises(NetworkError, match="busy"):
            RetryPolicy(max_attempts=3, sleep=sleep).call("op", func)

        assert func.call_count == 3
        assert sleep.call_count == 2

    def test_non_transient_status_is_not_retried(self) -> None:
        func = MagicMock(side_effect=NetworkError("denied", status_code=401))

        with pytest.raises(NetworkError):
            RetryPolicy(max_attempts=3, sleep=MagicMock()).call("op", func)
        func.assert_called_once()

    def test_other_errors_are_not_retried(self) -> None:
        func = MagicMock(side_effect=MalformedResponseError("bad"))

        with pytest.raises(MalformedResponseError):
            RetryPolicy(max_attempts=3, sleep=MagicMock()).call("op", func)
        func.assert_called_once()

    def test_backoff_is_capped(self) -> None:
        sleep = MagicMock()
        func = MagicMock(side_effect=NetworkError("down"))
        policy = RetryPolicy(
            max_attempts=6,
            initial_backoff_seconds=1.0,
            max_backoff_seconds=2.0,
            sleep=sleep,
        )

        with pytest.raises(NetworkError):
            policy.call("op", func)
        assert all(c.args[0] <= 2.0 for c in sleep.call_args_list)

    def test_cancel_between_attempts_stops_retrying(self) -> None:
        token = CancellationToken()

        def _fail() -> str:
            token.cancel()
            raise NetworkError("busy", status_code=503)

        func = MagicMock(side_effect=_fail)

        with pytest.raises(PipelineCancelledError):
            RetryPolicy(max_attempts=3, sleep=MagicMock()).call("op", func, token)
        func.assert_called_once()

    def test_already_cancelled_token_skips_the_call(self) -> None:
        token = CancellationToken()
        token.cancel()
        func = MagicMock(return_value="ok")

        with pytest.raises(PipelineCancelledError):
            RetryPolicy(sleep=MagicMock()).call("op", func, token)
        func.assert_not_called()

    def test_backoff_waits_on_the_cancel_token(self) -> None:
        token = MagicMock(spec=CancellationToken)
        func = MagicMock(side_effect=[NetworkError("down"), "ok"])

        assert RetryPolicy(max_attempts=2).call("op", func, token) == "ok"
        token.sleep.assert_called_once()

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            RetryPolicy(max_attempts=0)

    def test_from_settings(self, settings: Settings) -> None:
        policy = RetryPolicy.from_settings(settings.model_copy(update={"retry_max_attempts": 5}))
        assert policy.max_attempts == 5
