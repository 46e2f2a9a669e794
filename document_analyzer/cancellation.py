import threading

from document_analyzer.exceptions import PipelineCancelledError


class CancellationToken:
    """Cooperative cancellation flag checked at every suspension point."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise PipelineCancelledError("Run was cancelled")

    def sleep(self, seconds: float) -> None:
        """Wait up to `seconds`, returning early with an error if cancelled."""
        if self._event.wait(seconds):
            raise PipelineCancelledError("Run was cancelled")
