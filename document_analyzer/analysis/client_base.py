from abc import ABC, abstractmethod
from typing import Any

from document_analyzer.cancellation import CancellationToken


class BaseAnalysisClient(ABC):
    """Contract for provider-specific chat-completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Return the completion content as plain text.

        Raises:
            ConfigurationError: if the provider endpoint or key is missing.
            NetworkError: on a non-success status or transport failure.
            EmptyResponseError: if the provider returned no content.
            PipelineCancelledError: if `cancel_token` is cancelled between retries.
        """
