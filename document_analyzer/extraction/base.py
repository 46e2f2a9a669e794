from abc import ABC, abstractmethod

from document_analyzer.cancellation import CancellationToken
from document_analyzer.processor.models import DocumentFile, ExtractionResult


class BaseTextExtractor(ABC):
    """Contract for obtaining analyzable text from a document."""

    @abstractmethod
    def extract(self, file: DocumentFile, cancel_token: CancellationToken) -> ExtractionResult:
        """Return the document text and the mode it must be analyzed in.

        Raises:
            NetworkError, ExtractionFailedError, ExtractionTimeoutError:
                when the extraction service cannot produce text.
            PipelineCancelledError: if the run is cancelled mid-extraction.
        """

    def close(self) -> None:
        """Release any network clients; no-op by default."""
