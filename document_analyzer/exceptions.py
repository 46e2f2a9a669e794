class AnalyzerError(Exception):
    """Base exception for all document analysis failures."""


class FileValidationError(AnalyzerError):
    """Raised when a file is rejected before any network call."""


class ConfigurationError(AnalyzerError):
    """Raised when a required endpoint or key is not configured."""


class NetworkError(AnalyzerError):
    """Raised on a non-success HTTP status or a transport failure."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_transient(self) -> bool:
        """Transport failures, throttling and server errors are worth retrying."""
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


class ExtractionTimeoutError(AnalyzerError):
    """Raised when the extraction job does not finish within the poll budget."""


class ExtractionFailedError(AnalyzerError):
    """Raised when the extraction service reports a terminal failure."""


class EmptyResponseError(AnalyzerError):
    """Raised when the language model returns no completion content."""


class MalformedResponseError(AnalyzerError):
    """Raised when the completion content cannot be decoded into an analysis."""


class AttachmentError(AnalyzerError):
    """Raised when the attachment cannot be stored on the host record."""


class PipelineCancelledError(AnalyzerError):
    """Raised at a suspension point after the run was cancelled."""
