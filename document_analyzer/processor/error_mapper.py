from dataclasses import dataclass
from enum import Enum

from document_analyzer.exceptions import (
    AttachmentError,
    ConfigurationError,
    EmptyResponseError,
    ExtractionFailedError,
    ExtractionTimeoutError,
    FileValidationError,
    MalformedResponseError,
    NetworkError,
    PipelineCancelledError,
)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    NETWORK = "network"
    EXTRACTION_TIMEOUT = "extraction_timeout"
    EXTRACTION_FAILED = "extraction_failed"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    ATTACHMENT = "attachment"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ErrorInfo:
    title: str
    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN


_KINDS: tuple[tuple[type[Exception], ErrorKind], ...] = (
    (FileValidationError, ErrorKind.VALIDATION),
    (ConfigurationError, ErrorKind.CONFIGURATION),
    (NetworkError, ErrorKind.NETWORK),
    (ExtractionTimeoutError, ErrorKind.EXTRACTION_TIMEOUT),
    (ExtractionFailedError, ErrorKind.EXTRACTION_FAILED),
    (EmptyResponseError, ErrorKind.EMPTY_RESPONSE),
    (MalformedResponseError, ErrorKind.MALFORMED_RESPONSE),
    (AttachmentError, ErrorKind.ATTACHMENT),
    (PipelineCancelledError, ErrorKind.CANCELLED),
)


def classify(exc: BaseException) -> ErrorKind:
    for exc_type, kind in _KINDS:
        if isinstance(exc, exc_type):
            return kind
    return ErrorKind.UNKNOWN


def map_error(exc: BaseException, title: str) -> ErrorInfo:
    """Turn a failure from any stage into a user-facing (title, message) pair."""
    message = str(exc).strip() or UNKNOWN_ERROR_MESSAGE
    return ErrorInfo(title=title, message=message, kind=classify(exc))
