from document_analyzer.exceptions import ExtractionFailedError


class PdfExtractionError(ExtractionFailedError):
    """Raised when a local PDF engine cannot extract text."""
