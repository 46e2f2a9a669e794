from document_analyzer.cancellation import CancellationToken
from document_analyzer.extraction.base import BaseTextExtractor
from document_analyzer.extraction.document_intelligence_adapter import (
    DocumentIntelligenceAdapter,
)
from document_analyzer.logging.logger import Log
from document_analyzer.pdf.base import BasePdfExtractor
from document_analyzer.processor.models import AnalysisMode, DocumentFile, ExtractionResult

IMAGE_DOCUMENT_MARKER = "[Image document - will be analyzed using vision capabilities]"


def pdf_placeholder(file_name: str) -> str:
    return (
        f"[PDF Document: {file_name}]\n"
        "Note: Configure the extraction service endpoint and key for automatic "
        "text extraction from PDFs."
    )


class TextExtractor(BaseTextExtractor):
    """Chooses the extraction strategy for a document.

    With an extraction service configured every document goes through it.
    Without one, PDFs fall back to a local engine (when enabled) or a
    placeholder naming the file, and images are handed to the model as-is.
    """

    def __init__(
        self,
        service: DocumentIntelligenceAdapter | None = None,
        pdf_extractor: BasePdfExtractor | None = None,
    ) -> None:
        self._service = service
        self._pdf_extractor = pdf_extractor

    def close(self) -> None:
        if self._service is not None:
            self._service.close()

    def extract(self, file: DocumentFile, cancel_token: CancellationToken) -> ExtractionResult:
        if self._service is not None:
            text = self._service.extract_text(file, cancel_token)
            return ExtractionResult(text=text, mode=AnalysisMode.TEXT)

        if file.extension == ".pdf":
            if self._pdf_extractor is not None:
                cancel_token.raise_if_cancelled()
                text = self._pdf_extractor.extract(file.content)
                Log.info(f"Extracted {len(text)} chars locally from {file.name}")
                return ExtractionResult(text=text, mode=AnalysisMode.TEXT)
            Log.warning(f"No extraction service configured; using placeholder for {file.name}")
            return ExtractionResult(text=pdf_placeholder(file.name), mode=AnalysisMode.TEXT)

        Log.info(f"No extraction service configured; {file.name} will be analyzed visually")
        return ExtractionResult(text=IMAGE_DOCUMENT_MARKER, mode=AnalysisMode.VISION)
