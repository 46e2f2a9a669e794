from abc import ABC, abstractmethod

from document_analyzer.cancellation import CancellationToken
from document_analyzer.processor.models import DocumentAnalysis, DocumentFile, ExtractionResult


class BaseAnalyzer(ABC):
    """Contract for producing and transforming document analyses."""

    @abstractmethod
    def analyze(
        self,
        extraction: ExtractionResult,
        file: DocumentFile | None,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        """Produce a fresh analysis of the extracted document."""

    @abstractmethod
    def translate(
        self,
        analysis: DocumentAnalysis,
        language: str,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        """Translate every content value of the analysis into `language`."""

    @abstractmethod
    def expand(
        self,
        analysis: DocumentAnalysis,
        extraction: ExtractionResult,
        file: DocumentFile | None,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        """Produce a more detailed analysis building on the current one."""
