from document_analyzer.config.settings import Settings
from document_analyzer.extraction.base import BaseTextExtractor
from document_analyzer.extraction.document_intelligence_adapter import (
    DocumentIntelligenceAdapter,
)
from document_analyzer.extraction.extractor import TextExtractor
from document_analyzer.pdf.factory import PdfExtractorFactory
from document_analyzer.retry import RetryPolicy


class TextExtractorFactory:
    """Creates the text extractor from application settings."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        service = None
        if settings.extraction_configured:
            service = DocumentIntelligenceAdapter(
                endpoint=settings.document_intelligence_endpoint,
                api_key=settings.document_intelligence_key,
                api_version=settings.document_intelligence_api_version,
                timeout_seconds=settings.extraction_timeout_seconds,
                poll_interval_seconds=settings.extraction_poll_interval_seconds,
                max_poll_attempts=settings.extraction_max_poll_attempts,
                retry_policy=RetryPolicy.from_settings(settings),
            )
        return TextExtractor(
            service=service,
            pdf_extractor=PdfExtractorFactory.create(settings),
        )
