from document_analyzer.extraction.base import BaseTextExtractor
from document_analyzer.extraction.extractor import IMAGE_DOCUMENT_MARKER, TextExtractor
from document_analyzer.extraction.factory import TextExtractorFactory

__all__ = ["IMAGE_DOCUMENT_MARKER", "BaseTextExtractor", "TextExtractor", "TextExtractorFactory"]
