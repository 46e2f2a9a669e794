from document_analyzer.config.settings import Settings
from document_analyzer.pdf.base import BasePdfExtractor
from document_analyzer.pdf.pdfplumber_adapter import PdfPlumberAdapter
from document_analyzer.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the local PDF engine used when no extraction service is configured."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor | None:
        """Return the configured engine, or None when local extraction is off."""
        engine = settings.local_pdf_engine.lower()
        if engine == "none":
            return None
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {['none', *cls.ADAPTERS]}"
            )
        return adapter_cls(max_pages=settings.local_pdf_max_pages)
