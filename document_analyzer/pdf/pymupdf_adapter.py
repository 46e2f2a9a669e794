import pymupdf

from document_analyzer.pdf.base import BasePdfExtractor
from document_analyzer.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Local PDF engine backed by PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                limit = self._page_limit(doc.page_count)
                return self._join_pages(doc[index].get_text() for index in range(limit))
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read the PDF: {exc}") from exc
