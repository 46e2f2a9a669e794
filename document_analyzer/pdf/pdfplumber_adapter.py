import io

import pdfplumber

from document_analyzer.pdf.base import BasePdfExtractor
from document_analyzer.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Local PDF engine backed by pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                limit = self._page_limit(len(pdf.pages))
                return self._join_pages(page.extract_text() for page in pdf.pages[:limit])
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read the PDF: {exc}") from exc
