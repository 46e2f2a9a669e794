from abc import ABC, abstractmethod
from collections.abc import Iterable


class BasePdfExtractor(ABC):
    """Contract for local PDF text extraction engines.

    Engines read at most `max_pages` pages (all when None) and return the
    non-blank pages separated by a blank line.
    """

    def __init__(self, max_pages: int | None = None) -> None:
        if max_pages is not None and max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self._max_pages = max_pages

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    def _page_limit(self, page_count: int) -> int:
        if self._max_pages is None:
            return page_count
        return min(page_count, self._max_pages)

    @staticmethod
    def _join_pages(pages: Iterable[str | None]) -> str:
        texts = (text.strip() for text in pages if text)
        return "\n\n".join(text for text in texts if text)
