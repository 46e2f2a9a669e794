import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from document_analyzer.config.settings import Settings
from document_analyzer.processor.models import DocumentFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def settings() -> Settings:
    """Settings with defaults only, independent of the caller's environment."""
    return Settings(
        _env_file=None,
        azure_openai_endpoint="https://example.openai.azure.com",
        azure_openai_api_key="llm-key",
    )


@pytest.fixture()
def pdf_file() -> DocumentFile:
    content = b"%PDF-1.4 fake"
    return DocumentFile(
        name="report.pdf",
        size_bytes=len(content),
        mime_type="application/pdf",
        content=content,
    )


@pytest.fixture()
def image_file() -> DocumentFile:
    content = b"\x89PNG\r\n\x1a\nfake"
    return DocumentFile(
        name="scan.png",
        size_bytes=len(content),
        mime_type="image/png",
        content=content,
    )
