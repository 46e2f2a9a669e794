from abc import ABC, abstractmethod
from datetime import datetime

from document_analyzer.processor.models import OwnerReference


def note_subject(filename: str) -> str:
    return f"Document Analysis: {filename}"


def note_text(uploaded_at: datetime) -> str:
    return f"Document uploaded for AI analysis on {uploaded_at:%Y-%m-%d %H:%M:%S}"


class BaseAttachmentRecorder(ABC):
    """Contract for storing the uploaded file against a host record."""

    @abstractmethod
    def create_attachment(
        self,
        filename: str,
        mime_type: str,
        base64_content: str,
        owner: OwnerReference | None,
    ) -> str:
        """Store the file and return the new attachment id.

        Not idempotent: every call creates a new attachment.

        Raises:
            AttachmentError: if the attachment cannot be created.
        """

    def close(self) -> None:
        """Release any network clients; no-op by default."""
