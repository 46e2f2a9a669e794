from dataclasses import dataclass
from datetime import datetime


@dataclass
class AttachmentRecord:
    """Represents a row from the attachments table."""

    subject: str
    note_text: str
    filename: str
    mime_type: str
    document_body: str
    owner_entity: str | None = None
    owner_id: str | None = None
    id: int | None = None
    created_at: datetime | None = None
