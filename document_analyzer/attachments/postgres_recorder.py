from datetime import datetime

import psycopg

from document_analyzer.attachments.base import BaseAttachmentRecorder, note_subject, note_text
from document_analyzer.database.models import AttachmentRecord
from document_analyzer.database.repositories.attachment_repository import AttachmentRepository
from document_analyzer.exceptions import AttachmentError
from document_analyzer.processor.models import OwnerReference


class PostgresAttachmentRecorder(BaseAttachmentRecorder):
    """Stores attachments as rows of the attachments table."""

    def __init__(self, repository: AttachmentRepository) -> None:
        self._repository = repository

    def create_attachment(
        self,
        filename: str,
        mime_type: str,
        base64_content: str,
        owner: OwnerReference | None,
    ) -> str:
        record = AttachmentRecord(
            subject=note_subject(filename),
            note_text=note_text(datetime.now()),
            filename=filename,
            mime_type=mime_type,
            document_body=base64_content,
            owner_entity=owner.entity if owner else None,
            owner_id=owner.record_id.strip("{}") if owner else None,
        )
        try:
            return str(self._repository.insert(record))
        except (psycopg.Error, RuntimeError) as exc:
            raise AttachmentError(f"Failed to create attachment: {exc}") from exc
