from psycopg.rows import dict_row

from document_analyzer.database.connection import get_connection
from document_analyzer.database.models import AttachmentRecord

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS attachments (
    id BIGSERIAL PRIMARY KEY,
    subject TEXT NOT NULL,
    note_text TEXT NOT NULL,
    filename TEXT NOT NULL,
    mime_type TEXT NOT NULL,
    document_body TEXT NOT NULL,
    owner_entity TEXT,
    owner_id TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


class AttachmentRepository:
    """Database operations for the attachments table."""

    def ensure_schema(self) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
            conn.commit()

    def insert(self, record: AttachmentRecord) -> int:
        """Insert an attachment row and return its id."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO attachments
                        (subject, note_text, filename, mime_type,
                         document_body, owner_entity, owner_id)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        record.subject,
                        record.note_text,
                        record.filename,
                        record.mime_type,
                        record.document_body,
                        record.owner_entity,
                        record.owner_id,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("Attachment insert returned no id")
        return int(row[0])

    def find_by_id(self, attachment_id: int) -> AttachmentRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, subject, note_text, filename, mime_type,
                           document_body, owner_entity, owner_id, created_at
                    FROM attachments
                    WHERE id = %s
                    """,
                    (attachment_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return AttachmentRecord(**row)
