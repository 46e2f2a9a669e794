from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from document_analyzer.database import connection
from document_analyzer.database.models import AttachmentRecord
from document_analyzer.database.repositories.attachment_repository import (
    SCHEMA_SQL,
    AttachmentRepository,
)

_PATCH_TARGET = "document_analyzer.database.repositories.attachment_repository.get_connection"


def _make_record() -> AttachmentRecord:
    return AttachmentRecord(
        subject="Document Analysis: lease.pdf",
        note_text="Document uploaded for AI analysis on 2024-05-01 10:00:00",
        filename="lease.pdf",
        mime_type="application/pdf",
        document_body="JVBERi0=",
        owner_entity="account",
        owner_id="0c9b3f4e-1111-2222-3333-444455556666",
    )


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestInsert:
    @patch(_PATCH_TARGET)
    def test_returns_new_id_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (42,)

        result = AttachmentRepository().insert(_make_record())

        assert result == 42
        params = mock_cursor.execute.call_args.args[1]
        assert params == (
            "Document Analysis: lease.pdf",
            "Document uploaded for AI analysis on 2024-05-01 10:00:00",
            "lease.pdf",
            "application/pdf",
            "JVBERi0=",
            "account",
            "0c9b3f4e-1111-2222-3333-444455556666",
        )
        mock_conn.commit.assert_called_once()

    @patch(_PATCH_TARGET)
    def test_raises_when_no_id_returned(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(RuntimeError, match="no id"):
            AttachmentRepository().insert(_make_record())


class TestFindById:
    @patch(_PATCH_TARGET)
    def test_returns_record_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
        mock_cursor.fetchone.return_value = {
            "id": 42,
            "subject": "Document Analysis: lease.pdf",
            "note_text": "n",
            "filename": "lease.pdf",
            "mime_type": "application/pdf",
            "document_body": "JVBERi0=",
            "owner_entity": None,
            "owner_id": None,
            "created_at": created_at,
        }

        result = AttachmentRepository().find_by_id(42)

        assert isinstance(result, AttachmentRecord)
        assert result.id == 42
        assert result.filename == "lease.pdf"
        assert result.owner_entity is None
        assert result.created_at == created_at

    @patch(_PATCH_TARGET)
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert AttachmentRepository().find_by_id(999) is None


class TestEnsureSchema:
    @patch(_PATCH_TARGET)
    def test_executes_schema_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        AttachmentRepository().ensure_schema()

        mock_cursor.execute.assert_called_once_with(SCHEMA_SQL)
        mock_conn.commit.assert_called_once()


class TestConnection:
    def test_get_connection_requires_pool(self) -> None:
        with patch.object(connection, "_pool", None):
            with pytest.raises(RuntimeError, match="not initialized"):
                with connection.get_connection():
                    pass
