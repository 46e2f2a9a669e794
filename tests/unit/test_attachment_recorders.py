import base64
import json
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import psycopg
import pytest

from document_analyzer.attachments.base import note_subject
from document_analyzer.attachments.dataverse_recorder import DataverseAttachmentRecorder
from document_analyzer.attachments.factory import AttachmentRecorderFactory
from document_analyzer.attachments.local_recorder import LocalAttachmentRecorder, attachment_dir
from document_analyzer.attachments.postgres_recorder import PostgresAttachmentRecorder
from document_analyzer.config.settings import Settings
from document_analyzer.database.models import AttachmentRecord
from document_analyzer.exceptions import AttachmentError
from document_analyzer.processor.models import OwnerReference

_CONTENT = b"%PDF-1.4 lease"
_B64 = base64.b64encode(_CONTENT).decode("ascii")
_OWNER = OwnerReference(entity="account", record_id="{0C9B3F4E-1111-2222-3333-444455556666}")
_NOTE_ID = "7d1e2c3b-aaaa-bbbb-cccc-0123456789ab"


class TestNoteText:
    def test_subject_names_the_file(self) -> None:
        assert note_subject("lease.pdf") == "Document Analysis: lease.pdf"


class TestLocalAttachmentRecorder:
    def test_writes_file_and_metadata(self, tmp_path: Path) -> None:
        recorder = LocalAttachmentRecorder(tmp_path)

        attachment_id = recorder.create_attachment("lease.pdf", "application/pdf", _B64, _OWNER)

        target_dir = tmp_path / "account" / "0C9B3F4E-1111-2222-3333-444455556666"
        assert (target_dir / f"{attachment_id}-lease.pdf").read_bytes() == _CONTENT
        metadata = json.loads((target_dir / f"{attachment_id}.json").read_text())
        assert metadata["subject"] == "Document Analysis: lease.pdf"
        assert metadata["mimetype"] == "application/pdf"
        assert metadata["notetext"].startswith("Document uploaded for AI analysis on ")

    def test_each_call_creates_new_attachment(self, tmp_path: Path) -> None:
        recorder = LocalAttachmentRecorder(tmp_path)
        first = recorder.create_attachment("a.pdf", "application/pdf", _B64, None)
        second = recorder.create_attachment("a.pdf", "application/pdf", _B64, None)
        assert first != second

    def test_without_owner_uses_unassigned_dir(self, tmp_path: Path) -> None:
        assert attachment_dir(tmp_path, None) == tmp_path / "unassigned"

    def test_invalid_base64_raises(self, tmp_path: Path) -> None:
        recorder = LocalAttachmentRecorder(tmp_path)
        with pytest.raises(AttachmentError, match="Failed to create attachment"):
            recorder.create_attachment("a.pdf", "application/pdf", "!!not base64!!", None)

    def test_unwritable_root_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        recorder = LocalAttachmentRecorder(blocker)
        with pytest.raises(AttachmentError):
            recorder.create_attachment("a.pdf", "application/pdf", _B64, None)

    @pytest.mark.parametrize("record_id", ["../../outside", "{..}"])
    def test_owner_outside_root_is_rejected(self, tmp_path: Path, record_id: str) -> None:
        root = tmp_path / "attachments"
        owner = OwnerReference(entity="account", record_id=record_id)

        with pytest.raises(AttachmentError, match="escapes the attachments root"):
            LocalAttachmentRecorder(root).create_attachment("a.pdf", "application/pdf", _B64, owner)

        assert not (tmp_path / "outside").exists()


class TestPostgresAttachmentRecorder:
    def test_inserts_record_and_returns_id(self) -> None:
        repository = MagicMock()
        repository.insert.return_value = 17

        result = PostgresAttachmentRecorder(repository).create_attachment(
            "lease.pdf", "application/pdf", _B64, _OWNER
        )

        assert result == "17"
        record = repository.insert.call_args.args[0]
        assert isinstance(record, AttachmentRecord)
        assert record.document_body == _B64
        assert record.owner_entity == "account"
        assert record.owner_id == "0C9B3F4E-1111-2222-3333-444455556666"

    def test_database_error_becomes_attachment_error(self) -> None:
        repository = MagicMock()
        repository.insert.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(AttachmentError, match="connection lost"):
            PostgresAttachmentRecorder(repository).create_attachment(
                "lease.pdf", "application/pdf", _B64, None
            )


def _dataverse(handler) -> DataverseAttachmentRecorder:  # type: ignore[no-untyped-def]
    return DataverseAttachmentRecorder(
        base_url="https://org.crm.dynamics.com/",
        access_token="token",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestDataverseAttachmentRecorder:
    def test_posts_annotation_bound_to_owner(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                204,
                headers={
                    "OData-EntityId": (
                        f"https://org.crm.dynamics.com/api/data/v9.2/annotations({_NOTE_ID})"
                    )
                },
            )

        result = _dataverse(handler).create_attachment(
            "lease.pdf", "application/pdf", _B64, _OWNER
        )

        assert result == _NOTE_ID
        request = requests[0]
        assert str(request.url) == "https://org.crm.dynamics.com/api/data/v9.2/annotations"
        assert request.headers["Authorization"] == "Bearer token"
        body = json.loads(request.content)
        assert body["subject"] == "Document Analysis: lease.pdf"
        assert body["documentbody"] == _B64
        assert body["mimetype"] == "application/pdf"
        assert body["objectid_account@odata.bind"] == (
            "/accounts(0C9B3F4E-1111-2222-3333-444455556666)"
        )

    def test_requires_owner(self) -> None:
        handler = MagicMock()
        with pytest.raises(AttachmentError, match="No entity reference"):
            _dataverse(handler).create_attachment("a.pdf", "application/pdf", _B64, None)
        handler.assert_not_called()

    def test_error_status_raises(self) -> None:
        recorder = _dataverse(lambda request: httpx.Response(403, text="forbidden"))
        with pytest.raises(AttachmentError, match="403 - forbidden"):
            recorder.create_attachment("a.pdf", "application/pdf", _B64, _OWNER)

    def test_missing_entity_id_raises(self) -> None:
        recorder = _dataverse(lambda request: httpx.Response(204))
        with pytest.raises(AttachmentError, match="no annotation id"):
            recorder.create_attachment("a.pdf", "application/pdf", _B64, _OWNER)

    def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(AttachmentError, match="unreachable"):
            _dataverse(handler).create_attachment("a.pdf", "application/pdf", _B64, _OWNER)

    def test_close_closes_own_client(self) -> None:
        recorder = DataverseAttachmentRecorder(
            base_url="https://org.crm.dynamics.com", access_token="token"
        )

        recorder.close()

        assert recorder._client.is_closed


class TestAttachmentRecorderFactory:
    def test_default_is_local(self, settings: Settings) -> None:
        recorder = AttachmentRecorderFactory.create(settings)
        assert isinstance(recorder, LocalAttachmentRecorder)

    def test_creates_postgres_recorder(self, settings: Settings) -> None:
        recorder = AttachmentRecorderFactory.create(
            settings.model_copy(update={"attachment_backend": "postgres"})
        )
        assert isinstance(recorder, PostgresAttachmentRecorder)

    def test_creates_dataverse_recorder(self, settings: Settings) -> None:
        recorder = AttachmentRecorderFactory.create(
            settings.model_copy(
                update={
                    "attachment_backend": "Dataverse",
                    "dataverse_url": "https://org.crm.dynamics.com",
                }
            )
        )
        assert isinstance(recorder, DataverseAttachmentRecorder)

    def test_dataverse_requires_url(self, settings: Settings) -> None:
        with pytest.raises(ValueError, match="dataverse_url"):
            AttachmentRecorderFactory.create(
                settings.model_copy(update={"attachment_backend": "dataverse"})
            )

    def test_raises_for_unknown_backend(self, settings: Settings) -> None:
        with pytest.raises(ValueError, match="Unknown attachment backend"):
            AttachmentRecorderFactory.create(
                settings.model_copy(update={"attachment_backend": "s3"})
            )
