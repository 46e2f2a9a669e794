from pathlib import Path

from document_analyzer.attachments.base import BaseAttachmentRecorder
from document_analyzer.attachments.dataverse_recorder import DataverseAttachmentRecorder
from document_analyzer.attachments.local_recorder import LocalAttachmentRecorder
from document_analyzer.attachments.postgres_recorder import PostgresAttachmentRecorder
from document_analyzer.config.settings import Settings
from document_analyzer.database.repositories.attachment_repository import AttachmentRepository


class AttachmentRecorderFactory:
    """Creates the configured attachment backend."""

    BACKENDS = ("local", "postgres", "dataverse")

    @classmethod
    def create(cls, settings: Settings) -> BaseAttachmentRecorder:
        backend = settings.attachment_backend.lower()
        if backend == "local":
            return LocalAttachmentRecorder(Path(settings.attachments_root))
        if backend == "postgres":
            return PostgresAttachmentRecorder(AttachmentRepository())
        if backend == "dataverse":
            if not settings.dataverse_url:
                raise ValueError("dataverse_url is required for attachment_backend=dataverse")
            return DataverseAttachmentRecorder(
                base_url=settings.dataverse_url,
                access_token=settings.dataverse_token,
                api_version=settings.dataverse_api_version,
                timeout_seconds=settings.dataverse_timeout_seconds,
            )
        raise ValueError(
            f"Unknown attachment backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
