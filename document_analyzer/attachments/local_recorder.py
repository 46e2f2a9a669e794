import base64
import binascii
import json
import uuid
from datetime import datetime
from pathlib import Path

from document_analyzer.attachments.base import BaseAttachmentRecorder, note_subject, note_text
from document_analyzer.exceptions import AttachmentError
from document_analyzer.processor.models import OwnerReference

_UNASSIGNED = "unassigned"


def attachment_dir(root: Path, owner: OwnerReference | None) -> Path:
    """Build directory for an owner's attachments: {root}/{entity}/{record_id}"""
    if owner is None:
        return root / _UNASSIGNED
    return root / owner.entity / owner.record_id.strip("{}")


class LocalAttachmentRecorder(BaseAttachmentRecorder):
    """Writes attachments and a JSON metadata sidecar to the local filesystem."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def create_attachment(
        self,
        filename: str,
        mime_type: str,
        base64_content: str,
        owner: OwnerReference | None,
    ) -> str:
        attachment_id = str(uuid.uuid4())
        target_dir = attachment_dir(self._root, owner)
        root = self._root.resolve()
        resolved = target_dir.resolve()
        if resolved == root or not resolved.is_relative_to(root):
            raise AttachmentError(f"Owner reference escapes the attachments root: {target_dir}")
        target = target_dir / f"{attachment_id}-{Path(filename).name}"
        metadata = {
            "id": attachment_id,
            "subject": note_subject(filename),
            "notetext": note_text(datetime.now()),
            "filename": filename,
            "mimetype": mime_type,
        }
        try:
            content = base64.b64decode(base64_content, validate=True)
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            target.with_name(f"{attachment_id}.json").write_text(
                json.dumps(metadata, indent=2),
                encoding="utf-8",
            )
        except (OSError, binascii.Error) as exc:
            raise AttachmentError(f"Failed to create attachment: {exc}") from exc
        return attachment_id
