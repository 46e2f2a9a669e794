import re
from datetime import datetime

import httpx

from document_analyzer.attachments.base import BaseAttachmentRecorder, note_subject, note_text
from document_analyzer.exceptions import AttachmentError
from document_analyzer.processor.models import OwnerReference

_ENTITY_ID_PATTERN = re.compile(r"\(([0-9a-fA-F-]{36})\)\s*$")


class DataverseAttachmentRecorder(BaseAttachmentRecorder):
    """Creates a Note (annotation) linked to a Dataverse record via the Web API."""

    def __init__(
        self,
        *,
        base_url: str,
        access_token: str,
        api_version: str = "v9.2",
        timeout_seconds: float = 30,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/api/data/{api_version}/annotations"
        self._access_token = access_token
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def create_attachment(
        self,
        filename: str,
        mime_type: str,
        base64_content: str,
        owner: OwnerReference | None,
    ) -> str:
        if owner is None:
            raise AttachmentError("Cannot create note: No entity reference found")

        record_id = owner.record_id.replace("{", "").replace("}", "")
        annotation = {
            "subject": note_subject(filename),
            "notetext": note_text(datetime.now()),
            "filename": filename,
            "documentbody": base64_content,
            "mimetype": mime_type,
            f"objectid_{owner.entity}@odata.bind": f"/{owner.entity}s({record_id})",
        }
        try:
            response = self._client.post(
                self._url,
                json=annotation,
                headers={
                    "Authorization": f"Bearer {self._access_token}",
                    "OData-MaxVersion": "4.0",
                    "OData-Version": "4.0",
                    "Accept": "application/json",
                },
            )
        except httpx.HTTPError as exc:
            raise AttachmentError(f"Failed to create attachment: {exc}") from exc

        if not response.is_success:
            raise AttachmentError(
                f"Failed to create attachment: {response.status_code} - {response.text}"
            )
        match = _ENTITY_ID_PATTERN.search(response.headers.get("OData-EntityId", ""))
        if match is None:
            raise AttachmentError("Failed to create attachment: no annotation id returned")
        return match.group(1)
