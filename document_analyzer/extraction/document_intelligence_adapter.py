"""Client for the asynchronous submit-then-poll extraction service."""

from typing import Any

import httpx

from document_analyzer.cancellation import CancellationToken
from document_analyzer.exceptions import (
    ExtractionFailedError,
    ExtractionTimeoutError,
    NetworkError,
)
from document_analyzer.logging.logger import Log
from document_analyzer.processor.models import DocumentFile, ExtractionJob, JobStatus
from document_analyzer.retry import RetryPolicy

_ANALYZE_PATH = "/formrecognizer/documentModels/prebuilt-read:analyze"
_KEY_HEADER = "Ocp-Apim-Subscription-Key"


class DocumentIntelligenceAdapter:
    """Submits raw document bytes and polls the resulting job until it finishes."""

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str,
        api_version: str = "2023-07-31",
        timeout_seconds: float = 30,
        poll_interval_seconds: float = 2.0,
        max_poll_attempts: int = 30,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._api_version = api_version
        self._poll_interval_seconds = poll_interval_seconds
        self._max_poll_attempts = max_poll_attempts
        self._retry_policy = retry_policy or RetryPolicy(max_attempts=1)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            self._client.close()

    @property
    def analyze_url(self) -> str:
        return f"{self._endpoint}{_ANALYZE_PATH}?api-version={self._api_version}"

    def extract_text(self, file: DocumentFile, cancel_token: CancellationToken) -> str:
        """Submit the document and return the extracted content.

        An empty string is a valid result. Polling stops at the first terminal
        status and never exceeds the configured attempt budget.
        """
        cancel_token.raise_if_cancelled()
        job = self._retry_policy.call(
            "Extraction submit",
            lambda: self._submit(file),
            cancel_token,
        )
        Log.info(f"Extraction job submitted for {file.name}")
        result = self._poll(job, cancel_token)
        content = (result.get("analyzeResult") or {}).get("content") or ""
        Log.info(f"Extracted {len(content)} chars from {file.name} after {job.attempts} polls")
        return str(content)

    def _submit(self, file: DocumentFile) -> ExtractionJob:
        try:
            response = self._client.post(
                self.analyze_url,
                headers={
                    "Content-Type": file.mime_type,
                    _KEY_HEADER: self._api_key,
                },
                content=file.content,
            )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Extraction service network error: {exc}") from exc

        if not response.is_success:
            raise NetworkError(
                f"Extraction service error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        operation_location = response.headers.get("Operation-Location")
        if not operation_location:
            raise ExtractionFailedError(
                "No operation location returned from the extraction service"
            )
        return ExtractionJob(operation_location=operation_location)

    def _poll(self, job: ExtractionJob, cancel_token: CancellationToken) -> dict[str, Any]:
        while job.attempts < self._max_poll_attempts:
            cancel_token.sleep(self._poll_interval_seconds)
            job.attempts += 1
            payload = self._fetch_status(job)
            job.status = JobStatus.parse(payload.get("status"))
            Log.debug(f"Extraction poll {job.attempts}/{self._max_poll_attempts}: {job.status.value}")
            if job.status.is_terminal:
                if job.status is JobStatus.FAILED:
                    raise ExtractionFailedError("Document extraction failed on the service")
                return payload
        raise ExtractionTimeoutError(
            f"Document extraction timed out after {job.attempts} polls"
        )

    def _fetch_status(self, job: ExtractionJob) -> dict[str, Any]:
        try:
            response = self._client.get(
                job.operation_location,
                headers={_KEY_HEADER: self._api_key},
            )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Extraction polling network error: {exc}") from exc

        if not response.is_success:
            raise NetworkError(
                f"Extraction polling error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionFailedError(f"Invalid polling response: {exc}") from exc
        if not isinstance(payload, dict):
            raise ExtractionFailedError("Polling response must be a JSON object")
        return payload
