from typing import Any

import openai
from openai.types.chat import ChatCompletion

from document_analyzer.analysis.client_base import BaseAnalysisClient
from document_analyzer.cancellation import CancellationToken
from document_analyzer.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    NetworkError,
)
from document_analyzer.retry import RetryPolicy


class AzureOpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client for an Azure OpenAI chat-completions deployment.

    The SDK's own retries are disabled; transient failures are retried by the
    injected RetryPolicy instead.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = "2024-02-15-preview",
        timeout_seconds: int = 60,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._deployment = deployment
        self._retry_policy = retry_policy or RetryPolicy(max_attempts=1)
        self._client: openai.AzureOpenAI | None = None
        if endpoint and api_key:
            self._client = openai.AzureOpenAI(
                azure_endpoint=endpoint,
                api_key=api_key,
                api_version=api_version,
                timeout=timeout_seconds,
                max_retries=0,
            )

    def create_chat_completion(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        client = self._client
        if client is None:
            raise ConfigurationError("Language model endpoint and API key must be configured")

        response = self._retry_policy.call(
            "Language model call",
            lambda: self._create(client, messages, temperature, max_tokens),
            cancel_token,
        )
        if not response.choices:
            raise EmptyResponseError("Language model returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise EmptyResponseError("No response from the language model")
        return content

    def _create(
        self,
        client: openai.AzureOpenAI,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        try:
            return client.chat.completions.create(
                model=self._deployment,
                messages=messages,  # type: ignore[arg-type]
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as exc:
            body = exc.response.text
            raise NetworkError(
                f"Language model API error: {exc.status_code} - {body}",
                status_code=exc.status_code,
                body=body,
            ) from exc
        except openai.APIConnectionError as exc:
            raise NetworkError(f"Language model network error: {exc}") from exc
        except openai.APIError as exc:
            raise MalformedResponseError(f"Language model API error: {exc}") from exc
