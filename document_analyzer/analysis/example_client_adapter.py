"""Offline analysis client.

Returns a fixed, valid analysis without any network call. Useful for local
development and demos; also a template for new provider adapters: implement
BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import Any, ClassVar

from document_analyzer.analysis.client_base import BaseAnalysisClient
from document_analyzer.cancellation import CancellationToken


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that always returns the same analysis JSON."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "executiveSummary": "Example analysis generated without a language model.",
        "keyPoints": ["The document was received and processed offline."],
        "risks": [
            {
                "level": "low",
                "description": "Content was not reviewed by a language model.",
            }
        ],
        "nextActions": ["Configure the language model endpoint and key."],
    }

    def create_chat_completion(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        _ = messages, temperature, max_tokens, cancel_token
        return json.dumps(self.DEFAULT_RESPONSE)
