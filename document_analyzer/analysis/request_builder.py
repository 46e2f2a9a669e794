"""Assembles chat-completion requests for analysis, translation and expansion."""

import base64
import json
import mimetypes
from pathlib import Path
from typing import Any

from document_analyzer.analysis.models import LanguageModelRequest
from document_analyzer.analysis.prompt_loader import load_output_schema, load_prompt_template
from document_analyzer.processor.models import (
    AnalysisMode,
    DocumentAnalysis,
    DocumentFile,
    ExtractionResult,
)

ANALYST_SYSTEM_PROMPT = (
    "You are an expert document analyst. "
    "Analyze documents and provide structured insights."
)
TRANSLATOR_SYSTEM_PROMPT = "You are a professional translator."
EXPANSION_SYSTEM_PROMPT = "You are an expert document analyst providing detailed insights."

ANALYSIS_TEMPERATURE = 0.7
TRANSLATION_TEMPERATURE = 0.3
EXPANSION_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 2000
TRANSLATION_MAX_TOKENS = 2000
EXPANSION_MAX_TOKENS = 3000

_IMAGE_SECTION = "The document is attached as an image."


def to_data_uri(file: DocumentFile) -> str:
    mime_type = (
        file.mime_type
        or mimetypes.guess_type(file.name)[0]
        or "application/octet-stream"
    )
    encoded = base64.b64encode(file.content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class RequestBuilder:
    """Builds LanguageModelRequest objects from the bundled prompt templates."""

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self._analysis_template = load_prompt_template("analysis_prompt.txt", prompt_dir)
        self._translation_template = load_prompt_template("translation_prompt.txt", prompt_dir)
        self._expansion_template = load_prompt_template("expansion_prompt.txt", prompt_dir)
        self._output_schema = load_output_schema(prompt_dir)

    def build_analysis_request(
        self,
        extraction: ExtractionResult,
        file: DocumentFile | None,
    ) -> LanguageModelRequest:
        """Vision mode sends the file as an inline image; text mode appends the text."""
        file_name = file.name if file is not None else "document"
        prompt = self._analysis_template.format(
            file_name=file_name,
            output_schema=self._output_schema,
        )
        if extraction.mode is AnalysisMode.VISION and file is not None:
            user_content: str | list[dict[str, Any]] = _with_image(prompt, file)
        else:
            user_content = f"{prompt}\n\nDocument Content:\n{extraction.text}"
        return LanguageModelRequest(
            messages=_messages(ANALYST_SYSTEM_PROMPT, user_content),
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )

    def build_translation_request(
        self,
        analysis: DocumentAnalysis,
        language: str,
    ) -> LanguageModelRequest:
        prompt = self._translation_template.format(
            language=language,
            analysis_json=_analysis_json(analysis),
        )
        return LanguageModelRequest(
            messages=_messages(TRANSLATOR_SYSTEM_PROMPT, prompt),
            temperature=TRANSLATION_TEMPERATURE,
            max_tokens=TRANSLATION_MAX_TOKENS,
        )

    def build_expansion_request(
        self,
        analysis: DocumentAnalysis,
        extraction: ExtractionResult,
        file: DocumentFile | None,
    ) -> LanguageModelRequest:
        vision = extraction.mode is AnalysisMode.VISION and file is not None
        document_section = (
            _IMAGE_SECTION if vision else f"Document Content:\n{extraction.text}"
        )
        prompt = self._expansion_template.format(
            analysis_json=_analysis_json(analysis),
            document_section=document_section,
            output_schema=self._output_schema,
        )
        user_content: str | list[dict[str, Any]] = prompt
        if vision and file is not None:
            user_content = _with_image(prompt, file)
        return LanguageModelRequest(
            messages=_messages(EXPANSION_SYSTEM_PROMPT, user_content),
            temperature=EXPANSION_TEMPERATURE,
            max_tokens=EXPANSION_MAX_TOKENS,
        )


def _messages(
    system_prompt: str,
    user_content: str | list[dict[str, Any]],
) -> list[dict[str, Any]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]


def _with_image(prompt: str, file: DocumentFile) -> list[dict[str, Any]]:
    return [
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": to_data_uri(file)}},
    ]


def _analysis_json(analysis: DocumentAnalysis) -> str:
    return json.dumps(analysis.to_payload(), indent=2, ensure_ascii=False)
