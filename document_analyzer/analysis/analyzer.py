"""Language-model backed document analyzer."""

from document_analyzer.analysis.base import BaseAnalyzer
from document_analyzer.analysis.client_base import BaseAnalysisClient
from document_analyzer.analysis.decoder import decode_analysis, parse_json_object
from document_analyzer.analysis.models import LanguageModelRequest
from document_analyzer.analysis.request_builder import RequestBuilder
from document_analyzer.cancellation import CancellationToken
from document_analyzer.logging.logger import Log
from document_analyzer.processor.models import DocumentAnalysis, DocumentFile, ExtractionResult


class Analyzer(BaseAnalyzer):
    """Sends analysis, translation and expansion requests and decodes the result.

    Every returned analysis is a new object; the cached extraction travels
    with it so later transforms can skip re-extraction.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        request_builder: RequestBuilder | None = None,
    ) -> None:
        self._client = client
        self._request_builder = request_builder or RequestBuilder()

    def analyze(
        self,
        extraction: ExtractionResult,
        file: DocumentFile | None,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        request = self._request_builder.build_analysis_request(extraction, file)
        Log.info(f"Analyzing document in {extraction.mode.value} mode")
        result = self._run(request, cancel_token)
        return result.with_source(extraction)

    def translate(
        self,
        analysis: DocumentAnalysis,
        language: str,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        request = self._request_builder.build_translation_request(analysis, language)
        Log.info(f"Translating analysis to {language}")
        result = self._run(request, cancel_token)
        return result.with_source(analysis.source)

    def expand(
        self,
        analysis: DocumentAnalysis,
        extraction: ExtractionResult,
        file: DocumentFile | None,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        request = self._request_builder.build_expansion_request(analysis, extraction, file)
        Log.info("Expanding analysis")
        result = self._run(request, cancel_token)
        return result.with_source(extraction)

    def _run(
        self,
        request: LanguageModelRequest,
        cancel_token: CancellationToken,
    ) -> DocumentAnalysis:
        cancel_token.raise_if_cancelled()
        raw_response = self._client.create_chat_completion(
            messages=request.messages,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            cancel_token=cancel_token,
        )
        cancel_token.raise_if_cancelled()
        Log.debug(f"Language model raw response:\n{raw_response}")

        result = decode_analysis(parse_json_object(raw_response))
        Log.info(
            f"Analysis decoded: {len(result.key_points)} key points, "
            f"{len(result.risks)} risks, {len(result.next_actions)} next actions"
        )
        return result
