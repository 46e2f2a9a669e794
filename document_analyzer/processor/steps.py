import base64

from document_analyzer.analysis.base import BaseAnalyzer
from document_analyzer.attachments.base import BaseAttachmentRecorder
from document_analyzer.extraction.base import BaseTextExtractor
from document_analyzer.logging.logger import Log
from document_analyzer.processor.formatter import format_summary
from document_analyzer.processor.pipeline import PipelineContext, PipelineStep


class CreateAttachmentStep(PipelineStep):
    def __init__(self, recorder: BaseAttachmentRecorder) -> None:
        self._recorder = recorder

    def run(self, context: PipelineContext) -> PipelineContext:
        file = context.file
        context.cancel_token.raise_if_cancelled()
        context.attachment_id = self._recorder.create_attachment(
            file.name,
            file.mime_type,
            base64.b64encode(file.content).decode("ascii"),
            context.owner,
        )
        Log.info(f"Attachment {context.attachment_id} created for {file.name}")
        return context

    def close(self) -> None:
        self._recorder.close()


class ExtractTextStep(PipelineStep):
    """Reuses the extraction cached on the current analysis when there is one."""

    def __init__(self, extractor: BaseTextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        cached = context.current_analysis.source if context.current_analysis else None
        if cached is not None:
            context.extraction = cached
            Log.info(f"Reusing cached text for {context.file.name}")
            return context
        context.extraction = self._extractor.extract(context.file, context.cancel_token)
        Log.info(
            f"Extracted {len(context.extraction.text)} chars from {context.file.name} "
            f"({context.extraction.mode.value} mode)"
        )
        return context

    def close(self) -> None:
        self._extractor.close()


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before analysis")
        context.analysis = self._analyzer.analyze(
            context.extraction,
            context.file,
            context.cancel_token,
        )
        return context


class TranslateStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.current_analysis is None:
            raise ValueError("PipelineContext.current_analysis must be set before translation")
        if not context.target_language:
            raise ValueError("PipelineContext.target_language must be set before translation")
        context.analysis = self._analyzer.translate(
            context.current_analysis,
            context.target_language,
            context.cancel_token,
        )
        return context


class ExpandStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.current_analysis is None:
            raise ValueError("PipelineContext.current_analysis must be set before expansion")
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before expansion")
        context.analysis = self._analyzer.expand(
            context.current_analysis,
            context.extraction,
            context.file,
            context.cancel_token,
        )
        return context


class FormatSummaryStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before formatting")
        context.summary = format_summary(context.analysis)
        return context
