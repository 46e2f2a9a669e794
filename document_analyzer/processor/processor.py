from document_analyzer.analysis.base import BaseAnalyzer
from document_analyzer.analysis.factory import AnalyzerFactory
from document_analyzer.attachments.base import BaseAttachmentRecorder
from document_analyzer.attachments.factory import AttachmentRecorderFactory
from document_analyzer.config.settings import Settings
from document_analyzer.extraction.base import BaseTextExtractor
from document_analyzer.extraction.factory import TextExtractorFactory
from document_analyzer.logging.logger import Log
from document_analyzer.processor.pipeline import PipelineAction, PipelineContext, PipelineStep
from document_analyzer.processor.steps import (
    AnalyzeStep,
    CreateAttachmentStep,
    ExpandStep,
    ExtractTextStep,
    FormatSummaryStep,
    TranslateStep,
)


class Processor:
    """Runs the step sequence registered for a pipeline action.

    Steps run strictly in order; the cancellation token is checked before
    each one. Exceptions propagate to the caller untouched.
    """

    def __init__(self, pipelines: dict[PipelineAction, list[PipelineStep]]) -> None:
        self._pipelines = pipelines

    def process(self, context: PipelineContext) -> PipelineContext:
        steps = self._pipelines.get(context.action)
        if steps is None:
            raise ValueError(f"No pipeline registered for action '{context.action.value}'")
        Log.info(f"Running {context.action.value} pipeline for {context.file.name}")
        for step in steps:
            context.cancel_token.raise_if_cancelled()
            Log.debug(f"Step {type(step).__name__}")
            context = step.run(context)
        return context

    def close(self) -> None:
        """Close every distinct step across all pipelines."""
        closed: set[int] = set()
        for steps in self._pipelines.values():
            for step in steps:
                if id(step) not in closed:
                    closed.add(id(step))
                    step.close()


def build_pipelines(
    recorder: BaseAttachmentRecorder,
    extractor: BaseTextExtractor,
    analyzer: BaseAnalyzer,
) -> dict[PipelineAction, list[PipelineStep]]:
    extract = ExtractTextStep(extractor)
    format_summary = FormatSummaryStep()
    return {
        PipelineAction.ANALYZE: [
            CreateAttachmentStep(recorder),
            extract,
            AnalyzeStep(analyzer),
            format_summary,
        ],
        PipelineAction.REGENERATE: [extract, AnalyzeStep(analyzer), format_summary],
        PipelineAction.TRANSLATE: [TranslateStep(analyzer), format_summary],
        PipelineAction.EXPAND: [extract, ExpandStep(analyzer), format_summary],
    }


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with the adapters selected by settings."""
    return Processor(
        build_pipelines(
            recorder=AttachmentRecorderFactory.create(settings),
            extractor=TextExtractorFactory.create(settings),
            analyzer=AnalyzerFactory.create(settings),
        )
    )
