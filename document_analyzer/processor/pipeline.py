from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from document_analyzer.cancellation import CancellationToken
from document_analyzer.processor.models import (
    DocumentAnalysis,
    DocumentFile,
    ExtractionResult,
    OwnerReference,
)


class PipelineAction(str, Enum):
    ANALYZE = "analyze"
    REGENERATE = "regenerate"
    TRANSLATE = "translate"
    EXPAND = "expand"


@dataclass(slots=True)
class PipelineContext:
    """Everything one run reads and produces; discarded when the run ends."""

    action: PipelineAction
    file: DocumentFile
    cancel_token: CancellationToken
    owner: OwnerReference | None = None
    current_analysis: DocumentAnalysis | None = None
    target_language: str = ""
    attachment_id: str | None = None
    extraction: ExtractionResult | None = None
    analysis: DocumentAnalysis | None = None
    summary: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step; no-op by default."""
