from dataclasses import dataclass

from document_analyzer.processor.error_mapper import ErrorInfo
from document_analyzer.processor.models import DocumentAnalysis, DocumentFile
from document_analyzer.processor.pipeline import PipelineAction


@dataclass(frozen=True)
class Initial:
    """No file and no analysis."""


@dataclass(frozen=True)
class Processing:
    """A run is in flight."""

    file_name: str
    action: PipelineAction


@dataclass(frozen=True)
class Ready:
    """The last run succeeded."""

    analysis: DocumentAnalysis
    file: DocumentFile
    summary: str


@dataclass(frozen=True)
class Error:
    """The last run failed."""

    error: ErrorInfo


PipelineState = Initial | Processing | Ready | Error
