from document_analyzer.controller.controller import DocumentAnalyzerController
from document_analyzer.controller.states import Error, Initial, PipelineState, Processing, Ready

__all__ = [
    "DocumentAnalyzerController",
    "Error",
    "Initial",
    "PipelineState",
    "Processing",
    "Ready",
]
