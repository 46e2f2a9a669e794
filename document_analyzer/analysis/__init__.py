from document_analyzer.analysis.analyzer import Analyzer
from document_analyzer.analysis.base import BaseAnalyzer
from document_analyzer.analysis.factory import AnalyzerFactory

__all__ = ["Analyzer", "AnalyzerFactory", "BaseAnalyzer"]
