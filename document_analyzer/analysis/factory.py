from document_analyzer.analysis.analyzer import Analyzer
from document_analyzer.analysis.azure_openai_client_adapter import AzureOpenAIClientAdapter
from document_analyzer.analysis.base import BaseAnalyzer
from document_analyzer.analysis.example_client_adapter import ExampleClientAdapter
from document_analyzer.config.settings import Settings
from document_analyzer.retry import RetryPolicy


class AnalyzerFactory:
    """Creates the analyzer for the configured language-model provider."""

    PROVIDERS = ("azure_openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return Analyzer(client=ExampleClientAdapter())
        if provider == "azure_openai":
            client = AzureOpenAIClientAdapter(
                endpoint=settings.azure_openai_endpoint,
                api_key=settings.azure_openai_api_key,
                deployment=settings.azure_openai_deployment,
                api_version=settings.azure_openai_api_version,
                timeout_seconds=settings.openai_timeout_seconds,
                retry_policy=RetryPolicy.from_settings(settings),
            )
            return Analyzer(client=client)
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
