from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Immutable once loaded; a new instance is built between runs when the
    host configuration changes.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    # Language-model service (Azure OpenAI chat completions)
    analysis_provider: str = "azure_openai"
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment: str = "gpt-4o"
    azure_openai_api_version: str = "2024-02-15-preview"
    openai_timeout_seconds: int = 60

    # Extraction service (Document Intelligence prebuilt-read)
    document_intelligence_endpoint: str = ""
    document_intelligence_key: str = ""
    document_intelligence_api_version: str = "2023-07-31"
    extraction_timeout_seconds: int = 30
    extraction_poll_interval_seconds: float = 2.0
    extraction_max_poll_attempts: int = 30
    local_pdf_engine: str = "none"
    local_pdf_max_pages: int | None = None

    # Upload limits
    max_file_size_mb: float = 10
    accepted_file_types: str = ".pdf,.png,.jpg,.jpeg"

    # Transient failure retry (extraction submit and language-model call)
    retry_max_attempts: int = 3
    retry_initial_backoff_seconds: float = 0.5
    retry_max_backoff_seconds: float = 8.0

    # Attachment storage
    attachment_backend: str = "local"
    attachments_root: str = "attachments"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "document_analyzer"
    db_username: str = "document_analyzer"
    db_password: str = "secret"

    dataverse_url: str = ""
    dataverse_token: str = ""
    dataverse_api_version: str = "v9.2"
    dataverse_timeout_seconds: int = 30

    @property
    def accepted_extensions(self) -> tuple[str, ...]:
        """Accepted extensions, lower-cased and trimmed, in configured order."""
        return tuple(
            part.strip().lower()
            for part in self.accepted_file_types.split(",")
            if part.strip()
        )

    @property
    def extraction_configured(self) -> bool:
        return bool(self.document_intelligence_endpoint and self.document_intelligence_key)
