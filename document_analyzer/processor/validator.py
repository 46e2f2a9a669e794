from document_analyzer.config.settings import Settings
from document_analyzer.processor.models import DocumentFile, ValidationResult


def validate_file(file: DocumentFile, settings: Settings) -> ValidationResult:
    """Check extension and size against the configured limits.

    Only name and size metadata are inspected; the content is never read.
    """
    accepted = settings.accepted_extensions
    extension = file.extension
    if extension not in accepted:
        return ValidationResult(
            is_valid=False,
            reason=(
                f"File type {extension} is not accepted. "
                f"Please upload: {', '.join(accepted)}"
            ),
        )

    size_mb = file.size_mb
    if size_mb > settings.max_file_size_mb:
        return ValidationResult(
            is_valid=False,
            reason=(
                f"File size ({size_mb:.2f}MB) exceeds maximum allowed size of "
                f"{_format_limit(settings.max_file_size_mb)}MB"
            ),
        )
    return ValidationResult(is_valid=True)


def _format_limit(limit: float) -> str:
    return str(int(limit)) if float(limit).is_integer() else str(limit)
