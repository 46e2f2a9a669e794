import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

_BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class DocumentFile:
    """A user-supplied document. Never mutated during a run."""

    name: str
    size_bytes: int
    mime_type: str
    content: bytes = field(repr=False)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "DocumentFile":
        content = path.read_bytes()
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(
            name=path.name,
            size_bytes=len(content),
            mime_type=mime_type,
            content=content,
        )

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot, prefixed with a dot."""
        return "." + self.name.rsplit(".", 1)[-1].lower()

    @property
    def size_mb(self) -> float:
        return self.size_bytes / _BYTES_PER_MB


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reason: str | None = None


@dataclass(frozen=True)
class OwnerReference:
    """Host record the attachment is linked to, e.g. ("account", "<guid>")."""

    entity: str
    record_id: str


class AnalysisMode(str, Enum):
    TEXT = "text"
    VISION = "vision"


class JobStatus(str, Enum):
    NOT_STARTED = "notStarted"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def parse(cls, raw: object) -> "JobStatus":
        """Map a service status string; anything unrecognised counts as running."""
        value = str(raw or "").strip().replace("-", "").replace("_", "").lower()
        for status in cls:
            if status.value.lower() == value:
                return status
        return cls.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


@dataclass
class ExtractionJob:
    """Tracks one asynchronous extraction job while it is being polled."""

    operation_location: str
    status: JobStatus = JobStatus.NOT_STARTED
    attempts: int = 0


@dataclass(frozen=True)
class ExtractionResult:
    """Text obtained for a document and how it must be analyzed."""

    text: str
    mode: AnalysisMode = AnalysisMode.TEXT


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, raw: object) -> "RiskLevel":
        """Map free-form input to a level; unknown values become MEDIUM."""
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


@dataclass(frozen=True)
class Risk:
    level: RiskLevel
    description: str


@dataclass(frozen=True)
class DocumentAnalysis:
    """Structured analysis of a document, replaced wholesale by every transform."""

    executive_summary: str
    key_points: tuple[str, ...] = ()
    risks: tuple[Risk, ...] = ()
    next_actions: tuple[str, ...] = ()
    source: ExtractionResult | None = None

    @property
    def raw_text(self) -> str | None:
        return self.source.text if self.source is not None else None

    def with_source(self, source: ExtractionResult | None) -> "DocumentAnalysis":
        return DocumentAnalysis(
            executive_summary=self.executive_summary,
            key_points=self.key_points,
            risks=self.risks,
            next_actions=self.next_actions,
            source=source,
        )

    def to_payload(self) -> dict[str, object]:
        """The four analysis fields in the JSON shape the model is asked for."""
        return {
            "executiveSummary": self.executive_summary,
            "keyPoints": list(self.key_points),
            "risks": [
                {"level": risk.level.value, "description": risk.description}
                for risk in self.risks
            ],
            "nextActions": list(self.next_actions),
        }
