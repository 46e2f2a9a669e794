from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LanguageModelRequest:
    """One chat-completion call: messages plus sampling limits."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    temperature: float = 0.7
    max_tokens: int = 2000
