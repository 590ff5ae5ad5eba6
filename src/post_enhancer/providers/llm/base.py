from dataclasses import dataclass, field
from typing import Protocol

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"


@dataclass(frozen=True)
class SafetySetting:
    category: str
    threshold: str

    def as_payload(self) -> dict[str, str]:
        return {"category": self.category, "threshold": self.threshold}


def _default_safety_settings() -> tuple[SafetySetting, ...]:
    return tuple(SafetySetting(category, BLOCK_MEDIUM_AND_ABOVE) for category in HARM_CATEGORIES)


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable sampling and safety configuration for one provider call."""

    model: str
    temperature: float = 0.7
    top_k: int = 1
    top_p: float = 1.0
    max_output_tokens: int = 2048
    safety_settings: tuple[SafetySetting, ...] = field(default_factory=_default_safety_settings)


@dataclass(frozen=True)
class ProviderResponse:
    """Provider output before validation.

    ``block_reason`` is set when the prompt itself was refused; ``finish_reason``
    describes why the first candidate stopped, if there was one.
    """

    text: str = ""
    block_reason: str | None = None
    finish_reason: str | None = None


class TextProvider(Protocol):
    async def generate(self, prompt: str, config: GenerationConfig) -> ProviderResponse: ...
