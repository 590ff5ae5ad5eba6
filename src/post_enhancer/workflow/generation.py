import logging

from post_enhancer.api.schemas import GenerateRequest
from post_enhancer.config import Settings, get_settings
from post_enhancer.errors import (
    ConfigurationError,
    EmptyResponseError,
    GenerationError,
    ProviderError,
    SafetyBlockError,
)
from post_enhancer.providers.llm.base import GenerationConfig, TextProvider
from post_enhancer.providers.llm.gemini import GeminiProvider
from post_enhancer.workflow.prompt import build_prompt

logger = logging.getLogger(__name__)

# Candidate finish reasons that mean the output was stopped by content policy,
# with or without partial text.
BLOCKED_FINISH_REASONS = frozenset(
    {"SAFETY", "RECITATION", "LANGUAGE", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}
)


class PostGenerationWorkflow:
    """Linear pipeline: build prompt -> one provider call -> validate response."""

    def __init__(self, settings: Settings | None = None, provider: TextProvider | None = None) -> None:
        self.settings = settings or get_settings()
        self.provider = provider or GeminiProvider(self.settings)
        self.config = GenerationConfig(model=self.settings.gemini_model)

    async def run(self, request: GenerateRequest) -> str:
        if not self.settings.ai_provider_api_key:
            raise ConfigurationError("AI_PROVIDER_API_KEY is not set in environment variables.")

        prompt = build_prompt(request)
        logger.info("llm.call model=%s prompt_chars=%d", self.config.model, len(prompt))
        try:
            response = await self.provider.generate(prompt, self.config)
        except GenerationError:
            raise
        except Exception as exc:
            raise ProviderError(str(exc) or exc.__class__.__name__) from exc

        if response.block_reason:
            raise SafetyBlockError(response.block_reason)
        if response.finish_reason in BLOCKED_FINISH_REASONS:
            raise SafetyBlockError(response.finish_reason)
        if not response.text:
            raise EmptyResponseError()
        return response.text
