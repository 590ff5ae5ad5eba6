import logging
from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import GenerationConfig as GeminiGenerationConfig
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from post_enhancer.config import Settings
from post_enhancer.errors import ProviderError
from post_enhancer.providers.llm.base import GenerationConfig, ProviderResponse

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


class GeminiProvider:
    """Gemini via the google-generativeai SDK with compact input/output logs."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.timeout = settings.llm_timeout_seconds

    async def generate(self, prompt: str, config: GenerationConfig) -> ProviderResponse:
        client_options = None
        if self.settings.gemini_api_endpoint:
            client_options = {"api_endpoint": self.settings.gemini_api_endpoint}
        genai.configure(api_key=self.settings.ai_provider_api_key, client_options=client_options)
        model = genai.GenerativeModel(
            model_name=config.model,
            generation_config=GeminiGenerationConfig(
                temperature=config.temperature,
                top_k=config.top_k,
                top_p=config.top_p,
                max_output_tokens=config.max_output_tokens,
            ),
            safety_settings=[
                {
                    "category": HarmCategory[setting.category],
                    "threshold": HarmBlockThreshold[setting.threshold],
                }
                for setting in config.safety_settings
            ],
        )
        logger.info(
            "gemini.request model=%s prompt_chars=%d temperature=%.2f top_k=%d top_p=%.2f max_output_tokens=%d",
            config.model,
            len(prompt),
            config.temperature,
            config.top_k,
            config.top_p,
            config.max_output_tokens,
        )

        request_options = {"timeout": self.timeout} if self.timeout is not None else None
        try:
            response = await model.generate_content_async(
                [{"role": "user", "parts": [prompt]}],
                request_options=request_options,
            )
        except google_exceptions.GoogleAPICallError as exc:
            status_code = int(exc.code) if exc.code is not None else None
            detail = self._error_detail(exc, status_code)
            logger.error("gemini.error status_code=%s detail=%s", status_code, detail)
            raise ProviderError(detail, status_code=status_code) from exc

        parsed = self._parse_response(response)
        logger.info(
            "gemini.response text_chars=%d block_reason=%s finish_reason=%s",
            len(parsed.text),
            parsed.block_reason or "none",
            parsed.finish_reason or "none",
        )
        return parsed

    @classmethod
    def _parse_response(cls, response: Any) -> ProviderResponse:
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = cls._enum_name(getattr(feedback, "block_reason", None))

        candidates = list(getattr(response, "candidates", None) or [])
        if not candidates:
            return ProviderResponse(text="", block_reason=block_reason)

        first = candidates[0]
        content = getattr(first, "content", None)
        parts = getattr(content, "parts", None) or []
        text = "".join(
            getattr(part, "text", None) or ""
            for part in parts
            if not getattr(part, "thought", False)
        )
        return ProviderResponse(
            text=text,
            block_reason=block_reason,
            finish_reason=cls._enum_name(getattr(first, "finish_reason", None)),
        )

    @staticmethod
    def _enum_name(value: Any) -> str | None:
        # Proto enums are IntEnums whose zero member is *_UNSPECIFIED.
        if value is None or value == 0:
            return None
        name = getattr(value, "name", None) or str(value)
        if name.endswith("_UNSPECIFIED"):
            return None
        return name

    def _error_detail(self, exc: google_exceptions.GoogleAPICallError, status_code: int | None) -> str:
        details = [f"status_code={status_code}" if status_code is not None else ""]
        details.append(f"message={exc.message or exc.__class__.__name__}")
        return self._clip(" ".join(part for part in details if part), ERROR_LOG_LIMIT)

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"
