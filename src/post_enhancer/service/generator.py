import logging
from dataclasses import dataclass

from post_enhancer.api.schemas import GenerateRequest
from post_enhancer.workflow.generation import PostGenerationWorkflow

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000


@dataclass(frozen=True)
class GenerationResult:
    post: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GenerateService:
    def __init__(self, workflow: PostGenerationWorkflow | None = None) -> None:
        self.workflow = workflow or PostGenerationWorkflow()

    async def generate(self, request: GenerateRequest) -> GenerationResult:
        try:
            post = await self.workflow.run(request)
        except Exception as exc:
            message = str(exc) or "An unexpected error occurred."
            logger.error(
                "generate.failed type=%s detail=%s",
                exc.__class__.__name__,
                self._clip(message, ERROR_LOG_LIMIT),
            )
            return GenerationResult(error=message)
        logger.info(
            "generate.ok chars=%d tone=%s audience=%s",
            len(post),
            request.tone,
            self._clip(request.audience, 80),
        )
        return GenerationResult(post=post)

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"
