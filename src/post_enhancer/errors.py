class PostEnhancerError(Exception):
    """Base class for failures surfaced to API callers as server faults."""


class ConfigurationError(PostEnhancerError):
    """Service is misconfigured; detected before any provider call."""


class GenerationError(PostEnhancerError):
    """A provider call was attempted and did not yield usable text."""

    prefix = "Failed to generate post. Reason: "

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}{detail}")


class ProviderError(GenerationError):
    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)


class SafetyBlockError(GenerationError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Request was blocked for safety reasons: {reason}")


class EmptyResponseError(GenerationError):
    def __init__(self) -> None:
        super().__init__("The AI returned an empty response.")
