from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ai_provider_api_key: str = Field(default="", alias="AI_PROVIDER_API_KEY")
    # Empty keeps the SDK default endpoint.
    gemini_api_endpoint: str = Field(default="", alias="GEMINI_API_ENDPOINT")
    gemini_model: str = Field(default="gemini-2.5-pro", alias="GEMINI_MODEL")
    # None leaves the timeout to the provider.
    llm_timeout_seconds: float | None = Field(default=None, alias="LLM_TIMEOUT_SECONDS")

    def model_post_init(self, __context: Any) -> None:  # type: ignore[override]
        self.ai_provider_api_key = self.ai_provider_api_key.strip()
        self.gemini_api_endpoint = self.gemini_api_endpoint.strip()
        self.gemini_model = self.gemini_model.strip() or "gemini-2.5-pro"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
