from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Tone = Literal["formal", "casual", "inspirational", "informational"]
REQUIRED_FIELDS = ("context", "idea", "audience", "tone", "cta")


class GenerateRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    context: str = Field(..., min_length=1, description="Company or project context.")
    idea: str = Field(..., min_length=1, description="Specific idea the post should convey.")
    audience: str = Field(..., min_length=1, description="Target audience, e.g. General Professional.")
    tone: Tone = Field(..., description="Tone of voice for the post.")
    cta: str = Field(..., min_length=1, description="Call to action, e.g. Ask a Question.")


class GenerateResponse(BaseModel):
    post: str


class ErrorResponse(BaseModel):
    error: str
