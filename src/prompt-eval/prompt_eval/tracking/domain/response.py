"""LlmResponse — one tracked call to a language-model provider."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ResponseStatus(StrEnum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class LlmResponse(BaseModel, frozen=True):
    """Immutable record of a provider call and its metrics.

    overall_score is the only field the evaluation pipeline writes back; it is
    None until at least one evaluator has produced a usable result.
    """

    id: str = Field(min_length=1)
    prompt_version_id: str = Field(min_length=1)
    rendered_prompt: str
    response_text: str | None = None
    provider: str = "openai"
    model: str = "gpt-4o"
    tokens_prompt: int | None = None
    tokens_completion: int | None = None
    tokens_total: int | None = None
    cost_usd: float | None = None
    response_time_ms: int | None = None
    status: ResponseStatus = ResponseStatus.SUCCESS
    error_message: str | None = None
    is_test_run: bool = False
    overall_score: float | None = None
