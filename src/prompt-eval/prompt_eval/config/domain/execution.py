"""Execution configuration models."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel, frozen=True):
    max_attempts: int = Field(default=1, ge=1)
    initial_backoff_seconds: float = Field(default=1.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1)


class ExecutionConfig(BaseModel, frozen=True):
    max_concurrent: int = Field(default=4, ge=1)
    evaluator_timeout_seconds: float = Field(default=60.0, gt=0)
    generation_timeout_seconds: float = Field(default=120.0, gt=0)
    retry: RetryConfig = RetryConfig()
