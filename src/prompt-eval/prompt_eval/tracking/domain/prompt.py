"""Prompt and PromptVersion — the owners evaluator configs attach to."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class AggregationStrategy(StrEnum):
    SIMPLE_AVERAGE = "simple_average"
    WEIGHTED_AVERAGE = "weighted_average"
    MINIMUM = "minimum"
    CUSTOM = "custom"


class Prompt(BaseModel, frozen=True):
    """A named prompt; its evaluator configs apply to every version by default."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    aggregation_strategy: AggregationStrategy = AggregationStrategy.WEIGHTED_AVERAGE


class PromptVersion(BaseModel, frozen=True):
    """One template revision of a prompt."""

    id: str = Field(min_length=1)
    prompt_id: str = Field(min_length=1)
    template: str
    llm_config: dict[str, Any] = Field(default_factory=dict)
