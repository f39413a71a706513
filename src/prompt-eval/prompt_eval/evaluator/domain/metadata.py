"""EvaluatorMetadata — static description of a registered evaluator."""

from typing import Any

from pydantic import BaseModel, Field


class EvaluatorMetadata(BaseModel, frozen=True):
    key: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    category: str = "custom"
    param_schema: dict[str, Any] = Field(default_factory=dict)
    default_config: dict[str, Any] = Field(default_factory=dict)
    default_weight: float = Field(default=1.0, ge=0.0)
