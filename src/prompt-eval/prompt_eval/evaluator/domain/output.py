"""EvaluatorOutput — the raw outcome a capability returns before normalization."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class EvaluatorOutput(BaseModel, frozen=True):
    """Score on the evaluator's own scale, with its pass/fail verdict."""

    score: float
    score_min: float = 0.0
    score_max: float = 100.0
    passed: bool
    feedback: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_scale(self) -> "EvaluatorOutput":
        if self.score_max < self.score_min:
            raise ValueError("score_max must be greater than or equal to score_min")
        return self
