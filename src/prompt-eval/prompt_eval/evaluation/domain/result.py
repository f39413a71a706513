"""EvaluationResult and SkippedEvaluator — what one evaluation pass produces."""

from typing import Any

from pydantic import BaseModel, Field

from prompt_eval.evaluation.domain.normalize import normalize_score
from prompt_eval.evaluation.domain.subject import EvaluationContext


class EvaluationResult(BaseModel, frozen=True):
    """The persisted outcome of one evaluator run against one subject.

    At most one result exists per (subject_id, evaluator_key). weight is copied
    from the producing config so aggregation needs nothing but the results.
    """

    id: str = Field(min_length=1)
    subject_id: str = Field(min_length=1)
    evaluator_key: str = Field(min_length=1)
    evaluator_config_id: str | None = None
    score: float
    score_min: float = 0.0
    score_max: float = 100.0
    passed: bool
    feedback: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    evaluation_context: EvaluationContext
    weight: float = Field(default=1.0, ge=0.0)
    failed: bool = False

    @property
    def normalized_score(self) -> float:
        return normalize_score(self.score, self.score_min, self.score_max)


class SkippedEvaluator(BaseModel, frozen=True):
    """An evaluator that did not run because its dependency gate was not met."""

    evaluator_key: str
    depends_on: str
    reason: str
