"""LengthEvaluator — checks the response length against a min/max range."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "length"


class LengthParams(BaseModel, frozen=True):
    min_length: int = Field(default=10, ge=0)
    max_length: int = Field(default=2000, ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "LengthParams":
        if self.max_length < self.min_length:
            raise ValueError("max_length must be >= min_length")
        return self


METADATA = EvaluatorMetadata(
    key=KEY,
    name="Length Validator",
    description="Validates response length against min/max ranges",
    category="format",
    param_schema=LengthParams.model_json_schema(),
    default_config=LengthParams().model_dump(),
)


class LengthEvaluator:
    """Scores 100 when the response length is within range, 0 otherwise."""

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        cfg = parse_params(LengthParams, KEY, params)
        length = len(subject.response_text)
        within = cfg.min_length <= length <= cfg.max_length

        if length < cfg.min_length:
            feedback = (
                f"Response is too short ({length} chars). "
                f"Minimum: {cfg.min_length} chars."
            )
        elif length > cfg.max_length:
            feedback = (
                f"Response is too long ({length} chars). "
                f"Maximum: {cfg.max_length} chars."
            )
        else:
            feedback = (
                f"Response length is acceptable ({length} chars). "
                f"Range: {cfg.min_length}-{cfg.max_length} chars."
            )

        return EvaluatorOutput(
            score=100.0 if within else 0.0,
            passed=within,
            feedback=feedback,
            metadata={
                "response_length": length,
                "min_length": cfg.min_length,
                "max_length": cfg.max_length,
            },
        )
