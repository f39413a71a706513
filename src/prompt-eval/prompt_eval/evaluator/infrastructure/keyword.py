"""KeywordEvaluator — required and forbidden keyword checks."""

from typing import Any

from pydantic import BaseModel

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "keyword"

# Share of the score carried by required keywords when both lists are set.
_REQUIRED_WEIGHT = 0.7


class KeywordParams(BaseModel, frozen=True):
    required_keywords: list[str] = []
    forbidden_keywords: list[str] = []
    case_sensitive: bool = False


METADATA = EvaluatorMetadata(
    key=KEY,
    name="Keyword Checker",
    description="Checks for required and forbidden keywords in the response",
    category="content",
    param_schema=KeywordParams.model_json_schema(),
    default_config=KeywordParams().model_dump(),
)


class KeywordEvaluator:
    """Scores the share of required keywords present, penalising forbidden ones.

    With both lists configured the score is 70% required coverage and 30%
    forbidden avoidance. Passing requires every required keyword and no
    forbidden keyword.
    """

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        cfg = parse_params(KeywordParams, KEY, params)
        text = subject.response_text
        if not cfg.case_sensitive:
            text = text.lower()

        def present(keyword: str) -> bool:
            return (keyword if cfg.case_sensitive else keyword.lower()) in text

        missing = [k for k in cfg.required_keywords if not present(k)]
        found_forbidden = [k for k in cfg.forbidden_keywords if present(k)]

        score = _score(
            required=len(cfg.required_keywords),
            required_present=len(cfg.required_keywords) - len(missing),
            forbidden=len(cfg.forbidden_keywords),
            forbidden_present=len(found_forbidden),
        )

        parts: list[str] = []
        if missing:
            parts.append(f"Missing required keywords: {', '.join(missing)}")
        if found_forbidden:
            parts.append(f"Contains forbidden keywords: {', '.join(found_forbidden)}")

        return EvaluatorOutput(
            score=score,
            passed=not missing and not found_forbidden,
            feedback=". ".join(parts) if parts else "All keyword requirements met.",
            metadata={
                "required_keywords": cfg.required_keywords,
                "forbidden_keywords": cfg.forbidden_keywords,
                "missing_keywords": missing,
                "found_forbidden_keywords": found_forbidden,
                "case_sensitive": cfg.case_sensitive,
            },
        )


def _score(
    required: int, required_present: int, forbidden: int, forbidden_present: int
) -> float:
    if required == 0 and forbidden == 0:
        return 100.0

    required_score = 100.0 * required_present / required if required else 0.0
    forbidden_penalty = 100.0 * forbidden_present / forbidden if forbidden else 0.0

    if required == 0:
        return float(round(100.0 - forbidden_penalty))
    if forbidden == 0:
        return float(round(required_score))
    return float(
        round(
            required_score * _REQUIRED_WEIGHT
            + (100.0 - forbidden_penalty) * (1 - _REQUIRED_WEIGHT)
        )
    )
