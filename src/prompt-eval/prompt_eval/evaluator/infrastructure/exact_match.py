"""ExactMatchEvaluator — binary comparison against an expected text."""

from typing import Any

from pydantic import BaseModel

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "exact_match"

_PREVIEW_CHARS = 100


class ExactMatchParams(BaseModel, frozen=True):
    expected_text: str = ""
    case_sensitive: bool = False
    trim_whitespace: bool = True


METADATA = EvaluatorMetadata(
    key=KEY,
    name="Exact Match",
    description="Checks if the response exactly matches the expected text",
    category="content",
    param_schema=ExactMatchParams.model_json_schema(),
    default_config=ExactMatchParams().model_dump(),
)


class ExactMatchEvaluator:
    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        cfg = parse_params(ExactMatchParams, KEY, params)
        expected = _normalize(cfg.expected_text, cfg)
        actual = _normalize(subject.response_text, cfg)
        matched = expected == actual

        if matched:
            feedback = "Response exactly matches expected output"
        else:
            feedback = (
                "Response does not match expected output.\n\n"
                f'Expected: "{_preview(expected)}"\n\nActual: "{_preview(actual)}"'
            )

        return EvaluatorOutput(
            score=100.0 if matched else 0.0,
            passed=matched,
            feedback=feedback,
            metadata={
                "case_sensitive": cfg.case_sensitive,
                "trim_whitespace": cfg.trim_whitespace,
            },
        )


def _normalize(text: str, cfg: ExactMatchParams) -> str:
    if cfg.trim_whitespace:
        text = text.strip()
    if not cfg.case_sensitive:
        text = text.lower()
    return text


def _preview(text: str) -> str:
    if len(text) > _PREVIEW_CHARS:
        return f"{text[:_PREVIEW_CHARS]}..."
    return text
