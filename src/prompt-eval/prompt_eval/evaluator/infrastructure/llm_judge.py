"""LlmJudgeEvaluator — model-judge scoring through LiteLLM structured output."""

import time
from typing import Any

import litellm
from pydantic import BaseModel, Field, model_validator

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.observer import JudgeObserver
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.errors import JudgeInvocationError
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "llm_judge"

# Normalized share of the judge's scale a response must reach to pass.
PASS_THRESHOLD = 0.8

CRITERIA_DESCRIPTIONS: dict[str, str] = {
    "accuracy": "Is the response factually correct and accurate?",
    "helpfulness": "Is the response helpful and addresses the user's needs?",
    "tone": "Is the tone appropriate and professional?",
    "clarity": "Is the response clear and easy to understand?",
    "completeness": "Does the response fully address the question?",
    "conciseness": "Is the response concise without unnecessary information?",
}

_SYSTEM_PROMPT = """\
You are an expert evaluator of AI-generated responses. Score the response you \
are given against each listed criterion and overall, using only the numeric \
scale you are told to use. Keep your feedback specific and grounded in the \
criteria so that a human reviewer can audit the score.
"""


class LlmJudgeParams(BaseModel, frozen=True):
    judge_model: str = Field(default="gpt-4o", min_length=1)
    criteria: list[str] = Field(
        default_factory=lambda: ["accuracy", "helpfulness", "tone"], min_length=1
    )
    score_min: float = 0.0
    score_max: float = 5.0
    temperature: float = Field(default=0.0, ge=0.0)
    custom_instructions: str | None = None

    @model_validator(mode="after")
    def _check_scale(self) -> "LlmJudgeParams":
        if self.score_max <= self.score_min:
            raise ValueError("score_max must be greater than score_min")
        return self


class JudgeVerdict(BaseModel, frozen=True):
    """Structured output requested from the judge model."""

    overall_score: float
    criteria_scores: dict[str, float] = Field(default_factory=dict)
    feedback: str


METADATA = EvaluatorMetadata(
    key=KEY,
    name="LLM Judge",
    description="Uses an LLM to evaluate response quality",
    category="quality",
    param_schema=LlmJudgeParams.model_json_schema(),
    default_config=LlmJudgeParams().model_dump(),
)


class LlmJudgeEvaluator:
    """Evaluator that delegates scoring to a judge model via LiteLLM.

    Meant to run in async mode: each call is a provider round-trip.
    """

    def __init__(self, observer: JudgeObserver) -> None:
        litellm.suppress_debug_info = True
        self._observer = observer

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        """Invoke the judge model and translate its verdict into an EvaluatorOutput.

        Raises:
            EvaluatorParameterError: if params are invalid.
            JudgeInvocationError: if the LLM call fails or the response cannot
                be parsed into a JudgeVerdict.
        """
        cfg = parse_params(LlmJudgeParams, KEY, params)
        if cfg.temperature > 0.0:
            self._observer.judge_high_temperature_warned(
                subject_id=subject.subject_id, temperature=cfg.temperature
            )

        judge_prompt = build_judge_prompt(subject=subject, cfg=cfg)
        self._observer.judge_scoring_started(
            subject_id=subject.subject_id, model=cfg.judge_model
        )

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=cfg.judge_model,
                temperature=cfg.temperature,
                response_format=JudgeVerdict,
                messages=[
                    {"role": "system", "content": _SYSTEM_PROMPT},
                    {"role": "user", "content": judge_prompt},
                ],
            )
        except Exception as exc:
            reason = str(exc)
            self._observer.judge_scoring_failed(
                subject_id=subject.subject_id, model=cfg.judge_model, reason=reason
            )
            raise JudgeInvocationError(reason=reason) from exc

        duration_ms = int((time.monotonic() - start) * 1000)

        raw_content: str = response.choices[0].message.content
        try:
            verdict = JudgeVerdict.model_validate_json(raw_content)
        except Exception as exc:
            reason = f"Failed to parse judge response: {exc}"
            self._observer.judge_scoring_failed(
                subject_id=subject.subject_id, model=cfg.judge_model, reason=reason
            )
            raise JudgeInvocationError(reason=reason) from exc

        self._observer.judge_scoring_completed(
            subject_id=subject.subject_id,
            model=cfg.judge_model,
            duration_ms=duration_ms,
        )

        normalized = (verdict.overall_score - cfg.score_min) / (
            cfg.score_max - cfg.score_min
        )
        return EvaluatorOutput(
            score=verdict.overall_score,
            score_min=cfg.score_min,
            score_max=cfg.score_max,
            passed=normalized >= PASS_THRESHOLD,
            feedback=verdict.feedback,
            metadata={
                "judge_model": cfg.judge_model,
                "criteria": cfg.criteria,
                "criteria_scores": verdict.criteria_scores,
                "judge_prompt": judge_prompt,
                "duration_ms": duration_ms,
            },
        )


def build_judge_prompt(subject: EvaluationSubject, cfg: LlmJudgeParams) -> str:
    criteria_list = "\n".join(
        f"- {c.capitalize()}: {CRITERIA_DESCRIPTIONS.get(c, f'Evaluate {c}')}"
        for c in cfg.criteria
    )
    custom_section = (
        f"\n\n## Additional Instructions\n{cfg.custom_instructions}"
        if cfg.custom_instructions
        else ""
    )
    return (
        f"## Original Prompt\n{subject.rendered_prompt}\n\n"
        f"## Response To Evaluate\n{subject.response_text}\n\n"
        f"## Evaluation Criteria\n{criteria_list}{custom_section}\n\n"
        "## Output Format\n"
        f"- overall_score: a number from {cfg.score_min:g} to {cfg.score_max:g}\n"
        f"- criteria_scores: a score for each criterion ({', '.join(cfg.criteria)})\n"
        "- feedback: a detailed explanation of your scores"
    )
