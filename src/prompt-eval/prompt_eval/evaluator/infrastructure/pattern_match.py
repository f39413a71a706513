"""PatternMatchEvaluator — regex checks with all/any matching."""

import re
from typing import Any

from pydantic import BaseModel

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.errors import EvaluatorParameterError
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "pattern_match"

# "/body/flags" delimited form; anything else is matched literally.
_DELIMITED = re.compile(r"\A/(.*)/([imx]*)\Z", re.DOTALL)
_FLAGS = {"i": re.IGNORECASE, "m": re.DOTALL, "x": re.VERBOSE}


class PatternMatchParams(BaseModel, frozen=True):
    patterns: list[str] = []
    match_all: bool = True


METADATA = EvaluatorMetadata(
    key=KEY,
    name="Pattern Match",
    description="Checks if the response matches regex patterns",
    category="content",
    param_schema=PatternMatchParams.model_json_schema(),
    default_config=PatternMatchParams().model_dump(),
)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile "/body/flags" as a regex, or any other string as a literal."""
    delimited = _DELIMITED.match(pattern)
    if delimited is None:
        return re.compile(re.escape(pattern))
    flags = 0
    for flag in delimited.group(2):
        flags |= _FLAGS[flag]
    try:
        return re.compile(delimited.group(1), flags)
    except re.error as exc:
        raise EvaluatorParameterError(
            evaluator_key=KEY, reason=f"invalid pattern {pattern!r}: {exc}"
        ) from exc


class PatternMatchEvaluator:
    """Passes when all (or, with match_all=False, any) patterns match.

    An empty pattern list never passes.
    """

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        cfg = parse_params(PatternMatchParams, KEY, params)
        if not cfg.patterns:
            return EvaluatorOutput(
                score=0.0, passed=False, feedback="No patterns configured"
            )

        text = subject.response_text
        matched = [p for p in cfg.patterns if compile_pattern(p).search(text)]
        unmatched = [p for p in cfg.patterns if p not in matched]
        passed = not unmatched if cfg.match_all else bool(matched)

        if not unmatched:
            feedback = f"All {len(cfg.patterns)} pattern(s) matched successfully"
        elif cfg.match_all:
            feedback = (
                f"Failed to match {len(unmatched)} pattern(s): {', '.join(unmatched)}"
            )
        elif matched:
            feedback = f"Matched {len(matched)} of {len(cfg.patterns)} pattern(s)"
        else:
            feedback = f"No patterns matched. Tried: {', '.join(cfg.patterns)}"

        return EvaluatorOutput(
            score=100.0 if passed else 0.0,
            passed=passed,
            feedback=feedback,
            metadata={"matched_patterns": matched, "unmatched_patterns": unmatched},
        )
