"""CallableEvaluator — wraps a user-supplied scoring function as an evaluator."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput

type ScoreFunction = Callable[
    [EvaluationSubject, dict[str, Any]], EvaluatorOutput | Awaitable[EvaluatorOutput]
]


class CallableEvaluator:
    """Wraps a plain or async function so it can be registered as an evaluator."""

    def __init__(self, fn: ScoreFunction) -> None:
        self._fn = fn

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        result = self._fn(subject, params)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, EvaluatorOutput):
            raise TypeError(
                f"custom evaluator returned {type(result).__name__}, "
                "expected EvaluatorOutput"
            )
        return result


def custom_entry(
    key: str, fn: ScoreFunction, name: str, description: str = ""
) -> tuple[str, CallableEvaluator, EvaluatorMetadata]:
    """Build a registry entry for build_default_registry(extra=...)."""
    metadata = EvaluatorMetadata(
        key=key, name=name, description=description, category="custom"
    )
    return key, CallableEvaluator(fn), metadata
