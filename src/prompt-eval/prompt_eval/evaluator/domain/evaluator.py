"""Evaluator Protocol — structural interface for every scoring capability."""

from typing import Any, Protocol

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.output import EvaluatorOutput


class Evaluator(Protocol):
    """One pluggable scoring strategy.

    Implementations are stateless with respect to subjects: the same instance is
    shared by every concurrent evaluation pass once the registry is frozen.
    """

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput: ...
