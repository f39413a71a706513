"""EvaluationService — the explicit entry point for scoring a tracked response."""

from dataclasses import dataclass

from prompt_eval.config.application.resolver import EvaluatorConfigResolver
from prompt_eval.evaluation.application.aggregator import (
    CustomAggregator,
    aggregate,
    check_strategy,
)
from prompt_eval.evaluation.application.engine import EvaluationEngine, EvaluationPass
from prompt_eval.evaluation.domain.errors import ResponseNotEvaluableError
from prompt_eval.evaluation.domain.observer import EvaluationObserver
from prompt_eval.evaluation.domain.result import EvaluationResult
from prompt_eval.evaluation.domain.subject import EvaluationContext, EvaluationSubject
from prompt_eval.storage.domain.repository import (
    EvaluationResultRepository,
    PromptRepository,
    ResponseRepository,
)
from prompt_eval.tracking.domain.prompt import AggregationStrategy
from prompt_eval.tracking.domain.response import ResponseStatus


@dataclass(frozen=True)
class EvaluationOutcome:
    """Scores available when evaluate() returns.

    overall_score and results cover the inline evaluators only; the response's
    stored overall_score keeps moving as deferred results land. Await
    evaluation.wait() for the final set.
    """

    response_id: str
    overall_score: float | None
    results: list[EvaluationResult]
    evaluation: EvaluationPass


class EvaluationService:
    """Wires resolver, engine and aggregator for one tracked response.

    Called by whatever creates responses, right after the response is stored.
    """

    def __init__(
        self,
        prompts: PromptRepository,
        responses: ResponseRepository,
        results: EvaluationResultRepository,
        resolver: EvaluatorConfigResolver,
        engine: EvaluationEngine,
        observer: EvaluationObserver,
        custom_aggregator: CustomAggregator | None = None,
    ) -> None:
        self._prompts = prompts
        self._responses = responses
        self._results = results
        self._resolver = resolver
        self._engine = engine
        self._observer = observer
        self._custom_aggregator = custom_aggregator

    async def evaluate(self, response_id: str) -> EvaluationOutcome:
        """Run every applicable evaluator against a stored response.

        Raises:
            RecordNotFoundError: if the response, its version or prompt is missing.
            ResponseNotEvaluableError: if the response did not complete successfully.
            InvalidEvaluatorGraphError: if the resolved configs form an invalid graph.
            AggregationError: if the prompt uses custom aggregation and no
                callable was supplied. Raised before any evaluator runs.
        """
        response = self._responses.get_response(response_id)
        if response.status != ResponseStatus.SUCCESS:
            raise ResponseNotEvaluableError(
                response_id=response_id, status=response.status
            )

        version = self._prompts.get_version(response.prompt_version_id)
        strategy = self._prompts.get_prompt(version.prompt_id).aggregation_strategy
        check_strategy(strategy, self._custom_aggregator)
        configs = self._resolver.resolve(version.id)
        subject = EvaluationSubject(
            subject_id=response.id,
            context=EvaluationContext.TRACKED_CALL,
            response=response,
        )

        evaluation = await self._engine.evaluate(
            subject,
            configs,
            on_result=lambda _result: self._refresh_score(response_id, strategy),
        )
        overall = self._refresh_score(response_id, strategy)
        return EvaluationOutcome(
            response_id=response_id,
            overall_score=overall,
            results=evaluation.results,
            evaluation=evaluation,
        )

    def _refresh_score(
        self, response_id: str, strategy: AggregationStrategy
    ) -> float | None:
        # Recompute from the full stored set so a missed update cannot drift.
        overall = aggregate(
            self._results.results_for_subject(response_id),
            strategy,
            custom=self._custom_aggregator,
        )
        response = self._responses.get_response(response_id)
        if response.overall_score != overall:
            self._responses.save_response(
                response.model_copy(update={"overall_score": overall})
            )
        self._observer.overall_score_updated(
            subject_id=response_id, strategy=strategy, overall_score=overall
        )
        return overall
