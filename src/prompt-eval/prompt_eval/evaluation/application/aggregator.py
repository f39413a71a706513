"""Score aggregation — combines per-evaluator results into one overall score."""

import statistics
from collections.abc import Callable, Sequence

from prompt_eval.evaluation.domain.errors import AggregationError
from prompt_eval.evaluation.domain.result import EvaluationResult
from prompt_eval.tracking.domain.prompt import AggregationStrategy

type CustomAggregator = Callable[[Sequence[EvaluationResult]], float | None]


def check_strategy(
    strategy: AggregationStrategy, custom: CustomAggregator | None = None
) -> None:
    """Raise AggregationError if strategy cannot be applied.

    Callers check before any evaluator runs, so a misconfigured prompt fails
    with nothing persisted.
    """
    if strategy == AggregationStrategy.CUSTOM and custom is None:
        raise _no_custom_function(strategy)


def aggregate(
    results: Sequence[EvaluationResult],
    strategy: AggregationStrategy,
    custom: CustomAggregator | None = None,
) -> float | None:
    """Return the overall 0-100 score for results, or None when there are none.

    Pure: the same result set always yields the same score, so callers recompute
    from the full set whenever a new result arrives.

    Raises:
        AggregationError: if strategy is custom and no callable was supplied.
    """
    if not results:
        return None

    match strategy:
        case AggregationStrategy.SIMPLE_AVERAGE:
            score = _simple_average(results)
        case AggregationStrategy.WEIGHTED_AVERAGE:
            score = _weighted_average(results)
        case AggregationStrategy.MINIMUM:
            score = min(r.normalized_score for r in results)
        case AggregationStrategy.CUSTOM:
            if custom is None:
                raise _no_custom_function(strategy)
            score = custom(results)
            if score is None:
                return None

    return round(score, 2)


def _no_custom_function(strategy: AggregationStrategy) -> AggregationError:
    return AggregationError(
        strategy=strategy, reason="no custom aggregation function set"
    )


def _simple_average(results: Sequence[EvaluationResult]) -> float:
    return statistics.mean(r.normalized_score for r in results)


def _weighted_average(results: Sequence[EvaluationResult]) -> float:
    weighted = [r for r in results if r.weight > 0]
    total_weight = sum(r.weight for r in weighted)
    if total_weight == 0:
        return _simple_average(results)
    return sum(r.normalized_score * r.weight for r in weighted) / total_weight
