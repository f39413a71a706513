"""Error types raised by the evaluation domain."""

from prompt_eval.core.errors import PromptEvalError


class InvalidEvaluatorGraphError(PromptEvalError):
    """Raised when evaluator dependencies reference unknown keys or form a cycle.

    Detected before any evaluator runs, so nothing is persisted for the pass.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to build evaluator graph: {reason}")
        self.reason = reason


class EvaluatorExecutionError(PromptEvalError):
    """Raised when a single evaluator invocation fails or times out.

    Never propagates out of a pass: the engine records it as a failed result.
    """

    def __init__(self, evaluator_key: str, reason: str) -> None:
        super().__init__(f"Failed to run evaluator '{evaluator_key}': {reason}")
        self.evaluator_key = evaluator_key
        self.reason = reason


class AggregationError(PromptEvalError):
    """Raised when an aggregation strategy cannot be applied."""

    def __init__(self, strategy: str, reason: str) -> None:
        super().__init__(f"Failed to aggregate with '{strategy}': {reason}")


class ResponseNotEvaluableError(PromptEvalError):
    """Raised when a response has no successful output to score."""

    def __init__(self, response_id: str, status: str) -> None:
        super().__init__(
            f"Failed to evaluate response '{response_id}': status is '{status}'"
        )
        self.response_id = response_id
        self.status = status
