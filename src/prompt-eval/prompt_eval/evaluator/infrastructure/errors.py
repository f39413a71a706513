"""Error types raised by evaluator infrastructure."""

from prompt_eval.core.errors import PromptEvalError


class UnknownEvaluatorError(PromptEvalError):
    """Raised when a key is not present in the evaluator registry."""

    def __init__(self, evaluator_key: str) -> None:
        super().__init__(
            f"Failed to find evaluator: '{evaluator_key}' is not registered"
        )
        self.evaluator_key = evaluator_key


class DuplicateEvaluatorError(PromptEvalError):
    """Raised when the same key is registered twice."""

    def __init__(self, evaluator_key: str) -> None:
        super().__init__(
            f"Failed to register evaluator: '{evaluator_key}' is already registered"
        )


class RegistryFrozenError(PromptEvalError):
    """Raised when registering into a registry that has already been frozen."""

    def __init__(self, evaluator_key: str) -> None:
        super().__init__(
            f"Failed to register evaluator '{evaluator_key}': registry is frozen"
        )


class EvaluatorParameterError(PromptEvalError):
    """Raised when an evaluator's parameters fail validation."""

    def __init__(self, evaluator_key: str, reason: str) -> None:
        super().__init__(
            f"Failed to validate parameters for evaluator '{evaluator_key}': {reason}"
        )
        self.evaluator_key = evaluator_key


class JudgeInvocationError(PromptEvalError):
    """Raised when the judge cannot be invoked or returns an unparseable response."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to score response: {reason}", retriable=retriable)
