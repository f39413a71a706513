"""Error types raised by storage infrastructure."""

from prompt_eval.core.errors import PromptEvalError


class DuplicateEvaluatorConfigError(PromptEvalError):
    """Raised when an owner would get two enabled configs for one evaluator key."""

    def __init__(self, owner: str, evaluator_key: str) -> None:
        super().__init__(
            f"Failed to add evaluator config: {owner} already has an enabled "
            f"'{evaluator_key}' config"
        )
        self.owner = owner
        self.evaluator_key = evaluator_key
