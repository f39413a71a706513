"""Base exception class for all prompt-eval-specific errors."""


class PromptEvalError(Exception):
    """Base class for all prompt-eval errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable


class RecordNotFoundError(PromptEvalError):
    """Raised when a repository lookup finds no record for the given id."""

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(f"Failed to find {kind}: no record with id '{record_id}'")
        self.kind = kind
        self.record_id = record_id
