"""JudgeObserver port — domain events emitted during model-judge invocations."""

from typing import Protocol


class JudgeObserver(Protocol):
    """Observer port for judge domain events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def judge_scoring_started(self, subject_id: str, model: str) -> None: ...

    def judge_scoring_completed(
        self, subject_id: str, model: str, duration_ms: int
    ) -> None: ...

    def judge_scoring_failed(
        self, subject_id: str, model: str, reason: str
    ) -> None: ...

    def judge_high_temperature_warned(
        self, subject_id: str, temperature: float
    ) -> None: ...
