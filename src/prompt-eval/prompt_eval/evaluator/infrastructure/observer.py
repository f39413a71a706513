"""Structlog implementation of the JudgeObserver port."""

import structlog


class StructlogJudgeObserver:
    """Delegates judge domain events to structlog.

    Satisfies the JudgeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_scoring_started(self, subject_id: str, model: str) -> None:
        self._log.info("judge.scoring_started", subject_id=subject_id, model=model)

    def judge_scoring_completed(
        self, subject_id: str, model: str, duration_ms: int
    ) -> None:
        self._log.info(
            "judge.scoring_completed",
            subject_id=subject_id,
            model=model,
            duration_ms=duration_ms,
        )

    def judge_scoring_failed(self, subject_id: str, model: str, reason: str) -> None:
        self._log.error(
            "judge.scoring_failed", subject_id=subject_id, model=model, reason=reason
        )

    def judge_high_temperature_warned(
        self, subject_id: str, temperature: float
    ) -> None:
        self._log.warning(
            "judge.high_temperature_warned",
            subject_id=subject_id,
            temperature=temperature,
        )
