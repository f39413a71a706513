"""Fake JudgeObserver for use in tests — records events without mocking."""


class FakeJudgeObserver:
    def __init__(self) -> None:
        self.started: list[dict[str, str]] = []
        self.completed: list[dict[str, str | int]] = []
        self.failed: list[dict[str, str]] = []
        self.temperature_warnings: list[dict[str, str | float]] = []

    def judge_scoring_started(self, subject_id: str, model: str) -> None:
        self.started.append({"subject_id": subject_id, "model": model})

    def judge_scoring_completed(
        self, subject_id: str, model: str, duration_ms: int
    ) -> None:
        self.completed.append(
            {"subject_id": subject_id, "model": model, "duration_ms": duration_ms}
        )

    def judge_scoring_failed(self, subject_id: str, model: str, reason: str) -> None:
        self.failed.append({"subject_id": subject_id, "model": model, "reason": reason})

    def judge_high_temperature_warned(
        self, subject_id: str, temperature: float
    ) -> None:
        self.temperature_warnings.append(
            {"subject_id": subject_id, "temperature": temperature}
        )
