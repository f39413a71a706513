"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during an evaluation pass.

    Implementations may log to structlog, record for tests, or stream to a UI.
    """

    def evaluation_pass_started(
        self, subject_id: str, context: str, total_evaluators: int
    ) -> None: ...

    def evaluation_pass_completed(
        self,
        subject_id: str,
        total_results: int,
        total_skipped: int,
        total_failed: int,
    ) -> None: ...

    def evaluation_graph_invalid(self, subject_id: str, reason: str) -> None: ...

    def evaluator_started(
        self, subject_id: str, evaluator_key: str, run_mode: str
    ) -> None: ...

    def evaluator_completed(
        self,
        subject_id: str,
        evaluator_key: str,
        normalized_score: float,
        passed: bool,
        duration_ms: int,
    ) -> None: ...

    def evaluator_failed(
        self, subject_id: str, evaluator_key: str, reason: str
    ) -> None: ...

    def evaluator_skipped(
        self, subject_id: str, evaluator_key: str, depends_on: str, reason: str
    ) -> None: ...

    def result_callback_failed(
        self, subject_id: str, evaluator_key: str, reason: str
    ) -> None: ...

    def evaluator_config_unknown(
        self, config_id: str, evaluator_key: str
    ) -> None: ...

    def overall_score_updated(
        self, subject_id: str, strategy: str, overall_score: float | None
    ) -> None: ...
