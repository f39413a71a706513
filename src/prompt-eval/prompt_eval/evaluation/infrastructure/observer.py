"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_pass_started(
        self, subject_id: str, context: str, total_evaluators: int
    ) -> None:
        self._log.info(
            "evaluation.pass.started",
            subject_id=subject_id,
            context=context,
            total_evaluators=total_evaluators,
        )

    def evaluation_pass_completed(
        self,
        subject_id: str,
        total_results: int,
        total_skipped: int,
        total_failed: int,
    ) -> None:
        self._log.info(
            "evaluation.pass.completed",
            subject_id=subject_id,
            total_results=total_results,
            total_skipped=total_skipped,
            total_failed=total_failed,
        )

    def evaluation_graph_invalid(self, subject_id: str, reason: str) -> None:
        self._log.error(
            "evaluation.graph.invalid", subject_id=subject_id, reason=reason
        )

    def evaluator_started(
        self, subject_id: str, evaluator_key: str, run_mode: str
    ) -> None:
        self._log.debug(
            "evaluation.evaluator.started",
            subject_id=subject_id,
            evaluator_key=evaluator_key,
            run_mode=run_mode,
        )

    def evaluator_completed(
        self,
        subject_id: str,
        evaluator_key: str,
        normalized_score: float,
        passed: bool,
        duration_ms: int,
    ) -> None:
        self._log.info(
            "evaluation.evaluator.completed",
            subject_id=subject_id,
            evaluator_key=evaluator_key,
            normalized_score=normalized_score,
            passed=passed,
            duration_ms=duration_ms,
        )

    def evaluator_failed(
        self, subject_id: str, evaluator_key: str, reason: str
    ) -> None:
        self._log.error(
            "evaluation.evaluator.failed",
            subject_id=subject_id,
            evaluator_key=evaluator_key,
            reason=reason,
        )

    def evaluator_skipped(
        self, subject_id: str, evaluator_key: str, depends_on: str, reason: str
    ) -> None:
        self._log.info(
            "evaluation.evaluator.skipped",
            subject_id=subject_id,
            evaluator_key=evaluator_key,
            depends_on=depends_on,
            reason=reason,
        )

    def result_callback_failed(
        self, subject_id: str, evaluator_key: str, reason: str
    ) -> None:
        self._log.error(
            "evaluation.result_callback.failed",
            subject_id=subject_id,
            evaluator_key=evaluator_key,
            reason=reason,
        )

    def evaluator_config_unknown(self, config_id: str, evaluator_key: str) -> None:
        self._log.warning(
            "evaluation.config.unknown_evaluator",
            config_id=config_id,
            evaluator_key=evaluator_key,
        )

    def overall_score_updated(
        self, subject_id: str, strategy: str, overall_score: float | None
    ) -> None:
        self._log.info(
            "evaluation.overall_score.updated",
            subject_id=subject_id,
            strategy=strategy,
            overall_score=overall_score,
        )
