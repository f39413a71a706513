"""EvaluationEngine — runs one subject's evaluators in dependency order."""

import asyncio
import time
import uuid
from collections.abc import Callable, Coroutine
from typing import Any

from prompt_eval.config.domain.evaluator_config import EvaluatorConfig
from prompt_eval.evaluation.domain.errors import (
    EvaluatorExecutionError,
    InvalidEvaluatorGraphError,
)
from prompt_eval.evaluation.domain.observer import EvaluationObserver
from prompt_eval.evaluation.domain.plan import ExecutionPlan
from prompt_eval.evaluation.domain.result import EvaluationResult, SkippedEvaluator
from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.registry import EvaluatorRegistry
from prompt_eval.storage.domain.repository import EvaluationResultRepository

type ResultCallback = Callable[[EvaluationResult], None]


class EvaluationPass:
    """Live view of one subject's evaluation.

    Every config in the pass owns a future that resolves to its result, or to
    None when it was skipped. Dependents await that future, so sync and async
    evaluators share one scheduling model.
    """

    def __init__(
        self,
        subject: EvaluationSubject,
        configs: list[EvaluatorConfig],
        observer: EvaluationObserver,
        on_result: list[ResultCallback],
    ) -> None:
        loop = asyncio.get_running_loop()
        self._subject = subject
        self._observer = observer
        self._on_result = on_result
        self._futures: dict[str, asyncio.Future[EvaluationResult | None]] = {
            config.evaluator_key: loop.create_future() for config in configs
        }
        self._results: list[EvaluationResult] = []
        self._skipped: list[SkippedEvaluator] = []
        self._tasks: list[asyncio.Task[None]] = []
        self._lock = asyncio.Lock()
        self._completed = False
        self._superseded = False

    @property
    def subject_id(self) -> str:
        return self._subject.subject_id

    @property
    def superseded(self) -> bool:
        return self._superseded

    @property
    def results(self) -> list[EvaluationResult]:
        return list(self._results)

    @property
    def skipped(self) -> list[SkippedEvaluator]:
        return list(self._skipped)

    @property
    def pending(self) -> int:
        return sum(1 for future in self._futures.values() if not future.done())

    @property
    def done(self) -> bool:
        return self.pending == 0

    def outcome_of(self, evaluator_key: str) -> asyncio.Future[EvaluationResult | None]:
        return self._futures[evaluator_key]

    def defer(self, work: Coroutine[Any, Any, None]) -> None:
        self._tasks.append(asyncio.create_task(work))

    async def wait(self) -> list[EvaluationResult]:
        """Block until every deferred evaluator has resolved; return all results.

        Tasks cancelled by a newer pass over the same subject are not errors.
        """
        if self._tasks:
            outcomes = await asyncio.gather(*self._tasks, return_exceptions=True)
            for outcome in outcomes:
                if isinstance(outcome, Exception):
                    raise outcome
        return self.results

    def supersede(self) -> None:
        """Stop this pass from persisting anything further and cancel its tasks."""
        self._superseded = True
        for task in self._tasks:
            if not task.done():
                task.cancel()

    async def publish(self, result: EvaluationResult) -> None:
        async with self._lock:
            self._results.append(result)
            self._futures[result.evaluator_key].set_result(result)
            for callback in self._on_result:
                try:
                    callback(result)
                except Exception as exc:
                    self._observer.result_callback_failed(
                        subject_id=self.subject_id,
                        evaluator_key=result.evaluator_key,
                        reason=f"{type(exc).__name__}: {exc}",
                    )
        self.complete_if_resolved()

    async def skip(self, skipped: SkippedEvaluator) -> None:
        async with self._lock:
            self._skipped.append(skipped)
            self._futures[skipped.evaluator_key].set_result(None)
        self.complete_if_resolved()

    def abandon(self, evaluator_key: str) -> None:
        future = self._futures[evaluator_key]
        if not future.done():
            future.set_result(None)
        self.complete_if_resolved()

    def complete_if_resolved(self) -> None:
        if self._completed or not self.done:
            return
        self._completed = True
        self._observer.evaluation_pass_completed(
            subject_id=self.subject_id,
            total_results=len(self._results),
            total_skipped=len(self._skipped),
            total_failed=sum(1 for r in self._results if r.failed),
        )


class EvaluationEngine:
    """Executes a resolved config set against one subject.

    The graph is validated before anything runs or is persisted. Sync configs
    whose dependency has already resolved run inline; async configs, and any
    config whose dependency is still in flight, are deferred as tasks.
    """

    def __init__(
        self,
        registry: EvaluatorRegistry,
        results: EvaluationResultRepository,
        observer: EvaluationObserver,
        evaluator_timeout_seconds: float = 60.0,
    ) -> None:
        self._registry = registry
        self._results = results
        self._observer = observer
        self._timeout = evaluator_timeout_seconds
        self._passes: dict[str, EvaluationPass] = {}

    async def evaluate(
        self,
        subject: EvaluationSubject,
        configs: list[EvaluatorConfig],
        on_result: ResultCallback | None = None,
    ) -> EvaluationPass:
        """Start an evaluation pass and return once every inline evaluator is done.

        The subject's previous results are removed first, so re-evaluating never
        leaves two results for the same evaluator key. A pass still running for
        the same subject is superseded: its deferred evaluators are cancelled and
        nothing it produces afterwards is persisted.

        Raises:
            InvalidEvaluatorGraphError: on a cyclic or dangling dependency. No
                evaluator has run and nothing has been persisted.
        """
        try:
            plan = ExecutionPlan.build(configs)
        except InvalidEvaluatorGraphError as exc:
            self._observer.evaluation_graph_invalid(
                subject_id=subject.subject_id, reason=exc.reason
            )
            raise

        previous = self._passes.pop(subject.subject_id, None)
        if previous is not None:
            previous.supersede()
        self._results.delete_results_for_subject(subject.subject_id)
        ordered = plan.ordered
        evaluation = EvaluationPass(
            subject=subject,
            configs=ordered,
            observer=self._observer,
            on_result=[on_result] if on_result is not None else [],
        )
        self._passes = {
            key: live for key, live in self._passes.items() if not live.done
        }
        self._passes[subject.subject_id] = evaluation
        self._observer.evaluation_pass_started(
            subject_id=subject.subject_id,
            context=subject.context,
            total_evaluators=len(ordered),
        )

        for config in ordered:
            dependency_pending = (
                config.has_dependency
                and not evaluation.outcome_of(config.depends_on).done()
            )
            if config.is_async or dependency_pending:
                evaluation.defer(self._run_config(evaluation, subject, config))
            else:
                await self._run_config(evaluation, subject, config)

        evaluation.complete_if_resolved()
        return evaluation

    async def _run_config(
        self,
        evaluation: EvaluationPass,
        subject: EvaluationSubject,
        config: EvaluatorConfig,
    ) -> None:
        try:
            if evaluation.superseded:
                return
            if config.has_dependency:
                dependency = await evaluation.outcome_of(config.depends_on)
                reason = _skip_reason(config, dependency)
                if reason is not None:
                    self._observer.evaluator_skipped(
                        subject_id=subject.subject_id,
                        evaluator_key=config.evaluator_key,
                        depends_on=config.depends_on,
                        reason=reason,
                    )
                    await evaluation.skip(
                        SkippedEvaluator(
                            evaluator_key=config.evaluator_key,
                            depends_on=config.depends_on,
                            reason=reason,
                        )
                    )
                    return

            result = await self._invoke(subject, config)
            if evaluation.superseded:
                return
            stored = self._results.upsert_result(result)
            await evaluation.publish(stored)
        finally:
            # Dependents must never wait forever on an evaluator that crashed.
            evaluation.abandon(config.evaluator_key)

    async def _invoke(
        self, subject: EvaluationSubject, config: EvaluatorConfig
    ) -> EvaluationResult:
        self._observer.evaluator_started(
            subject_id=subject.subject_id,
            evaluator_key=config.evaluator_key,
            run_mode=config.run_mode,
        )
        started_at = time.monotonic()
        try:
            evaluator = self._registry.get(config.evaluator_key)
            async with asyncio.timeout(self._timeout):
                output = await evaluator.score(subject, dict(config.config))
        except TimeoutError:
            error = EvaluatorExecutionError(
                evaluator_key=config.evaluator_key,
                reason=f"timed out after {self._timeout:g}s",
            )
            return self._failed_result(subject, config, error, "TimeoutError")
        except Exception as exc:
            error = EvaluatorExecutionError(
                evaluator_key=config.evaluator_key, reason=str(exc)
            )
            return self._failed_result(subject, config, error, type(exc).__name__)

        result = _result_from_output(subject, config, output)
        self._observer.evaluator_completed(
            subject_id=subject.subject_id,
            evaluator_key=config.evaluator_key,
            normalized_score=result.normalized_score,
            passed=result.passed,
            duration_ms=int((time.monotonic() - started_at) * 1000),
        )
        return result

    def _failed_result(
        self,
        subject: EvaluationSubject,
        config: EvaluatorConfig,
        error: EvaluatorExecutionError,
        error_type: str,
    ) -> EvaluationResult:
        self._observer.evaluator_failed(
            subject_id=subject.subject_id,
            evaluator_key=config.evaluator_key,
            reason=error.reason,
        )
        return EvaluationResult(
            id=str(uuid.uuid4()),
            subject_id=subject.subject_id,
            evaluator_key=config.evaluator_key,
            evaluator_config_id=config.id,
            score=0.0,
            passed=False,
            feedback=str(error),
            metadata={"error": error.reason, "error_type": error_type},
            evaluation_context=subject.context,
            weight=config.weight,
            failed=True,
        )


def _result_from_output(
    subject: EvaluationSubject, config: EvaluatorConfig, output: EvaluatorOutput
) -> EvaluationResult:
    return EvaluationResult(
        id=str(uuid.uuid4()),
        subject_id=subject.subject_id,
        evaluator_key=config.evaluator_key,
        evaluator_config_id=config.id,
        score=output.score,
        score_min=output.score_min,
        score_max=output.score_max,
        passed=output.passed,
        feedback=output.feedback,
        metadata=output.metadata,
        evaluation_context=subject.context,
        weight=config.weight,
    )


def _skip_reason(
    config: EvaluatorConfig, dependency: EvaluationResult | None
) -> str | None:
    if dependency is None:
        return f"dependency '{config.depends_on}' produced no result"
    if dependency.failed:
        return f"dependency '{config.depends_on}' failed"
    if dependency.normalized_score < config.min_dependency_score:
        return (
            f"dependency '{config.depends_on}' scored "
            f"{dependency.normalized_score:g}, below {config.min_dependency_score:g}"
        )
    return None
