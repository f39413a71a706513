"""Fake TestRunObserver for use in tests — records events without mocking."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RunAllStartedEvent:
    version_id: str
    test_names: list[str]
    runs_per_test: int
    max_concurrent: int


@dataclass(frozen=True)
class NothingToRunEvent:
    version_id: str
    reason: str


@dataclass(frozen=True)
class RunAllCompletedEvent:
    version_id: str
    total_runs: int
    elapsed_seconds: float


@dataclass(frozen=True)
class TestRunStartedEvent:
    __test__ = False

    run_id: str
    test_name: str
    dataset_row_id: str | None


@dataclass(frozen=True)
class TestRunCompletedEvent:
    __test__ = False

    run_id: str
    test_name: str
    passed: bool
    overall_score: float | None
    execution_time_ms: int


@dataclass(frozen=True)
class TestRunFailedEvent:
    __test__ = False

    run_id: str
    test_name: str
    reason: str


@dataclass(frozen=True)
class ProgressEvent:
    test_name: str
    completed: int
    total: int


@dataclass(frozen=True)
class GenerationRetryEvent:
    run_id: str
    test_name: str
    attempt: int
    reason: str
    backoff_seconds: float


type TestRunEvent = (
    RunAllStartedEvent
    | NothingToRunEvent
    | RunAllCompletedEvent
    | TestRunStartedEvent
    | TestRunCompletedEvent
    | TestRunFailedEvent
    | ProgressEvent
    | GenerationRetryEvent
)


class FakeTestRunObserver:
    """Records every emitted event in order for assertion in tests."""

    __test__ = False

    def __init__(self) -> None:
        self.events: list[TestRunEvent] = []

    def _of[T](self, kind: type[T]) -> list[T]:
        return [e for e in self.events if isinstance(e, kind)]

    @property
    def run_all_started_events(self) -> list[RunAllStartedEvent]:
        return self._of(RunAllStartedEvent)

    @property
    def nothing_to_run(self) -> list[NothingToRunEvent]:
        return self._of(NothingToRunEvent)

    @property
    def run_all_completed_events(self) -> list[RunAllCompletedEvent]:
        return self._of(RunAllCompletedEvent)

    @property
    def started(self) -> list[TestRunStartedEvent]:
        return self._of(TestRunStartedEvent)

    @property
    def completed(self) -> list[TestRunCompletedEvent]:
        return self._of(TestRunCompletedEvent)

    @property
    def failed(self) -> list[TestRunFailedEvent]:
        return self._of(TestRunFailedEvent)

    @property
    def progress(self) -> list[ProgressEvent]:
        return self._of(ProgressEvent)

    @property
    def retries(self) -> list[GenerationRetryEvent]:
        return self._of(GenerationRetryEvent)

    def run_all_started(
        self,
        version_id: str,
        test_names: list[str],
        runs_per_test: int,
        max_concurrent: int,
    ) -> None:
        self.events.append(
            RunAllStartedEvent(
                version_id=version_id,
                test_names=list(test_names),
                runs_per_test=runs_per_test,
                max_concurrent=max_concurrent,
            )
        )

    def run_all_nothing_to_run(self, version_id: str, reason: str) -> None:
        self.events.append(NothingToRunEvent(version_id=version_id, reason=reason))

    def run_all_completed(
        self, version_id: str, total_runs: int, elapsed_seconds: float
    ) -> None:
        self.events.append(
            RunAllCompletedEvent(
                version_id=version_id,
                total_runs=total_runs,
                elapsed_seconds=elapsed_seconds,
            )
        )

    def test_run_started(
        self, run_id: str, test_name: str, dataset_row_id: str | None
    ) -> None:
        self.events.append(
            TestRunStartedEvent(
                run_id=run_id, test_name=test_name, dataset_row_id=dataset_row_id
            )
        )

    def test_run_completed(
        self,
        run_id: str,
        test_name: str,
        passed: bool,
        overall_score: float | None,
        execution_time_ms: int,
    ) -> None:
        self.events.append(
            TestRunCompletedEvent(
                run_id=run_id,
                test_name=test_name,
                passed=passed,
                overall_score=overall_score,
                execution_time_ms=execution_time_ms,
            )
        )

    def test_run_failed(self, run_id: str, test_name: str, reason: str) -> None:
        self.events.append(
            TestRunFailedEvent(run_id=run_id, test_name=test_name, reason=reason)
        )

    def test_run_progress(self, test_name: str, completed: int, total: int) -> None:
        self.events.append(
            ProgressEvent(test_name=test_name, completed=completed, total=total)
        )

    def generation_retry(
        self,
        run_id: str,
        test_name: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        self.events.append(
            GenerationRetryEvent(
                run_id=run_id,
                test_name=test_name,
                attempt=attempt,
                reason=reason,
                backoff_seconds=backoff_seconds,
            )
        )
