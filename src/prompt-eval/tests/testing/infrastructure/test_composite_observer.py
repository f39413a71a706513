"""Tests for CompositeTestRunObserver."""

from prompt_eval.testing.infrastructure.composite_observer import (
    CompositeTestRunObserver,
)
from tests.testing.fake_observer import FakeTestRunObserver


def _make_composite(*observers: FakeTestRunObserver) -> CompositeTestRunObserver:
    return CompositeTestRunObserver(observers=list(observers))


class TestCompositeTestRunObserverFanOut:
    """Every event is forwarded to all observers in order."""

    def test_run_all_started_forwarded_to_all(self) -> None:
        obs_a = FakeTestRunObserver()
        obs_b = FakeTestRunObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.run_all_started(
            version_id="v1", test_names=["t1"], runs_per_test=3, max_concurrent=4
        )

        assert obs_a.run_all_started_events[0].runs_per_test == 3
        assert obs_b.run_all_started_events[0].runs_per_test == 3

    def test_run_lifecycle_events_preserve_fields(self) -> None:
        obs = FakeTestRunObserver()
        composite = _make_composite(obs)

        composite.test_run_started(run_id="r1", test_name="t1", dataset_row_id="d-0")
        composite.test_run_completed(
            run_id="r1",
            test_name="t1",
            passed=True,
            overall_score=88.5,
            execution_time_ms=120,
        )
        composite.test_run_failed(run_id="r2", test_name="t1", reason="boom")

        assert obs.started[0].dataset_row_id == "d-0"
        assert obs.completed[0].overall_score == 88.5
        assert obs.failed[0].reason == "boom"

    def test_remaining_events_forwarded(self) -> None:
        obs_a = FakeTestRunObserver()
        obs_b = FakeTestRunObserver()
        composite = _make_composite(obs_a, obs_b)

        composite.run_all_nothing_to_run(version_id="v1", reason="none")
        composite.test_run_progress(test_name="t1", completed=1, total=2)
        composite.generation_retry(
            run_id="r1",
            test_name="t1",
            attempt=1,
            reason="rate limited",
            backoff_seconds=1.0,
        )
        composite.run_all_completed(version_id="v1", total_runs=2, elapsed_seconds=1.5)

        for obs in (obs_a, obs_b):
            assert len(obs.events) == 4
            assert obs.retries[0].backoff_seconds == 1.0
            assert obs.run_all_completed_events[0].elapsed_seconds == 1.5

    def test_empty_composite_is_a_no_op(self) -> None:
        composite = _make_composite()

        composite.test_run_failed(run_id="r1", test_name="t1", reason="boom")
