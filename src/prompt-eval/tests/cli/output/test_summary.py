"""Tests for summarize()."""

import pytest

from prompt_eval.cli.output.summary import summarize
from prompt_eval.testing.domain.test_run import TestRun


def _make_run(
    test_id: str,
    run_id: str,
    score: float | None = None,
    passed: bool = True,
    errored: bool = False,
    execution_time_ms: int = 100,
) -> TestRun:
    run = TestRun(id=run_id, prompt_test_id=test_id, prompt_version_id="v1").start()
    if errored:
        return run.fail(error_message="boom")
    return run.succeed(
        passed=passed,
        passed_evaluators=1 if passed else 0,
        failed_evaluators=0 if passed else 1,
        assertion_results={},
        overall_score=score,
        execution_time_ms=execution_time_ms,
        response_id=f"resp-{run_id}",
        cost_usd=None,
    )


class TestSummarize:
    def test_groups_by_test_in_first_occurrence_order(self) -> None:
        runs = [
            _make_run("t2", "a", 50.0),
            _make_run("t1", "b", 90.0),
            _make_run("t2", "c", 70.0),
        ]

        summaries = summarize(runs)

        assert [s.test_id for s in summaries] == ["t2", "t1"]
        assert summaries[0].total == 2

    def test_tallies_and_statistics(self) -> None:
        runs = [
            _make_run("t1", "a", 90.0, execution_time_ms=100),
            _make_run("t1", "b", 70.0, passed=False, execution_time_ms=300),
            _make_run("t1", "c", errored=True),
        ]

        (summary,) = summarize(runs)

        assert summary.passed == 1
        assert summary.failed == 1
        assert summary.errored == 1
        assert summary.score_mean == 80.0
        assert summary.score_stddev == pytest.approx(14.142, abs=1e-3)
        assert summary.execution_ms_mean == 200.0
        assert summary.pass_rate == pytest.approx(33.333, abs=1e-3)

    def test_single_run_has_zero_stddev(self) -> None:
        (summary,) = summarize([_make_run("t1", "a", 90.0)])

        assert summary.score_stddev == 0.0

    def test_all_errored_has_no_score(self) -> None:
        (summary,) = summarize([_make_run("t1", "a", errored=True)])

        assert summary.score_mean is None
        assert summary.execution_ms_mean is None

    def test_empty_input(self) -> None:
        assert summarize([]) == []
