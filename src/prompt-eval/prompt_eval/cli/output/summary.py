"""Summary — groups finished TestRuns by test and computes statistics."""

import statistics
from dataclasses import dataclass

from prompt_eval.testing.domain.test_run import TestRun, TestRunStatus


@dataclass(frozen=True)
class TestSummary:
    """All runs of one prompt test with pass/fail tallies and score statistics."""

    __test__ = False

    test_id: str
    runs: list[TestRun]
    passed: int
    failed: int
    errored: int
    score_mean: float | None
    score_stddev: float
    execution_ms_mean: float | None

    @property
    def total(self) -> int:
        return len(self.runs)

    @property
    def pass_rate(self) -> float:
        return 100.0 * self.passed / self.total if self.runs else 0.0


def _stddev(values: list[float]) -> float:
    """Return sample stddev for N >= 2, else 0.0."""
    if len(values) < 2:
        return 0.0
    return statistics.stdev(values)


def summarize(runs: list[TestRun]) -> list[TestSummary]:
    """Group runs by prompt_test_id, preserving first-occurrence order.

    Errored runs count toward total but not toward the score statistics.
    """
    groups: dict[str, list[TestRun]] = {}
    for run in runs:
        groups.setdefault(run.prompt_test_id, []).append(run)

    summaries: list[TestSummary] = []
    for test_id, group in groups.items():
        errored = [r for r in group if r.status == TestRunStatus.ERROR]
        completed = [r for r in group if r.status == TestRunStatus.SUCCESS]
        scores = [r.overall_score for r in completed if r.overall_score is not None]
        timings = [
            float(r.execution_time_ms)
            for r in completed
            if r.execution_time_ms is not None
        ]
        summaries.append(
            TestSummary(
                test_id=test_id,
                runs=group,
                passed=sum(1 for r in completed if r.passed),
                failed=sum(1 for r in completed if not r.passed),
                errored=len(errored),
                score_mean=statistics.mean(scores) if scores else None,
                score_stddev=_stddev(scores),
                execution_ms_mean=statistics.mean(timings) if timings else None,
            )
        )
    return summaries
