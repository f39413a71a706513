"""Repository ports — the persistence operations the pipeline consumes."""

from typing import Protocol

from prompt_eval.config.domain.evaluator_config import EvaluatorConfig, OwnerRef
from prompt_eval.evaluation.domain.result import EvaluationResult
from prompt_eval.testing.domain.dataset import Dataset
from prompt_eval.testing.domain.prompt_test import PromptTest
from prompt_eval.testing.domain.test_run import TestRun
from prompt_eval.tracking.domain.prompt import Prompt, PromptVersion
from prompt_eval.tracking.domain.response import LlmResponse


class PromptRepository(Protocol):
    def get_prompt(self, prompt_id: str) -> Prompt: ...

    def get_version(self, version_id: str) -> PromptVersion: ...


class EvaluatorConfigRepository(Protocol):
    def add_config(self, config: EvaluatorConfig) -> None: ...

    def configs_for_owner(self, owner: OwnerRef) -> list[EvaluatorConfig]:
        """Return every config for owner, enabled or not."""
        ...


class ResponseRepository(Protocol):
    def add_response(self, response: LlmResponse) -> None: ...

    def get_response(self, response_id: str) -> LlmResponse: ...

    def save_response(self, response: LlmResponse) -> None: ...


class EvaluationResultRepository(Protocol):
    """Stores at most one result per (subject_id, evaluator_key)."""

    def upsert_result(self, result: EvaluationResult) -> EvaluationResult: ...

    def delete_results_for_subject(self, subject_id: str) -> int: ...

    def results_for_subject(self, subject_id: str) -> list[EvaluationResult]: ...


class PromptTestRepository(Protocol):
    def get_test(self, test_id: str) -> PromptTest: ...

    def tests_for_version(self, version_id: str) -> list[PromptTest]: ...


class DatasetRepository(Protocol):
    def get_dataset(self, dataset_id: str) -> Dataset: ...


class TestRunRepository(Protocol):
    def add_test_run(self, run: TestRun) -> None: ...

    def save_test_run(self, run: TestRun) -> None: ...

    def get_test_run(self, run_id: str) -> TestRun: ...

    def test_runs_for_test(self, test_id: str) -> list[TestRun]: ...


class Store(
    PromptRepository,
    EvaluatorConfigRepository,
    ResponseRepository,
    EvaluationResultRepository,
    PromptTestRepository,
    DatasetRepository,
    TestRunRepository,
    Protocol,
):
    """Every repository port behind one object, for wiring convenience."""
