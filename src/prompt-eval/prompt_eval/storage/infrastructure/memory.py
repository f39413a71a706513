"""InMemoryStore — dict-backed implementation of every repository port."""

from prompt_eval.config.domain.evaluator_config import EvaluatorConfig, OwnerRef
from prompt_eval.core.errors import RecordNotFoundError
from prompt_eval.evaluation.domain.result import EvaluationResult
from prompt_eval.storage.infrastructure.errors import DuplicateEvaluatorConfigError
from prompt_eval.testing.domain.dataset import Dataset
from prompt_eval.testing.domain.prompt_test import PromptTest
from prompt_eval.testing.domain.test_run import TestRun
from prompt_eval.tracking.domain.prompt import Prompt, PromptVersion
from prompt_eval.tracking.domain.response import LlmResponse


class InMemoryStore:
    """Holds every record in process memory.

    Results are keyed by (subject_id, evaluator_key), which is the uniqueness
    constraint the evaluation engine relies on. All methods are synchronous and
    never yield, so callers on one event loop see consistent state.

    Satisfies the Store protocol structurally.
    """

    def __init__(self) -> None:
        self._prompts: dict[str, Prompt] = {}
        self._versions: dict[str, PromptVersion] = {}
        self._configs: dict[str, EvaluatorConfig] = {}
        self._responses: dict[str, LlmResponse] = {}
        self._results: dict[tuple[str, str], EvaluationResult] = {}
        self._tests: dict[str, PromptTest] = {}
        self._datasets: dict[str, Dataset] = {}
        self._test_runs: dict[str, TestRun] = {}

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def add_prompt(self, prompt: Prompt) -> None:
        self._prompts[prompt.id] = prompt

    def add_version(self, version: PromptVersion) -> None:
        self._versions[version.id] = version

    def get_prompt(self, prompt_id: str) -> Prompt:
        return _lookup(self._prompts, "prompt", prompt_id)

    def get_version(self, version_id: str) -> PromptVersion:
        return _lookup(self._versions, "prompt version", version_id)

    # ------------------------------------------------------------------
    # Evaluator configs
    # ------------------------------------------------------------------

    def add_config(self, config: EvaluatorConfig) -> None:
        """Store a config.

        Raises:
            DuplicateEvaluatorConfigError: if the owner already has an enabled
                config for the same evaluator key.
        """
        if config.enabled and any(
            existing.enabled
            and existing.owner == config.owner
            and existing.evaluator_key == config.evaluator_key
            and existing.id != config.id
            for existing in self._configs.values()
        ):
            raise DuplicateEvaluatorConfigError(
                owner=f"{config.owner.kind} '{config.owner.id}'",
                evaluator_key=config.evaluator_key,
            )
        self._configs[config.id] = config

    def configs_for_owner(self, owner: OwnerRef) -> list[EvaluatorConfig]:
        return [c for c in self._configs.values() if c.owner == owner]

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    def add_response(self, response: LlmResponse) -> None:
        self._responses[response.id] = response

    def get_response(self, response_id: str) -> LlmResponse:
        return _lookup(self._responses, "response", response_id)

    def save_response(self, response: LlmResponse) -> None:
        self.get_response(response.id)
        self._responses[response.id] = response

    # ------------------------------------------------------------------
    # Evaluation results
    # ------------------------------------------------------------------

    def upsert_result(self, result: EvaluationResult) -> EvaluationResult:
        self._results[(result.subject_id, result.evaluator_key)] = result
        return result

    def delete_results_for_subject(self, subject_id: str) -> int:
        doomed = [key for key in self._results if key[0] == subject_id]
        for key in doomed:
            del self._results[key]
        return len(doomed)

    def results_for_subject(self, subject_id: str) -> list[EvaluationResult]:
        return [r for (sid, _), r in self._results.items() if sid == subject_id]

    # ------------------------------------------------------------------
    # Tests and datasets
    # ------------------------------------------------------------------

    def add_test(self, test: PromptTest) -> None:
        self._tests[test.id] = test

    def get_test(self, test_id: str) -> PromptTest:
        return _lookup(self._tests, "prompt test", test_id)

    def tests_for_version(self, version_id: str) -> list[PromptTest]:
        return [t for t in self._tests.values() if t.prompt_version_id == version_id]

    def add_dataset(self, dataset: Dataset) -> None:
        self._datasets[dataset.id] = dataset

    def get_dataset(self, dataset_id: str) -> Dataset:
        return _lookup(self._datasets, "dataset", dataset_id)

    # ------------------------------------------------------------------
    # Test runs
    # ------------------------------------------------------------------

    def add_test_run(self, run: TestRun) -> None:
        self._test_runs[run.id] = run

    def save_test_run(self, run: TestRun) -> None:
        self.get_test_run(run.id)
        self._test_runs[run.id] = run

    def get_test_run(self, run_id: str) -> TestRun:
        return _lookup(self._test_runs, "test run", run_id)

    def test_runs_for_test(self, test_id: str) -> list[TestRun]:
        return [r for r in self._test_runs.values() if r.prompt_test_id == test_id]

    def all_test_runs(self) -> list[TestRun]:
        return list(self._test_runs.values())


def _lookup[T](records: dict[str, T], kind: str, record_id: str) -> T:
    try:
        return records[record_id]
    except KeyError:
        raise RecordNotFoundError(kind=kind, record_id=record_id) from None
