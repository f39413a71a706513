"""ProjectConfig — root model of a prompt-eval YAML project file."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from prompt_eval.config.domain.evaluator_config import (
    DEFAULT_MIN_DEPENDENCY_SCORE,
    RunMode,
)
from prompt_eval.config.domain.execution import ExecutionConfig
from prompt_eval.testing.domain.prompt_test import Assertion
from prompt_eval.tracking.domain.prompt import AggregationStrategy


class EvaluatorEntry(BaseModel, frozen=True):
    """One evaluator attached to a prompt, version or test in the project file."""

    key: str = Field(min_length=1)
    enabled: bool = True
    run_mode: RunMode = RunMode.SYNC
    priority: int = 0
    weight: float = Field(default=1.0, ge=0.0)
    depends_on: str | None = None
    min_dependency_score: float = Field(
        default=DEFAULT_MIN_DEPENDENCY_SCORE, ge=0.0, le=100.0
    )
    config: dict[str, Any] = Field(default_factory=dict)


def _check_unique_enabled(entries: list[EvaluatorEntry]) -> list[EvaluatorEntry]:
    seen: set[str] = set()
    for entry in entries:
        if not entry.enabled:
            continue
        if entry.key in seen:
            raise ValueError(f"evaluator '{entry.key}' is enabled more than once")
        seen.add(entry.key)
    return entries


class _HasEvaluators(BaseModel, frozen=True):
    evaluators: list[EvaluatorEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_evaluators(self) -> "_HasEvaluators":
        _check_unique_enabled(self.evaluators)
        return self


class PromptEntry(_HasEvaluators, frozen=True):
    name: str = Field(min_length=1)
    aggregation_strategy: AggregationStrategy = AggregationStrategy.WEIGHTED_AVERAGE


class VersionEntry(_HasEvaluators, frozen=True):
    prompt: str = Field(min_length=1)
    template: str
    llm_config: dict[str, Any] = Field(default_factory=dict)


class TestEntry(_HasEvaluators, frozen=True):
    __test__ = False

    version: str = Field(min_length=1)
    description: str = ""
    template_variables: dict[str, Any] = Field(default_factory=dict)
    llm_config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    assertions: list[Assertion] = Field(default_factory=list)


class DatasetEntry(BaseModel, frozen=True):
    version: str = Field(min_length=1)
    rows: list[dict[str, Any]] = Field(default_factory=list)


class ProjectConfig(BaseModel, frozen=True):
    """Everything a `prompt-eval run` needs, keyed by user-chosen ids."""

    name: str = Field(min_length=1)
    version: str = "1"
    execution: ExecutionConfig = ExecutionConfig()
    prompts: dict[str, PromptEntry] = Field(min_length=1)
    versions: dict[str, VersionEntry] = Field(min_length=1)
    tests: dict[str, TestEntry] = Field(default_factory=dict)
    datasets: dict[str, DatasetEntry] = Field(default_factory=dict)
