"""EvaluatorConfig — how one evaluator runs for one owner."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_MIN_DEPENDENCY_SCORE = 80.0


class RunMode(StrEnum):
    SYNC = "sync"
    ASYNC = "async"


class OwnerKind(StrEnum):
    PROMPT = "prompt"
    PROMPT_VERSION = "prompt_version"
    PROMPT_TEST = "prompt_test"


class OwnerRef(BaseModel, frozen=True):
    """Polymorphic reference to the record an EvaluatorConfig belongs to."""

    kind: OwnerKind
    id: str = Field(min_length=1)


class EvaluatorConfig(BaseModel, frozen=True):
    """Configuration for a single evaluator attached to a prompt, version or test.

    priority is ascending: lower values run first among configs that have no
    dependency relation. config is opaque here; the target evaluator validates it.
    """

    id: str = Field(min_length=1)
    owner: OwnerRef
    evaluator_key: str = Field(min_length=1)
    enabled: bool = True
    run_mode: RunMode = RunMode.SYNC
    priority: int = 0
    weight: float = Field(default=1.0, ge=0.0)
    depends_on: str | None = None
    min_dependency_score: float = Field(
        default=DEFAULT_MIN_DEPENDENCY_SCORE, ge=0.0, le=100.0
    )
    config: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_dependency(self) -> bool:
        return self.depends_on is not None

    @property
    def is_async(self) -> bool:
        return self.run_mode == RunMode.ASYNC
