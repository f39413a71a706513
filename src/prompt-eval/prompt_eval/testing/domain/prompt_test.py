"""PromptTest and Assertion — a reusable test case for one prompt version."""

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class AssertionKind(StrEnum):
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    MATCHES = "matches"
    MAX_LATENCY_MS = "max_latency_ms"


class Assertion(BaseModel, frozen=True):
    """An explicit pass/fail check on the generated response.

    value is the substring for contains/not_contains, a regular expression for
    matches, and a millisecond budget for max_latency_ms.
    """

    kind: AssertionKind
    value: str | int
    name: str | None = None

    @model_validator(mode="after")
    def _check_value(self) -> "Assertion":
        if self.kind == AssertionKind.MAX_LATENCY_MS:
            if not isinstance(self.value, int) or self.value < 0:
                raise ValueError("max_latency_ms requires a non-negative integer")
        elif not isinstance(self.value, str):
            raise ValueError(f"{self.kind} requires a string value")
        elif self.kind == AssertionKind.MATCHES:
            try:
                re.compile(self.value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression: {exc}") from exc
        return self

    @property
    def label(self) -> str:
        return self.name or f"{self.kind}:{self.value}"


class PromptTest(BaseModel, frozen=True):
    __test__ = False

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    prompt_version_id: str = Field(min_length=1)
    description: str = ""
    template_variables: dict[str, Any] = Field(default_factory=dict)
    llm_config: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    assertions: list[Assertion] = Field(default_factory=list)
