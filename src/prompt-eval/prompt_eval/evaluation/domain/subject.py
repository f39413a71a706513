"""EvaluationSubject — the thing being scored, plus the context it is scored in."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from prompt_eval.tracking.domain.response import LlmResponse


class EvaluationContext(StrEnum):
    TRACKED_CALL = "tracked_call"
    TEST_RUN = "test_run"


class EvaluationSubject(BaseModel, frozen=True):
    """A response under evaluation.

    subject_id identifies the record results attach to: the response itself for
    tracked calls, or the test run when scoring happens inside a test.
    """

    subject_id: str = Field(min_length=1)
    context: EvaluationContext
    response: LlmResponse
    variables: dict[str, Any] = Field(default_factory=dict)

    @property
    def response_text(self) -> str:
        return self.response.response_text or ""

    @property
    def rendered_prompt(self) -> str:
        return self.response.rendered_prompt
