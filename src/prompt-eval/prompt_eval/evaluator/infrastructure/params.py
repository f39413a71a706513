"""Parameter parsing shared by the built-in evaluators."""

from typing import Any

from pydantic import BaseModel, ValidationError

from prompt_eval.evaluator.infrastructure.errors import EvaluatorParameterError


def parse_params[T: BaseModel](
    model: type[T], evaluator_key: str, params: dict[str, Any]
) -> T:
    """Validate raw config against the evaluator's parameter model.

    Raises:
        EvaluatorParameterError: if params violate the model.
    """
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        raise EvaluatorParameterError(
            evaluator_key=evaluator_key, reason=str(exc)
        ) from exc
