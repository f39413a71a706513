"""FormatEvaluator — validates JSON, Markdown or plain-text responses."""

import json
import re
from typing import Any, Literal

from pydantic import BaseModel

from prompt_eval.evaluation.domain.subject import EvaluationSubject
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.output import EvaluatorOutput
from prompt_eval.evaluator.infrastructure.params import parse_params

KEY = "format"

_MARKDOWN_HEADER = re.compile(r"^#{1,6}\s+.+", re.MULTILINE)

_TYPE_CHECKS: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "int": (int,),
    "float": (int, float),
    "number": (int, float),
    "boolean": (bool,),
    "bool": (bool,),
    "array": (list,),
    "object": (dict,),
    "hash": (dict,),
}


class FormatParams(BaseModel, frozen=True):
    format: Literal["json", "markdown", "plain_text"] = "plain_text"
    required_keys: list[str] = []
    require_headers: bool = False
    # {"required_keys": [...], "optional_keys": [...], "types": {...},
    #  "nested_structure": {key: <schema>}}
    json_schema: dict[str, Any] | None = None
    strict: bool = False


METADATA = EvaluatorMetadata(
    key=KEY,
    name="Format Validator",
    description="Validates response format (JSON, Markdown, plain text)",
    category="format",
    param_schema=FormatParams.model_json_schema(),
    default_config=FormatParams().model_dump(),
)


class FormatEvaluator:
    """Checks that the response parses as the expected format.

    passed reflects format validity only; the score additionally reflects
    required keys, schema conformance, or Markdown headers.
    """

    async def score(
        self, subject: EvaluationSubject, params: dict[str, Any]
    ) -> EvaluatorOutput:
        cfg = parse_params(FormatParams, KEY, params)
        text = subject.response_text

        if cfg.format == "json":
            return _evaluate_json(text=text, cfg=cfg)
        if cfg.format == "markdown":
            return _evaluate_markdown(text=text, cfg=cfg)
        return EvaluatorOutput(
            score=100.0 if text else 0.0,
            passed=True,
            feedback="Valid plain text" if text else "Empty response",
            metadata={"format": cfg.format, "format_valid": True},
        )


def _evaluate_json(text: str, cfg: FormatParams) -> EvaluatorOutput:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return EvaluatorOutput(
            score=0.0,
            passed=False,
            feedback="Invalid JSON format",
            metadata={"format": "json", "format_valid": False},
        )

    metadata: dict[str, Any] = {"format": "json", "format_valid": True}

    if cfg.json_schema:
        if not isinstance(data, dict):
            return EvaluatorOutput(
                score=0.0,
                passed=True,
                feedback="Schema validation errors: expected a JSON object",
                metadata=metadata,
            )
        score, errors = _check_schema(
            data=data, schema=cfg.json_schema, strict=cfg.strict
        )
        feedback = (
            "Valid JSON matching schema"
            if not errors
            else f"Schema validation errors: {'; '.join(errors)}"
        )
        return EvaluatorOutput(
            score=float(score),
            passed=True,
            feedback=feedback,
            metadata={**metadata, "schema_errors": errors},
        )

    if not cfg.required_keys:
        return EvaluatorOutput(
            score=100.0, passed=True, feedback="Valid JSON format", metadata=metadata
        )

    keys = set(data.keys()) if isinstance(data, dict) else set()
    missing = [k for k in cfg.required_keys if k not in keys]
    present = len(cfg.required_keys) - len(missing)
    return EvaluatorOutput(
        score=float(round(100.0 * present / len(cfg.required_keys))),
        passed=True,
        feedback=(
            "Valid JSON with all required keys"
            if not missing
            else f"Valid JSON but missing keys: {', '.join(missing)}"
        ),
        metadata={**metadata, "missing_keys": missing},
    )


def _check_schema(
    data: dict[str, Any], schema: dict[str, Any], strict: bool
) -> tuple[int, list[str]]:
    """Return (score, errors) for data checked against a lightweight key/type schema."""
    errors: list[str] = []
    score = 100

    required: list[str] = schema.get("required_keys") or []
    optional: list[str] = schema.get("optional_keys") or []

    missing = [k for k in required if k not in data]
    if missing:
        errors.append(f"Missing required keys: {', '.join(missing)}")
        score -= round(len(missing) / len(required) * 50)

    if strict and (required or optional):
        extra = [k for k in data if k not in required and k not in optional]
        if extra:
            errors.append(f"Extra keys not allowed in strict mode: {', '.join(extra)}")
            score -= 20

    for key, expected in (schema.get("types") or {}).items():
        if key in data and not _matches_type(data[key], str(expected)):
            errors.append(f"Key '{key}' has wrong type (expected {expected})")
            score -= 10

    for key, nested_schema in (schema.get("nested_structure") or {}).items():
        if key not in data:
            continue
        nested = data[key]
        if isinstance(nested, dict):
            nested_score, nested_errors = _check_schema(
                data=nested, schema=nested_schema, strict=strict
            )
            score = min(score, nested_score)
            errors.extend(f"{key}.{e}" for e in nested_errors)
        else:
            errors.append(f"Key '{key}' should be an object for nested validation")
            score -= 15

    return max(score, 0), errors


def _matches_type(value: Any, expected: str) -> bool:
    expected = expected.lower()
    if expected in ("null", "nil", "none"):
        return value is None
    checks = _TYPE_CHECKS.get(expected)
    if checks is None:
        return True
    # bool is a subclass of int; only accept it where a boolean is expected.
    if isinstance(value, bool) and bool not in checks:
        return False
    return isinstance(value, checks)


def _evaluate_markdown(text: str, cfg: FormatParams) -> EvaluatorOutput:
    has_headers = bool(_MARKDOWN_HEADER.search(text))
    missing_headers = cfg.require_headers and not has_headers
    return EvaluatorOutput(
        score=50.0 if missing_headers else 100.0,
        passed=bool(text),
        feedback=(
            "Missing markdown headers" if missing_headers else "Valid markdown format"
        ),
        metadata={
            "format": "markdown",
            "format_valid": bool(text),
            "has_headers": has_headers,
        },
    )
