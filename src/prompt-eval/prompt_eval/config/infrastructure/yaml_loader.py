"""YamlProjectLoader — parses, interpolates and validates a project file."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prompt_eval.config.domain.observer import ConfigObserver
from prompt_eval.config.domain.project import EvaluatorEntry, ProjectConfig
from prompt_eval.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from prompt_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from prompt_eval.evaluator.infrastructure.llm_judge import KEY as LLM_JUDGE_KEY


class YamlProjectLoader:
    """Loads, interpolates, validates, and returns a ProjectConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> ProjectConfig:
        """
        Load, interpolate, validate, and return a ProjectConfig from a YAML file.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all
                collected first).
            ConfigValidationError: if a cross-reference is dangling or the schema
                is violated.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = interpolate(raw)
        _check_references(interpolated=interpolated)
        project = _build_project(interpolated=interpolated)
        _emit_warnings(project=project, observer=self._observer)
        self._observer.config_loaded(
            name=project.name,
            version=project.version,
            total_prompts=len(project.prompts),
            total_tests=len(project.tests),
        )
        return project


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name) or {}
    return value if isinstance(value, dict) else {}


def _check_references(interpolated: dict[str, Any]) -> None:
    """
    Validate that versions name known prompts, and tests and datasets name
    known versions.

    Raises:
        ConfigValidationError: listing ALL dangling references before raising
            (not just the first one).
    """
    prompts = _section(interpolated, "prompts")
    versions = _section(interpolated, "versions")

    unknown: list[str] = []
    for version_id, version in versions.items():
        prompt_id = (version or {}).get("prompt")
        if prompt_id not in prompts:
            unknown.append(
                f"version '{version_id}' references unknown prompt '{prompt_id}'"
            )
    for section in ("tests", "datasets"):
        for entry_id, entry in _section(interpolated, section).items():
            version_id = (entry or {}).get("version")
            if version_id not in versions:
                unknown.append(
                    f"{section[:-1]} '{entry_id}' references unknown version"
                    f" '{version_id}'"
                )

    if unknown:
        raise ConfigValidationError("; ".join(unknown))


def _build_project(interpolated: dict[str, Any]) -> ProjectConfig:
    try:
        return ProjectConfig.model_validate(interpolated)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(project: ProjectConfig, observer: ConfigObserver) -> None:
    owners: list[tuple[str, list[EvaluatorEntry]]] = [
        *((f"prompt '{k}'", p.evaluators) for k, p in project.prompts.items()),
        *((f"version '{k}'", v.evaluators) for k, v in project.versions.items()),
        *((f"test '{k}'", t.evaluators) for k, t in project.tests.items()),
    ]
    for owner, entries in owners:
        for entry in entries:
            if entry.key != LLM_JUDGE_KEY:
                continue
            temperature = float(entry.config.get("temperature", 0.0))
            if temperature > 0.0:
                observer.config_judge_temperature_warning(
                    owner=owner, temperature=temperature
                )
