"""Tests for YamlProjectLoader."""

import textwrap
from pathlib import Path

import pytest

from prompt_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from prompt_eval.config.infrastructure.yaml_loader import YamlProjectLoader
from prompt_eval.tracking.domain.prompt import AggregationStrategy
from tests.config.fake_observer import FakeConfigObserver

_VALID = """\
name: capitals
version: "2"
execution:
  max_concurrent: 8
  retry:
    max_attempts: 3
prompts:
  capitals:
    name: Capital cities
    aggregation_strategy: minimum
    evaluators:
      - key: length
        config: {min_length: 3}
versions:
  v1:
    prompt: capitals
    template: "What is the capital of {{ country }}?"
    llm_config:
      model: ${PE_TEST_MODEL:-gpt-4o}
    evaluators:
      - key: llm_judge
        run_mode: async
        depends_on: length
tests:
  france:
    version: v1
    template_variables: {country: France}
    assertions:
      - {kind: contains, value: Paris}
      - {kind: max_latency_ms, value: 5000}
datasets:
  europe:
    version: v1
    rows:
      - {country: Italy}
      - {country: Spain}
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "project.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def _make_loader() -> tuple[YamlProjectLoader, FakeConfigObserver]:
    observer = FakeConfigObserver()
    return YamlProjectLoader(observer=observer), observer


class TestLoadValid:
    def test_loads_full_project(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PE_TEST_MODEL", raising=False)
        loader, observer = _make_loader()

        project = loader.load(path=_write(tmp_path, _VALID))

        assert project.name == "capitals"
        assert project.version == "2"
        assert project.execution.max_concurrent == 8
        assert project.execution.retry.max_attempts == 3
        prompt = project.prompts["capitals"]
        assert prompt.aggregation_strategy == AggregationStrategy.MINIMUM
        assert prompt.evaluators[0].config == {"min_length": 3}
        assert project.versions["v1"].llm_config == {"model": "gpt-4o"}
        assert project.versions["v1"].evaluators[0].depends_on == "length"
        assert len(project.tests["france"].assertions) == 2
        assert len(project.datasets["europe"].rows) == 2
        assert observer.loaded == [
            {"name": "capitals", "version": "2", "total_prompts": 1, "total_tests": 1}
        ]

    def test_env_var_is_interpolated(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PE_TEST_MODEL", "claude-3-5-sonnet")
        loader, _ = _make_loader()

        project = loader.load(path=_write(tmp_path, _VALID))

        assert project.versions["v1"].llm_config["model"] == "claude-3-5-sonnet"

    def test_judge_temperature_warning(self, tmp_path: Path) -> None:
        content = """\
        name: warm
        prompts:
          p:
            name: P
            evaluators:
              - key: llm_judge
                config: {temperature: 0.7}
        versions:
          v1: {prompt: p, template: hi}
        """
        loader, observer = _make_loader()

        loader.load(path=_write(tmp_path, content))

        assert observer.warnings == [{"owner": "prompt 'p'", "temperature": 0.7}]


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        loader, _ = _make_loader()

        with pytest.raises(ConfigLoadError, match="file not found"):
            loader.load(path=tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        loader, _ = _make_loader()

        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            loader.load(path=_write(tmp_path, "name: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        loader, _ = _make_loader()

        with pytest.raises(ConfigLoadError, match="mapping"):
            loader.load(path=_write(tmp_path, "- a\n- b\n"))

    def test_missing_env_vars_are_all_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PE_X", raising=False)
        monkeypatch.delenv("PE_Y", raising=False)
        content = """\
        name: ${PE_X}
        prompts:
          p: {name: "${PE_Y}"}
        versions:
          v1: {prompt: p, template: hi}
        """
        loader, _ = _make_loader()

        with pytest.raises(MissingEnvVarsError) as exc_info:
            loader.load(path=_write(tmp_path, content))

        assert exc_info.value.missing_vars == ["PE_X", "PE_Y"]

    def test_dangling_references_are_all_reported(self, tmp_path: Path) -> None:
        content = """\
        name: broken
        prompts:
          p: {name: P}
        versions:
          v1: {prompt: nope, template: hi}
        tests:
          t1: {version: v9}
        datasets:
          d1: {version: v8}
        """
        loader, _ = _make_loader()

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(path=_write(tmp_path, content))

        message = str(exc_info.value)
        assert "version 'v1' references unknown prompt 'nope'" in message
        assert "test 't1' references unknown version 'v9'" in message
        assert "dataset 'd1' references unknown version 'v8'" in message

    def test_schema_violation(self, tmp_path: Path) -> None:
        content = """\
        name: bad
        prompts:
          p: {name: P, aggregation_strategy: median}
        versions:
          v1: {prompt: p, template: hi}
        """
        loader, _ = _make_loader()

        with pytest.raises(ConfigValidationError):
            loader.load(path=_write(tmp_path, content))

    def test_duplicate_enabled_evaluator_is_rejected(self, tmp_path: Path) -> None:
        content = """\
        name: dup
        prompts:
          p:
            name: P
            evaluators:
              - {key: length}
              - {key: length}
        versions:
          v1: {prompt: p, template: hi}
        """
        loader, _ = _make_loader()

        with pytest.raises(ConfigValidationError, match="enabled more than once"):
            loader.load(path=_write(tmp_path, content))

    def test_disabled_duplicate_is_allowed(self, tmp_path: Path) -> None:
        content = """\
        name: dup
        prompts:
          p:
            name: P
            evaluators:
              - {key: length}
              - {key: length, enabled: false}
        versions:
          v1: {prompt: p, template: hi}
        """
        loader, _ = _make_loader()

        project = loader.load(path=_write(tmp_path, content))

        assert len(project.prompts["p"].evaluators) == 2
