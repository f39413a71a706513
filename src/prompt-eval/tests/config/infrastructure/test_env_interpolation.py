"""Tests for ${ENV_VAR} interpolation."""

import pytest

from prompt_eval.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)


class TestCollectMissingVars:
    def test_returns_unset_vars_in_first_reference_order(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PE_B", raising=False)
        monkeypatch.delenv("PE_A", raising=False)
        data = {"x": "${PE_B}", "y": ["${PE_A}", "${PE_B}"]}

        assert collect_missing_vars(data) == ["PE_B", "PE_A"]

    def test_set_vars_are_not_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PE_MODEL", "gpt-4o")

        assert collect_missing_vars({"model": "${PE_MODEL}"}) == []

    def test_vars_with_defaults_are_never_missing(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PE_MODEL", raising=False)

        assert collect_missing_vars({"model": "${PE_MODEL:-gpt-4o}"}) == []


class TestInterpolate:
    def test_substitutes_nested_strings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PE_MODEL", "gpt-4o")

        result = interpolate({"a": {"b": ["model=${PE_MODEL}", 3, None]}})

        assert result == {"a": {"b": ["model=gpt-4o", 3, None]}}

    def test_default_used_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PE_MODEL", raising=False)

        assert interpolate("${PE_MODEL:-claude}") == "claude"

    def test_environment_wins_over_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PE_MODEL", "gpt-4o")

        assert interpolate("${PE_MODEL:-claude}") == "gpt-4o"

    def test_empty_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PE_SUFFIX", raising=False)

        assert interpolate("x${PE_SUFFIX:-}") == "x"

    def test_unset_without_default_raises(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PE_MODEL", raising=False)

        with pytest.raises(KeyError):
            interpolate("${PE_MODEL}")
