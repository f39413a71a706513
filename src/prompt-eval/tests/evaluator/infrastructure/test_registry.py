"""Tests for EvaluatorRegistry and build_default_registry."""

import pytest

from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.infrastructure.errors import (
    DuplicateEvaluatorError,
    RegistryFrozenError,
    UnknownEvaluatorError,
)
from prompt_eval.evaluator.infrastructure.registry import (
    EvaluatorRegistry,
    build_default_registry,
)
from tests.evaluator.fake_evaluator import FakeEvaluator
from tests.evaluator.fake_observer import FakeJudgeObserver


def _make_metadata(key: str) -> EvaluatorMetadata:
    return EvaluatorMetadata(key=key, name=key.title())


class TestEvaluatorRegistry:
    def test_get_returns_registered_evaluator(self) -> None:
        registry = EvaluatorRegistry()
        evaluator = FakeEvaluator()
        registry.register("fake", evaluator, _make_metadata("fake"))

        assert registry.get("fake") is evaluator
        assert registry.metadata("fake").name == "Fake"
        assert registry.exists("fake") is True

    def test_unknown_key_raises(self) -> None:
        registry = EvaluatorRegistry()

        with pytest.raises(UnknownEvaluatorError):
            registry.get("missing")
        with pytest.raises(UnknownEvaluatorError):
            registry.metadata("missing")
        assert registry.exists("missing") is False

    def test_duplicate_key_raises(self) -> None:
        registry = EvaluatorRegistry()
        registry.register("fake", FakeEvaluator(), _make_metadata("fake"))

        with pytest.raises(DuplicateEvaluatorError):
            registry.register("fake", FakeEvaluator(), _make_metadata("fake"))

    def test_register_after_freeze_raises(self) -> None:
        registry = EvaluatorRegistry()
        registry.freeze()

        assert registry.frozen is True
        with pytest.raises(RegistryFrozenError):
            registry.register("fake", FakeEvaluator(), _make_metadata("fake"))

    def test_all_preserves_registration_order(self) -> None:
        registry = EvaluatorRegistry()
        for key in ("b", "a", "c"):
            registry.register(key, FakeEvaluator(), _make_metadata(key))

        assert [key for key, _ in registry.all()] == ["b", "a", "c"]


class TestBuildDefaultRegistry:
    def test_registers_builtins_and_freezes(self) -> None:
        registry = build_default_registry(judge_observer=FakeJudgeObserver())

        assert [key for key, _ in registry.all()] == [
            "length",
            "keyword",
            "format",
            "exact_match",
            "pattern_match",
            "llm_judge",
        ]
        assert registry.frozen is True

    def test_extra_entries_are_registered_after_builtins(self) -> None:
        fake = FakeEvaluator()
        registry = build_default_registry(
            judge_observer=FakeJudgeObserver(),
            extra=[("fake", fake, _make_metadata("fake"))],
        )

        assert registry.get("fake") is fake
        assert registry.all()[-1][0] == "fake"

    def test_extra_entry_cannot_shadow_builtin(self) -> None:
        with pytest.raises(DuplicateEvaluatorError):
            build_default_registry(
                judge_observer=FakeJudgeObserver(),
                extra=[("length", FakeEvaluator(), _make_metadata("length"))],
            )
