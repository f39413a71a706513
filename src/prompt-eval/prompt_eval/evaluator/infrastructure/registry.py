"""EvaluatorRegistry — populate once, freeze, then read-only lookup by key."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from prompt_eval.evaluator.domain.evaluator import Evaluator
from prompt_eval.evaluator.domain.metadata import EvaluatorMetadata
from prompt_eval.evaluator.domain.observer import JudgeObserver
from prompt_eval.evaluator.infrastructure import exact_match, keyword, length
from prompt_eval.evaluator.infrastructure import format as format_check
from prompt_eval.evaluator.infrastructure import llm_judge, pattern_match
from prompt_eval.evaluator.infrastructure.errors import (
    DuplicateEvaluatorError,
    RegistryFrozenError,
    UnknownEvaluatorError,
)

type RegistryEntry = tuple[Evaluator, EvaluatorMetadata]


class EvaluatorRegistry:
    """Maps evaluator keys to capabilities and their static metadata.

    Entries are added during startup and the registry is then frozen. After
    freeze() the backing mapping is a read-only proxy, so concurrent evaluation
    passes can share one registry without locking.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}
        self._view: Mapping[str, RegistryEntry] = self._entries
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self, key: str, evaluator: Evaluator, metadata: EvaluatorMetadata
    ) -> None:
        """Add one evaluator under key.

        Raises:
            RegistryFrozenError: if freeze() has already been called.
            DuplicateEvaluatorError: if key is already registered.
        """
        if self._frozen:
            raise RegistryFrozenError(evaluator_key=key)
        if key in self._entries:
            raise DuplicateEvaluatorError(evaluator_key=key)
        self._entries[key] = (evaluator, metadata)

    def freeze(self) -> None:
        self._view = MappingProxyType(self._entries)
        self._frozen = True

    def get(self, key: str) -> Evaluator:
        try:
            return self._view[key][0]
        except KeyError:
            raise UnknownEvaluatorError(evaluator_key=key) from None

    def metadata(self, key: str) -> EvaluatorMetadata:
        try:
            return self._view[key][1]
        except KeyError:
            raise UnknownEvaluatorError(evaluator_key=key) from None

    def exists(self, key: str) -> bool:
        return key in self._view

    def all(self) -> list[tuple[str, EvaluatorMetadata]]:
        """Return (key, metadata) pairs in registration order."""
        return [(key, entry[1]) for key, entry in self._view.items()]


def build_default_registry(
    judge_observer: JudgeObserver,
    extra: Iterable[tuple[str, Evaluator, EvaluatorMetadata]] = (),
) -> EvaluatorRegistry:
    """Register the built-in evaluators plus any extra entries, then freeze."""
    registry = EvaluatorRegistry()
    registry.register(length.KEY, length.LengthEvaluator(), length.METADATA)
    registry.register(keyword.KEY, keyword.KeywordEvaluator(), keyword.METADATA)
    registry.register(
        format_check.KEY, format_check.FormatEvaluator(), format_check.METADATA
    )
    registry.register(
        exact_match.KEY, exact_match.ExactMatchEvaluator(), exact_match.METADATA
    )
    registry.register(
        pattern_match.KEY,
        pattern_match.PatternMatchEvaluator(),
        pattern_match.METADATA,
    )
    registry.register(
        llm_judge.KEY,
        llm_judge.LlmJudgeEvaluator(observer=judge_observer),
        llm_judge.METADATA,
    )
    for key, evaluator, metadata in extra:
        registry.register(key, evaluator, metadata)
    registry.freeze()
    return registry
