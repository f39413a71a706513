"""EvaluatorConfigResolver — decides which evaluator configs apply to a subject."""

from collections.abc import Iterable

from prompt_eval.config.domain.evaluator_config import (
    EvaluatorConfig,
    OwnerKind,
    OwnerRef,
)
from prompt_eval.evaluation.domain.observer import EvaluationObserver
from prompt_eval.evaluator.infrastructure.registry import EvaluatorRegistry
from prompt_eval.storage.domain.repository import (
    EvaluatorConfigRepository,
    PromptRepository,
)
from prompt_eval.testing.domain.prompt_test import PromptTest


class EvaluatorConfigResolver:
    """Two-level lookup: version-level configs first, prompt-level per missing key.

    A disabled version-level config still masks the prompt-level config with the
    same key. Configs naming an unregistered evaluator are dropped and reported.
    """

    def __init__(
        self,
        prompts: PromptRepository,
        configs: EvaluatorConfigRepository,
        registry: EvaluatorRegistry,
        observer: EvaluationObserver,
    ) -> None:
        self._prompts = prompts
        self._configs = configs
        self._registry = registry
        self._observer = observer

    def resolve(self, version_id: str) -> list[EvaluatorConfig]:
        """Return the enabled configs for a version, ordered by (priority, key)."""
        version = self._prompts.get_version(version_id)
        by_key: dict[str, EvaluatorConfig] = {
            c.evaluator_key: c
            for c in self._configs.configs_for_owner(
                OwnerRef(kind=OwnerKind.PROMPT, id=version.prompt_id)
            )
        }
        by_key.update(
            (c.evaluator_key, c)
            for c in self._configs.configs_for_owner(
                OwnerRef(kind=OwnerKind.PROMPT_VERSION, id=version_id)
            )
        )
        return self._finalize(by_key.values())

    def resolve_for_test(self, test: PromptTest) -> list[EvaluatorConfig]:
        """Use the test's own configs when it has any, else its version's."""
        own = self._configs.configs_for_owner(
            OwnerRef(kind=OwnerKind.PROMPT_TEST, id=test.id)
        )
        if own:
            return self._finalize(own)
        return self.resolve(test.prompt_version_id)

    def _finalize(
        self, configs: Iterable[EvaluatorConfig]
    ) -> list[EvaluatorConfig]:
        enabled: list[EvaluatorConfig] = []
        for config in configs:
            if not config.enabled:
                continue
            if not self._registry.exists(config.evaluator_key):
                self._observer.evaluator_config_unknown(
                    config_id=config.id, evaluator_key=config.evaluator_key
                )
                continue
            enabled.append(config)
        return sorted(enabled, key=lambda c: (c.priority, c.evaluator_key))
