"""ExecutionPlan — validated, layered ordering of one pass's evaluator configs."""

from dataclasses import dataclass

from prompt_eval.config.domain.evaluator_config import EvaluatorConfig
from prompt_eval.evaluation.domain.errors import InvalidEvaluatorGraphError


def _order_key(config: EvaluatorConfig) -> tuple[int, str]:
    return (config.priority, config.evaluator_key)


@dataclass(frozen=True)
class ExecutionPlan:
    """Configs grouped into topological layers.

    Every config in layer n depends only on configs in earlier layers. Within a
    layer, configs are ordered by ascending priority, then evaluator key.
    """

    layers: tuple[tuple[EvaluatorConfig, ...], ...]

    @property
    def ordered(self) -> list[EvaluatorConfig]:
        return [config for layer in self.layers for config in layer]

    def __len__(self) -> int:
        return sum(len(layer) for layer in self.layers)

    @classmethod
    def build(cls, configs: list[EvaluatorConfig]) -> "ExecutionPlan":
        """Validate the dependency graph and layer it with Kahn's algorithm.

        Raises:
            InvalidEvaluatorGraphError: on a duplicate evaluator key, a
                depends_on key absent from configs, or a dependency cycle.
        """
        by_key: dict[str, EvaluatorConfig] = {}
        for config in configs:
            if config.evaluator_key in by_key:
                raise InvalidEvaluatorGraphError(
                    reason=f"evaluator '{config.evaluator_key}' is configured twice"
                )
            by_key[config.evaluator_key] = config

        dangling = sorted(
            f"'{c.evaluator_key}' depends on '{c.depends_on}'"
            for c in configs
            if c.depends_on is not None and c.depends_on not in by_key
        )
        if dangling:
            raise InvalidEvaluatorGraphError(
                reason="unknown dependency: " + "; ".join(dangling)
            )

        dependents: dict[str, list[str]] = {key: [] for key in by_key}
        waiting: dict[str, int] = {}
        for key, config in by_key.items():
            if config.depends_on is not None:
                dependents[config.depends_on].append(key)
                waiting[key] = 1
            else:
                waiting[key] = 0

        layers: list[tuple[EvaluatorConfig, ...]] = []
        current = [by_key[k] for k, count in waiting.items() if count == 0]
        placed = 0
        while current:
            layer = tuple(sorted(current, key=_order_key))
            layers.append(layer)
            placed += len(layer)
            following: list[EvaluatorConfig] = []
            for config in layer:
                for dependent in dependents[config.evaluator_key]:
                    waiting[dependent] -= 1
                    if waiting[dependent] == 0:
                        following.append(by_key[dependent])
            current = following

        if placed != len(by_key):
            cyclic = sorted(k for k, count in waiting.items() if count > 0)
            raise InvalidEvaluatorGraphError(
                reason="dependency cycle among " + ", ".join(cyclic)
            )

        return cls(layers=tuple(layers))
