"""Populate an InMemoryStore from a validated ProjectConfig."""

from prompt_eval.config.domain.evaluator_config import (
    EvaluatorConfig,
    OwnerKind,
    OwnerRef,
)
from prompt_eval.config.domain.project import EvaluatorEntry, ProjectConfig
from prompt_eval.storage.infrastructure.memory import InMemoryStore
from prompt_eval.testing.domain.dataset import Dataset, DatasetRow
from prompt_eval.testing.domain.prompt_test import PromptTest
from prompt_eval.tracking.domain.prompt import Prompt, PromptVersion


def _add_configs(
    store: InMemoryStore, owner: OwnerRef, entries: list[EvaluatorEntry]
) -> None:
    for index, entry in enumerate(entries):
        store.add_config(
            EvaluatorConfig(
                id=f"{owner.kind}:{owner.id}:{entry.key}:{index}",
                owner=owner,
                evaluator_key=entry.key,
                enabled=entry.enabled,
                run_mode=entry.run_mode,
                priority=entry.priority,
                weight=entry.weight,
                depends_on=entry.depends_on,
                min_dependency_score=entry.min_dependency_score,
                config=entry.config,
            )
        )


def seed_store(
    project: ProjectConfig, store: InMemoryStore | None = None
) -> InMemoryStore:
    """Create every record the project file describes; project keys become ids."""
    store = store if store is not None else InMemoryStore()

    for prompt_id, prompt in project.prompts.items():
        store.add_prompt(
            Prompt(
                id=prompt_id,
                name=prompt.name,
                aggregation_strategy=prompt.aggregation_strategy,
            )
        )
        _add_configs(
            store, OwnerRef(kind=OwnerKind.PROMPT, id=prompt_id), prompt.evaluators
        )

    for version_id, version in project.versions.items():
        store.add_version(
            PromptVersion(
                id=version_id,
                prompt_id=version.prompt,
                template=version.template,
                llm_config=version.llm_config,
            )
        )
        _add_configs(
            store,
            OwnerRef(kind=OwnerKind.PROMPT_VERSION, id=version_id),
            version.evaluators,
        )

    for test_id, test in project.tests.items():
        store.add_test(
            PromptTest(
                id=test_id,
                name=test_id,
                prompt_version_id=test.version,
                description=test.description,
                template_variables=test.template_variables,
                llm_config=test.llm_config,
                enabled=test.enabled,
                assertions=test.assertions,
            )
        )
        _add_configs(
            store, OwnerRef(kind=OwnerKind.PROMPT_TEST, id=test_id), test.evaluators
        )

    for dataset_id, dataset in project.datasets.items():
        store.add_dataset(
            Dataset(
                id=dataset_id,
                name=dataset_id,
                prompt_version_id=dataset.version,
                rows=[
                    DatasetRow(id=f"{dataset_id}-{i}", row_data=row)
                    for i, row in enumerate(dataset.rows)
                ],
            )
        )

    return store
