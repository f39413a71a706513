"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(
        self, name: str, version: str, total_prompts: int, total_tests: int
    ) -> None:
        self._log.info(
            "config.loaded",
            name=name,
            version=version,
            total_prompts=total_prompts,
            total_tests=total_tests,
        )

    def config_judge_temperature_warning(self, owner: str, temperature: float) -> None:
        self._log.warning(
            "config.judge_temperature_warning",
            owner=owner,
            temperature=temperature,
            message="Judge temperature > 0.0 may produce non-deterministic scoring",
        )
