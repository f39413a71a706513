"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(
        self, name: str, version: str, total_prompts: int, total_tests: int
    ) -> None: ...

    def config_judge_temperature_warning(
        self, owner: str, temperature: float
    ) -> None: ...
