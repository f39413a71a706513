"""FakeResponseGenerator — in-memory ResponseGenerator for use in tests."""

import asyncio
from typing import Any

from prompt_eval.testing.domain.generator import Generation


def make_generation(text: str = "Paris is the capital of France.") -> Generation:
    return Generation(
        text=text,
        provider="openai",
        model="gpt-4o",
        tokens_prompt=12,
        tokens_completion=8,
        tokens_total=20,
        cost_usd=0.001,
        latency_ms=250,
    )


class FakeResponseGenerator:
    """Satisfies the ResponseGenerator protocol. Returns a canned Generation.

    If side_effects is provided, each call pops from the front of the list:
    - If the item is an Exception, it is raised.
    - If the item is a Generation, it is returned.
    Once the list is exhausted, the default generation is returned.

    If gate is set, every call blocks until the event is set.
    """

    def __init__(
        self,
        generation: Generation | None = None,
        side_effects: list[Generation | Exception] | None = None,
        gate: asyncio.Event | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        self._generation = generation if generation is not None else make_generation()
        self._side_effects: list[Generation | Exception] = (
            list(side_effects) if side_effects is not None else []
        )
        self._gate = gate
        self._delay_seconds = delay_seconds
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def generate(
        self, rendered_prompt: str, llm_config: dict[str, Any]
    ) -> Generation:
        self.calls.append((rendered_prompt, llm_config))
        if self._gate is not None:
            await self._gate.wait()
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        if self._side_effects:
            effect = self._side_effects.pop(0)
            if isinstance(effect, Exception):
                raise effect
            return effect
        return self._generation
