"""Deterministic FakeLLM for tests and demos."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from craftmind.llm.base import TextGenerator

DEFAULT_SCRIPT: tuple[str, ...] = (
    "THINKING: I have no tools yet, so wood comes first.\nACTION: mine oak_log",
    "THINKING: More logs mean more planks.\nACTION: mine oak_log",
    "THINKING: One more log gives me enough planks.\nACTION: mine oak_log",
    "THINKING: Logs become planks.\nACTION: craft oak_planks",
    "THINKING: I need more planks for a table and sticks.\nACTION: craft oak_planks",
    "THINKING: The pickaxe needs planks too.\nACTION: craft oak_planks",
    "THINKING: A crafting table unlocks tools.\nACTION: craft crafting_table",
    "THINKING: The table has to be placed before I can use it.\n"
    "ACTION: place crafting_table",
    "THINKING: Sticks are needed for the pickaxe.\nACTION: craft stick",
    "THINKING: Now I can make a pickaxe.\nACTION: craft wooden_pickaxe",
    "THINKING: Let the others know how it is going.\n"
    "ACTION: chat I just made my first pickaxe!",
    "THINKING: Nothing urgent right now.\nACTION: wait",
)


@dataclass
class FakeLLM(TextGenerator):
    """Replay a fixed script of responses, looping at the end."""

    script: Sequence[str] = DEFAULT_SCRIPT
    calls: list[tuple[str, str]] = field(default_factory=list)

    def wait_for_ready(self) -> None:
        return None

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if not self.script:
            return ""
        return self.script[(len(self.calls) - 1) % len(self.script)]
