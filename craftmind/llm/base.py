"""Language model interface shared by all backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

FALLBACK_RESPONSE = "ACTION: wait"


class LLMUnavailableError(RuntimeError):
    """Raised when a backend never becomes ready to serve requests."""


class TextGenerator(Protocol):
    def wait_for_ready(self) -> None:
        """Block until the backend can serve requests or raise."""

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Return free-form model text for one decision."""


@dataclass(frozen=True)
class LLMConfig:
    model_id: str
    temperature: float = 0.7
    top_p: float = 0.9
    max_tokens: int = 100
