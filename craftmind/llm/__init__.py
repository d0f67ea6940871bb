"""Language model backends and prompt templates."""

from craftmind.llm.base import (
    FALLBACK_RESPONSE,
    LLMConfig,
    LLMUnavailableError,
    TextGenerator,
)
from craftmind.llm.fake_llm import FakeLLM
from craftmind.llm.mlx_llm import MlxLLM
from craftmind.llm.ollama_client import OllamaClient
from craftmind.llm.prompts import build_system_prompt, build_user_prompt

__all__ = [
    "FALLBACK_RESPONSE",
    "LLMConfig",
    "LLMUnavailableError",
    "TextGenerator",
    "FakeLLM",
    "MlxLLM",
    "OllamaClient",
    "build_system_prompt",
    "build_user_prompt",
]
