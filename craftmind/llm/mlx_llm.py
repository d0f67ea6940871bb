"""mlx-lm adapter for real local runs."""

from __future__ import annotations

from dataclasses import dataclass

from craftmind.llm.base import LLMConfig, LLMUnavailableError, TextGenerator


@dataclass
class MlxLLM(TextGenerator):
    config: LLMConfig

    def __post_init__(self) -> None:
        self._model = None
        self._tokenizer = None

    def wait_for_ready(self) -> None:
        if self._model is not None:
            return
        try:
            from mlx_lm import load

            self._model, self._tokenizer = load(self.config.model_id)
        except (ImportError, OSError) as exc:
            raise LLMUnavailableError(
                f"Could not load {self.config.model_id}: {exc}"
            ) from exc

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        from mlx_lm import generate
        from mlx_lm.sample_utils import make_sampler

        self.wait_for_ready()
        prompt = _build_prompt(self._tokenizer, system_prompt, user_prompt)
        return generate(
            self._model,
            self._tokenizer,
            prompt=prompt,
            max_tokens=self.config.max_tokens,
            sampler=make_sampler(**sampler_options(self.config)),
        )


def sampler_options(config: LLMConfig) -> dict[str, float]:
    return {"temp": config.temperature, "top_p": config.top_p}


def _build_prompt(tokenizer, system_prompt: str, user_prompt: str) -> str:
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
    if getattr(tokenizer, "chat_template", None):
        return tokenizer.apply_chat_template(
            messages, tokenize=False, add_generation_prompt=True
        )
    return f"{system_prompt}\n\n{user_prompt}\n"
