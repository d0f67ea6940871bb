from craftmind.llm.base import LLMConfig
from craftmind.llm.mlx_llm import _build_prompt, sampler_options


def test_sampler_options_follow_config() -> None:
    config = LLMConfig(model_id="local", temperature=0.2, top_p=0.5)

    assert sampler_options(config) == {"temp": 0.2, "top_p": 0.5}


def test_prompt_without_chat_template_joins_messages() -> None:
    class PlainTokenizer:
        chat_template = None

    prompt = _build_prompt(PlainTokenizer(), "system text", "user text")

    assert prompt == "system text\n\nuser text\n"
