"""Agent configuration and runtime settings."""

from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_AGENT_NAME = "Agent"
DEFAULT_GOAL = "Survive and explore the world"
DEFAULT_PERSONALITY = "A curious and helpful Minecraft bot"
DEFAULT_LLM_BACKEND = "fake"
DEFAULT_MODEL_ID = "llama3.1:8b"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_DECISION_INTERVAL = 15.0
DEFAULT_LOG_DIR = Path("logs")


class AgentConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = DEFAULT_AGENT_NAME
    goal: str = DEFAULT_GOAL
    rules: list[str] = Field(default_factory=list)
    personality: str = DEFAULT_PERSONALITY


class RuntimeSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    agent_config_path: Path | None = None
    agent_name: str = DEFAULT_AGENT_NAME
    llm_backend: str = DEFAULT_LLM_BACKEND
    model_id: str = DEFAULT_MODEL_ID
    ollama_host: str = DEFAULT_OLLAMA_HOST
    decision_interval: float = Field(default=DEFAULT_DECISION_INTERVAL, ge=0)
    log_dir: Path = DEFAULT_LOG_DIR
    ticks: int | None = Field(default=None, ge=1)


def load_agent_config(path: Path | None, *, agent_name: str) -> AgentConfig:
    """Read the agent JSON file, falling back to defaults when it is unusable."""
    if path is None:
        return AgentConfig(name=agent_name)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = AgentConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        logger.error("Failed to load config from %s: %s", path, exc)
        return AgentConfig(name=agent_name)
    if "name" not in data:
        config = config.model_copy(update={"name": agent_name})
    return config


def resolve_settings(
    *,
    agent_config_path: Path | None = None,
    agent_name: str | None = None,
    llm_backend: str | None = None,
    model_id: str | None = None,
    ollama_host: str | None = None,
    decision_interval: float | None = None,
    log_dir: Path | None = None,
    ticks: int | None = None,
) -> RuntimeSettings:
    """Merge explicit values over ``CRAFTMIND_*`` environment variables."""
    config_env = os.getenv("CRAFTMIND_AGENT_CONFIG")
    interval_env = os.getenv("CRAFTMIND_DECISION_INTERVAL")
    log_dir_env = os.getenv("CRAFTMIND_LOG_DIR")
    return RuntimeSettings(
        agent_config_path=agent_config_path
        or (Path(config_env) if config_env else None),
        agent_name=agent_name
        or os.getenv("CRAFTMIND_AGENT_NAME")
        or DEFAULT_AGENT_NAME,
        llm_backend=(
            llm_backend or os.getenv("CRAFTMIND_LLM") or DEFAULT_LLM_BACKEND
        ).lower(),
        model_id=model_id or os.getenv("CRAFTMIND_MODEL_ID") or DEFAULT_MODEL_ID,
        ollama_host=ollama_host
        or os.getenv("CRAFTMIND_OLLAMA_HOST")
        or DEFAULT_OLLAMA_HOST,
        decision_interval=(
            decision_interval
            if decision_interval is not None
            else _env_interval(interval_env)
        ),
        log_dir=log_dir or (Path(log_dir_env) if log_dir_env else DEFAULT_LOG_DIR),
        ticks=ticks,
    )


def _env_interval(value: str | None) -> float:
    if not value:
        return DEFAULT_DECISION_INTERVAL
    try:
        interval = float(value)
    except ValueError:
        logger.warning(
            "Ignoring CRAFTMIND_DECISION_INTERVAL=%r: not a number", value
        )
        return DEFAULT_DECISION_INTERVAL
    if not math.isfinite(interval) or interval < 0:
        logger.warning("Ignoring invalid CRAFTMIND_DECISION_INTERVAL=%r", value)
        return DEFAULT_DECISION_INTERVAL
    return interval
