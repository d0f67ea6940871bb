"""Ollama HTTP backend."""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx

from craftmind.llm.base import (
    FALLBACK_RESPONSE,
    LLMConfig,
    LLMUnavailableError,
    TextGenerator,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:11434"
GENERATE_TIMEOUT = 60.0
TAGS_TIMEOUT = 5.0
PULL_TIMEOUT = 600.0


@dataclass
class OllamaClient(TextGenerator):
    config: LLMConfig
    host: str = DEFAULT_HOST
    max_retries: int = 30
    retry_delay: float = 5.0
    transport: httpx.BaseTransport | None = None
    sleep: Callable[[float], None] = time.sleep
    stop_event: threading.Event | None = None
    _client: httpx.Client = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            base_url=self.host,
            timeout=GENERATE_TIMEOUT,
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def wait_for_ready(self) -> None:
        """Poll the server until the model is available.

        A failed check or pull is retried after ``retry_delay``. A set
        ``stop_event`` ends the wait early without raising.
        """
        for attempt in range(1, self.max_retries + 1):
            if self._stopped():
                logger.info("Stopped while waiting for Ollama")
                return
            try:
                response = self._client.get("/api/tags", timeout=TAGS_TIMEOUT)
                if response.is_success:
                    if not self._has_model(_json_object(response)):
                        logger.info(
                            "Model %s not found, pulling...", self.config.model_id
                        )
                        self.pull_model()
                    return
            except (httpx.HTTPError, ValueError) as exc:
                logger.debug("Readiness check failed: %s", exc)
            except LLMUnavailableError as exc:
                logger.warning("%s", exc)
            logger.info("Waiting for Ollama... (%d/%d)", attempt, self.max_retries)
            if self._pause(self.retry_delay):
                logger.info("Stopped while waiting for Ollama")
                return
        raise LLMUnavailableError("Ollama not available after maximum retries")

    def pull_model(self) -> None:
        try:
            with self._client.stream(
                "POST",
                "/api/pull",
                json={"name": self.config.model_id},
                timeout=PULL_TIMEOUT,
            ) as response:
                response.raise_for_status()
                for line in response.iter_lines():
                    status = _pull_status(line)
                    if status:
                        logger.info("Pull: %s", status)
        except httpx.HTTPError as exc:
            raise LLMUnavailableError(f"Failed to pull model: {exc}") from exc
        logger.info("Model %s pulled successfully", self.config.model_id)

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        payload = {
            "model": self.config.model_id,
            "prompt": user_prompt,
            "system": system_prompt,
            "stream": False,
            "options": self._options(),
        }
        try:
            response = self._client.post("/api/generate", json=payload)
            response.raise_for_status()
            return _json_object(response).get("response") or ""
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Generate error: %s", exc)
            return FALLBACK_RESPONSE

    def chat(self, messages: list[dict[str, str]]) -> str:
        payload = {
            "model": self.config.model_id,
            "messages": messages,
            "stream": False,
            "options": self._options(),
        }
        try:
            response = self._client.post("/api/chat", json=payload)
            response.raise_for_status()
            message = _json_object(response).get("message")
            if not isinstance(message, dict):
                return ""
            return message.get("content") or ""
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Chat error: %s", exc)
            return FALLBACK_RESPONSE

    def _options(self) -> dict[str, Any]:
        return {
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
            "num_predict": self.config.max_tokens,
        }

    def _stopped(self) -> bool:
        return self.stop_event is not None and self.stop_event.is_set()

    def _pause(self, seconds: float) -> bool:
        if self.stop_event is not None:
            return self.stop_event.wait(seconds)
        self.sleep(seconds)
        return False

    def _has_model(self, data: dict[str, Any]) -> bool:
        family = self.config.model_id.split(":")[0]
        models = data.get("models")
        if not isinstance(models, list):
            return False
        return any(
            isinstance(model, dict) and family in str(model.get("name", ""))
            for model in models
        )


def _json_object(response: httpx.Response) -> dict[str, Any]:
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {response.url.path}")
    return data


def _pull_status(line: str) -> str | None:
    if not line.strip():
        return None
    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(record, dict):
        return None
    return record.get("status")
