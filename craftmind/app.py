"""Application entry for running the agent decision loop."""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import Callable

from craftmind.config import (
    DEFAULT_MODEL_ID,
    AgentConfig,
    RuntimeSettings,
    load_agent_config,
)
from craftmind.db.diary_log import (
    append_error,
    append_event,
    create_run_folder,
    write_header,
)
from craftmind.llm.base import LLMConfig, LLMUnavailableError, TextGenerator
from craftmind.llm.fake_llm import FakeLLM
from craftmind.llm.mlx_llm import MlxLLM
from craftmind.llm.ollama_client import OllamaClient
from craftmind.sim.actuator import ActuatorUnavailableError, WorldBody
from craftmind.sim.contracts import CycleRecord
from craftmind.sim.decision_loop import DecisionCycle, run_cycles
from craftmind.sim.dispatcher import ActionDispatcher
from craftmind.sim.rules import PermissionEvaluator
from craftmind.sim.world import build_starter_world

logger = logging.getLogger(__name__)

DEFAULT_MLX_MODEL_ID = "mlx-community/Meta-Llama-3.1-8B-Instruct-4bit"


def run_agent(
    settings: RuntimeSettings,
    *,
    llm: TextGenerator | None = None,
    world: WorldBody | None = None,
    stop_event: threading.Event | None = None,
    on_cycle: Callable[[CycleRecord], None] | None = None,
) -> Path:
    """Start the agent and run decision cycles until stopped.

    Returns the run folder holding the diary. Startup failures are recorded in
    the diary and re-raised. A ``stop_event`` set during startup ends the run
    before the actuator connects.
    """
    config = load_agent_config(
        settings.agent_config_path, agent_name=settings.agent_name
    )
    run_dir, diary_path = create_run_folder(settings.log_dir, config.name)
    write_header(
        diary_path,
        config,
        metadata={
            "run_id": run_dir.name,
            "llm_backend": settings.llm_backend,
            "model_id": settings.model_id,
            "decision_interval": settings.decision_interval,
        },
    )
    logger.info("Starting %s with goal: %s", config.name, config.goal)
    logger.info("Diary: %s", diary_path)

    generator = llm or resolve_llm(settings, stop_event=stop_event)
    actuator = world or build_starter_world()
    try:
        return _run_until_stopped(
            settings,
            config,
            run_dir,
            diary_path,
            generator,
            actuator,
            stop_event=stop_event,
            on_cycle=on_cycle,
        )
    finally:
        if llm is None:
            _close_generator(generator)


def _run_until_stopped(
    settings: RuntimeSettings,
    config: AgentConfig,
    run_dir: Path,
    diary_path: Path,
    generator: TextGenerator,
    actuator: WorldBody,
    *,
    stop_event: threading.Event | None,
    on_cycle: Callable[[CycleRecord], None] | None,
) -> Path:
    try:
        logger.info("Waiting for %s backend...", settings.llm_backend)
        generator.wait_for_ready()
        if stop_event is not None and stop_event.is_set():
            logger.info("Stopped before startup finished")
            append_event(diary_path, "shutdown", {"ticks": 0})
            return run_dir
        actuator.connect()
    except (LLMUnavailableError, ActuatorUnavailableError) as exc:
        append_error(diary_path, "Startup failed", exc)
        raise

    evaluator = PermissionEvaluator(config.rules)
    cycle = DecisionCycle(
        config=config,
        llm=generator,
        observer=actuator,
        evaluator=evaluator,
        dispatcher=ActionDispatcher(actuator),
        diary_path=diary_path,
    )
    try:
        for record in run_cycles(
            cycle,
            ticks=settings.ticks,
            interval=settings.decision_interval,
            stop_event=stop_event,
        ):
            if on_cycle is not None:
                on_cycle(record)
    finally:
        logger.info("Shutting down...")
        actuator.disconnect()
        append_event(diary_path, "shutdown", {"ticks": cycle.tick})
    return run_dir


def resolve_llm(
    settings: RuntimeSettings, *, stop_event: threading.Event | None = None
) -> TextGenerator:
    backend = settings.llm_backend.lower()
    if backend == "ollama":
        return OllamaClient(
            config=LLMConfig(model_id=settings.model_id),
            host=settings.ollama_host,
            stop_event=stop_event,
        )
    if backend == "mlx":
        model = (
            DEFAULT_MLX_MODEL_ID
            if settings.model_id == DEFAULT_MODEL_ID
            else settings.model_id
        )
        return MlxLLM(config=LLMConfig(model_id=model))
    return FakeLLM()


def install_signal_handlers(stop_event: threading.Event) -> None:
    """Set ``stop_event`` on SIGINT/SIGTERM so the loop ends before its next tick."""

    def _handle(signum, frame) -> None:
        _ = frame
        logger.info("Received %s", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def _close_generator(generator: TextGenerator) -> None:
    close = getattr(generator, "close", None)
    if callable(close):
        close()
