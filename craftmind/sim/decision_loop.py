"""Decision cycle orchestration: observe, prompt, parse, authorize, act, log."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator

from craftmind.config import AgentConfig
from craftmind.db.diary_log import (
    append_cycle_record,
    append_error,
    append_event,
    utc_now,
)
from craftmind.llm.base import TextGenerator
from craftmind.llm.prompts import build_system_prompt, build_user_prompt
from craftmind.sim.action_parser import parse_action
from craftmind.sim.actuator import ObservationSource
from craftmind.sim.contracts import (
    Action,
    CycleRecord,
    CycleResult,
    Observation,
)
from craftmind.sim.dispatcher import ActionDispatcher
from craftmind.sim.rules import PermissionEvaluator

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Could not parse action"


class CyclePhase(str, Enum):
    IDLE = "idle"
    OBSERVING = "observing"
    PROMPTING = "prompting"
    PARSING = "parsing"
    AUTHORIZING = "authorizing"
    DISPATCHING = "dispatching"
    LOGGING = "logging"


@dataclass
class DecisionCycle:
    """Runs one decision tick at a time and records it in the diary.

    Any failure inside a tick is turned into a failed result so the caller's
    loop keeps going.
    """

    config: AgentConfig
    llm: TextGenerator
    observer: ObservationSource
    evaluator: PermissionEvaluator
    dispatcher: ActionDispatcher
    diary_path: Path | None = None
    clock: Callable[[], datetime] = utc_now
    tick: int = 0
    phase: CyclePhase = CyclePhase.IDLE
    phase_history: list[CyclePhase] = field(default_factory=list)

    def run_once(self) -> CycleRecord:
        self.tick += 1
        self.phase_history = []
        observation: Observation | None = None
        reasoning: str | None = None
        action: Action | None = None
        violation: str | None = None

        try:
            self._enter(CyclePhase.OBSERVING)
            observation = self.observer.observe()

            self._enter(CyclePhase.PROMPTING)
            system_prompt = build_system_prompt(
                self.config, rules=self.evaluator.rule_texts()
            )
            user_prompt = build_user_prompt(observation, self.config.goal)
            reasoning = self.llm.generate(system_prompt, user_prompt)

            self._enter(CyclePhase.PARSING)
            action = parse_action(reasoning)
            if action is None:
                result = CycleResult(success=False, message=PARSE_FAILURE_MESSAGE)
            else:
                logger.info("Action: %s %s", action.type, action.raw)
                self._enter(CyclePhase.AUTHORIZING)
                permission = self.evaluator.is_allowed(action)
                if not permission.permitted:
                    violation = permission.reason
                    logger.info("Blocked by rule: %s", violation)
                    result = CycleResult(success=False, message=f"Blocked: {violation}")
                else:
                    self._enter(CyclePhase.DISPATCHING)
                    result = CycleResult(success=self.dispatcher.dispatch(action))
        except Exception as exc:
            logger.exception("Decision loop error")
            self._write(append_error, "Decision loop error", exc)
            result = CycleResult(success=False, message=str(exc) or type(exc).__name__)

        self._enter(CyclePhase.LOGGING)
        record = CycleRecord(
            tick=self.tick,
            timestamp=self.clock().isoformat(),
            goal=self.config.goal,
            observation=observation,
            reasoning=reasoning,
            action=action,
            result=result,
            rule_violation=violation,
        )
        self._write(append_cycle_record, record)
        if action is not None and action.type == "chat" and result.success:
            self._write(
                append_event,
                "chat",
                {"from": self.config.name, "message": action.raw},
            )
        self._enter(CyclePhase.IDLE)
        return record

    def _enter(self, phase: CyclePhase) -> None:
        self.phase = phase
        self.phase_history.append(phase)

    def _write(self, writer: Callable[..., None], *args) -> None:
        if self.diary_path is None:
            return
        try:
            writer(self.diary_path, *args)
        except OSError:
            logger.exception("Could not write diary entry to %s", self.diary_path)


def run_cycles(
    cycle: DecisionCycle,
    *,
    ticks: int | None = None,
    interval: float = 0.0,
    stop_event: threading.Event | None = None,
) -> Iterator[CycleRecord]:
    """Yield one record per tick, waiting ``interval`` seconds between ticks.

    The next tick is scheduled only after the previous record is written, and
    a set ``stop_event`` ends the loop before the next tick fires.
    """
    stop = stop_event or threading.Event()
    completed = 0
    while not stop.is_set():
        record = cycle.run_once()
        completed += 1
        yield record
        if ticks is not None and completed >= ticks:
            break
        if stop.wait(interval):
            break
