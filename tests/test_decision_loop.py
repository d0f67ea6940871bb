import json
import threading
from datetime import datetime, timezone
from pathlib import Path

from craftmind.config import AgentConfig
from craftmind.llm.fake_llm import FakeLLM
from craftmind.sim.decision_loop import (
    PARSE_FAILURE_MESSAGE,
    CyclePhase,
    DecisionCycle,
    run_cycles,
)
from craftmind.sim.dispatcher import ActionDispatcher
from craftmind.sim.rules import PermissionEvaluator
from craftmind.sim.world import SimulatedWorld, build_starter_world


def test_permitted_action_is_dispatched(tmp_path: Path) -> None:
    cycle, world = _build_cycle(["THINKING: wood.\nACTION: mine oak_log"], tmp_path)

    record = cycle.run_once()

    assert record.tick == 1
    assert record.action is not None and record.action.type == "mine"
    assert record.result.success is True
    assert record.rule_violation is None
    assert world.inventory["oak_log"] == 1
    assert cycle.phase == CyclePhase.IDLE
    assert cycle.phase_history == [
        CyclePhase.OBSERVING,
        CyclePhase.PROMPTING,
        CyclePhase.PARSING,
        CyclePhase.AUTHORIZING,
        CyclePhase.DISPATCHING,
        CyclePhase.LOGGING,
        CyclePhase.IDLE,
    ]


def test_denied_action_skips_dispatch(tmp_path: Path) -> None:
    cycle, world = _build_cycle(
        ["ACTION: attack cow"], tmp_path, rules=["cannot attack players"]
    )

    record = cycle.run_once()

    assert record.result.success is False
    assert record.result.message == "Blocked: cannot attack players"
    assert record.rule_violation == "cannot attack players"
    assert len(world.entities) == 3
    assert CyclePhase.DISPATCHING not in cycle.phase_history
    assert CyclePhase.LOGGING in cycle.phase_history


def test_unparseable_output_is_recorded(tmp_path: Path) -> None:
    cycle, _ = _build_cycle(["I am not sure what to do."], tmp_path)

    record = cycle.run_once()

    assert record.action is None
    assert record.result.success is False
    assert record.result.message == PARSE_FAILURE_MESSAGE
    assert record.reasoning == "I am not sure what to do."


def test_unexpected_errors_do_not_stop_the_cycle(tmp_path: Path) -> None:
    class BrokenLLM:
        def wait_for_ready(self) -> None:
            return None

        def generate(self, system_prompt: str, user_prompt: str) -> str:
            raise RuntimeError("model crashed")

    world = build_starter_world()
    diary_path = tmp_path / "diary.jsonl"
    cycle = DecisionCycle(
        config=AgentConfig(name="Ada"),
        llm=BrokenLLM(),
        observer=world,
        evaluator=PermissionEvaluator([]),
        dispatcher=ActionDispatcher(world),
        diary_path=diary_path,
    )

    record = cycle.run_once()

    assert record.result.success is False
    assert record.result.message == "model crashed"
    assert record.observation is not None
    types = [json.loads(line)["type"] for line in diary_path.read_text().splitlines()]
    assert types == ["error", "cycle"]


def test_prompt_includes_runtime_rules(tmp_path: Path) -> None:
    cycle, _ = _build_cycle(["ACTION: wait"], tmp_path, rules=["be polite"])
    cycle.evaluator.add_rule("must not place dirt")

    cycle.run_once()

    system_prompt, user_prompt = cycle.llm.calls[0]
    assert "1. be polite\n2. must not place dirt" in system_prompt
    assert "CURRENT STATE:" in user_prompt


def test_run_cycles_logs_each_tick_before_the_next(tmp_path: Path) -> None:
    cycle, _ = _build_cycle(
        ["ACTION: wait", "ACTION: chat hello there"], tmp_path
    )
    diary_path = cycle.diary_path
    seen: list[int] = []

    for record in run_cycles(cycle, ticks=3, interval=0):
        cycles = [
            json.loads(line)
            for line in diary_path.read_text().splitlines()
            if json.loads(line)["type"] == "cycle"
        ]
        assert cycles[-1]["payload"]["tick"] == record.tick
        seen.append(record.tick)

    assert seen == [1, 2, 3]
    events = [
        json.loads(line)
        for line in diary_path.read_text().splitlines()
        if json.loads(line)["type"] == "event"
    ]
    assert events[0]["kind"] == "CHAT"
    assert events[0]["details"]["message"] == "hello there"


def test_stop_event_prevents_the_next_tick(tmp_path: Path) -> None:
    cycle, _ = _build_cycle(["ACTION: wait"], tmp_path)
    stop_event = threading.Event()

    records = []
    for record in run_cycles(cycle, interval=30.0, stop_event=stop_event):
        records.append(record)
        stop_event.set()

    assert len(records) == 1

    stop_event.set()
    assert list(run_cycles(cycle, stop_event=stop_event)) == []


def _build_cycle(
    script: list[str], tmp_path: Path, *, rules: list[str] | None = None
) -> tuple[DecisionCycle, SimulatedWorld]:
    world = build_starter_world()
    config = AgentConfig(name="Ada", goal="Build a pickaxe", rules=rules or [])
    cycle = DecisionCycle(
        config=config,
        llm=FakeLLM(script=script),
        observer=world,
        evaluator=PermissionEvaluator(config.rules),
        dispatcher=ActionDispatcher(world),
        diary_path=tmp_path / "diary.jsonl",
        clock=lambda: datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    return cycle, world
