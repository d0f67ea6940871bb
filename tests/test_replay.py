import json
from pathlib import Path

from craftmind.config import AgentConfig
from craftmind.db.diary_log import (
    DIARY_LOG_NAME,
    append_cycle_record,
    append_error,
    append_event,
    create_run_folder,
    write_header,
)
from craftmind.render.diary_reader import read_cycle_records, read_header
from craftmind.sim.contracts import Action, CycleRecord, CycleResult


def test_diary_log_header_and_cycles(tmp_path: Path) -> None:
    run_dir, log_path = create_run_folder(
        tmp_path, "Ada", timestamp="2026-01-31T15-50-00Z"
    )
    write_header(log_path, AgentConfig(name="Ada"), {"run_id": run_dir.name})
    append_cycle_record(log_path, _build_record(tick=1))

    with log_path.open("r", encoding="utf-8") as handle:
        records = [json.loads(line) for line in handle]

    assert run_dir.name == "ada_2026-01-31T15-50-00Z"
    assert log_path.name == DIARY_LOG_NAME
    assert records[0]["type"] == "header"
    assert records[0]["config"]["name"] == "Ada"
    assert records[0]["metadata"]["run_id"] == run_dir.name
    assert records[1]["type"] == "cycle"
    assert records[1]["payload"]["tick"] == 1
    assert records[1]["payload"]["action"]["params"] == ["oak_log"]


def test_errors_and_events_are_appended(tmp_path: Path) -> None:
    log_path = tmp_path / DIARY_LOG_NAME
    try:
        raise ValueError("bad block")
    except ValueError as exc:
        append_error(log_path, "Decision loop error", exc)
    append_event(log_path, "shutdown", {"ticks": 4})

    with log_path.open("r", encoding="utf-8") as handle:
        error, event = [json.loads(line) for line in handle]

    assert error["type"] == "error"
    assert error["error"] == "bad block"
    assert "ValueError" in error["traceback"]
    assert event["kind"] == "SHUTDOWN"
    assert event["details"] == {"ticks": 4}


def test_diary_reader_skips_non_cycle_lines(tmp_path: Path) -> None:
    _, log_path = create_run_folder(tmp_path, "Ada", timestamp="2026-01-31T15-51-00Z")
    write_header(log_path, AgentConfig(name="Ada"))
    append_cycle_record(log_path, _build_record(tick=2))
    append_event(log_path, "chat", {"message": "hi"})
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write("{not json\n")

    records = list(read_cycle_records(log_path))
    header = read_header(log_path)

    assert [record.tick for record in records] == [2]
    assert records[0].action == Action(type="mine", params=("oak_log",), raw="oak_log")
    assert header is not None
    assert header["schema_version"] == 1


def _build_record(tick: int) -> CycleRecord:
    return CycleRecord(
        tick=tick,
        timestamp="2026-01-31T15:50:00+00:00",
        goal="Build a pickaxe",
        reasoning="THINKING: wood.\nACTION: mine oak_log",
        action=Action(type="mine", params=("oak_log",), raw="oak_log"),
        result=CycleResult(success=True),
    )
