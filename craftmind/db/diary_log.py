"""Agent diary logging helpers (JSONL)."""

from __future__ import annotations

import json
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from craftmind.config import AgentConfig
from craftmind.sim.contracts import CycleRecord

SCHEMA_VERSION = 1
DIARY_LOG_NAME = "diary.jsonl"


def create_run_folder(
    base_dir: Path, agent_name: str, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    run_id = timestamp or format_timestamp(utc_now())
    run_dir = base_dir / f"{agent_name.lower()}_{run_id}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir, run_dir / DIARY_LOG_NAME


def write_header(
    path: Path, config: AgentConfig, metadata: dict[str, Any] | None = None
) -> None:
    record: dict[str, Any] = {
        "type": "header",
        "schema_version": SCHEMA_VERSION,
        "started_at": utc_now().isoformat(),
        "config": config.model_dump(),
        "metadata": metadata or {},
    }
    _append_record(path, record)


def append_cycle_record(path: Path, cycle: CycleRecord) -> None:
    record: dict[str, Any] = {
        "type": "cycle",
        "schema_version": SCHEMA_VERSION,
        "payload": cycle.model_dump(mode="json"),
    }
    _append_record(path, record)


def append_error(path: Path, message: str, error: BaseException) -> None:
    record: dict[str, Any] = {
        "type": "error",
        "schema_version": SCHEMA_VERSION,
        "at": utc_now().isoformat(),
        "message": message,
        "error": str(error),
        "traceback": "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        ),
    }
    _append_record(path, record)


def append_event(path: Path, kind: str, details: dict[str, Any]) -> None:
    record: dict[str, Any] = {
        "type": "event",
        "schema_version": SCHEMA_VERSION,
        "at": utc_now().isoformat(),
        "kind": kind.upper(),
        "details": details,
    }
    _append_record(path, record)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")


def _append_record(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")
