"""Read diary logs and yield CycleRecords."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from craftmind.sim.contracts import CycleRecord


def read_cycle_records(path: Path) -> Iterator[CycleRecord]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = parse_record(line)
            cycle = cycle_from_record(record)
            if cycle is not None:
                yield cycle


def read_header(path: Path) -> dict[str, Any] | None:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = parse_record(line)
            if record and record.get("type") == "header":
                return record
    return None


def cycle_from_record(record: dict[str, Any] | None) -> CycleRecord | None:
    if not record or record.get("type") != "cycle":
        return None
    payload = record.get("payload")
    if payload is None:
        return None
    return CycleRecord.model_validate(payload)


def parse_record(line: str) -> dict[str, Any] | None:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None
