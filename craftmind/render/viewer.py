"""Rich rendering for diary cycle records."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from craftmind.sim.contracts import CycleRecord, Observation

MAX_BLOCKS = 5
MAX_ITEMS = 5


def render_cycle(record: CycleRecord) -> RenderableType:
    header = Text(f"Tick {record.tick}  {record.timestamp}", style="bold")
    sections: list[RenderableType] = [header]
    if record.observation is not None:
        sections.append(_render_observation(record.observation))
    sections.append(Panel(Text(record.goal), title="Current Goal"))
    if record.reasoning:
        sections.append(Panel(Text(record.reasoning), title="Reasoning"))
    sections.append(_render_decision(record))
    sections.append(_render_result(record))
    if record.rule_violation:
        sections.append(
            Panel(
                Text(f"Blocked: {record.rule_violation}", style="bold red"),
                title="Rule Violation",
            )
        )
    return Panel(Group(*sections), title="Thought Cycle")


def _render_observation(observation: Observation) -> RenderableType:
    table = Table(title="Observations", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    position = observation.position
    table.add_row(
        "Position", f"({position.x:.1f}, {position.y:.1f}, {position.z:.1f})"
    )
    table.add_row("Health", f"{observation.health:g}/20")
    table.add_row("Hunger", f"{observation.food:g}/20")
    table.add_row("Time", Text(observation.time_of_day))
    table.add_row("Weather", Text(observation.weather))
    table.add_row(
        "Nearby Blocks",
        Text(", ".join(observation.nearby_blocks[:MAX_BLOCKS]) or "none"),
    )
    entities = ", ".join(entity.type for entity in observation.nearby_entities)
    table.add_row("Nearby Entities", Text(entities or "none"))
    table.add_row(
        "Inventory",
        Text(
            ", ".join(
                f"{item.name}x{item.count}"
                for item in observation.inventory[:MAX_ITEMS]
            )
            or "empty"
        ),
    )
    return table


def _render_decision(record: CycleRecord) -> RenderableType:
    table = Table(title="Decision", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    if record.action is None:
        table.add_row("Action", "None")
        return table
    table.add_row("Action", Text(record.action.type))
    table.add_row(
        "Parameters", Text(" ".join(record.action.params or ()) or "none")
    )
    return table


def _render_result(record: CycleRecord) -> RenderableType:
    style = "green" if record.result.success else "red"
    table = Table(title="Result", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Success", Text(str(record.result.success), style=style))
    if record.result.message:
        table.add_row("Message", Text(record.result.message))
    return table
