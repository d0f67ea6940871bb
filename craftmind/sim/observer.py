"""Helpers that turn raw world state into an Observation."""

from __future__ import annotations

import math
from typing import Iterable

from craftmind.sim.contracts import EntitySighting, Position

MAX_ENTITY_DISTANCE = 16.0
MAX_ENTITIES = 10


def time_of_day_label(time: int) -> str:
    if 0 <= time < 6000:
        return "morning"
    if 6000 <= time < 12000:
        return "day"
    if 12000 <= time < 18000:
        return "evening"
    return "night"


def weather_label(is_raining: bool, thunder_state: float = 0.0) -> str:
    if is_raining:
        return "thunderstorm" if thunder_state > 0 else "rain"
    return "clear"


def distance(a: Position, b: Position) -> float:
    return math.dist((a.x, a.y, a.z), (b.x, b.y, b.z))


def nearest_entities(
    origin: Position,
    entities: Iterable[tuple[str, str | None, Position]],
    *,
    max_distance: float = MAX_ENTITY_DISTANCE,
    limit: int = MAX_ENTITIES,
) -> list[EntitySighting]:
    """Return sightings within ``max_distance``, closest first."""
    sightings = []
    for entity_type, name, position in entities:
        gap = distance(origin, position)
        if gap <= max_distance:
            sightings.append(
                EntitySighting(type=entity_type, name=name, distance=gap)
            )
    sightings.sort(key=lambda sighting: sighting.distance)
    return sightings[:limit]
