"""World actuator and observation source interfaces."""

from __future__ import annotations

from typing import Protocol

from craftmind.sim.contracts import Observation, Position


class ActuatorUnavailableError(RuntimeError):
    """Raised when the world actuator cannot be connected at startup."""


class WorldActuator(Protocol):
    """Capability contract used by the dispatcher.

    Each operation reports its own success and may fail independently.
    """

    @property
    def position(self) -> Position:
        """Current agent position."""

    def connect(self) -> None:
        """Join the world; raise ActuatorUnavailableError on failure."""

    def move_direction(self, direction: str) -> bool: ...

    def go_to(self, x: float, y: float, z: float) -> bool: ...

    def mine_block(self, name: str) -> bool: ...

    def attack_entity(self, name: str) -> bool: ...

    def craft(self, name: str) -> bool: ...

    def place_block(self, name: str) -> bool: ...

    def eat_food(self) -> bool: ...

    def sleep(self) -> bool: ...

    def chat(self, message: str) -> None: ...

    def look_at(self, x: float, y: float, z: float) -> bool: ...

    def disconnect(self) -> None: ...


class ObservationSource(Protocol):
    def observe(self) -> Observation:
        """Return a read-only snapshot of the agent's surroundings."""


class WorldBody(WorldActuator, ObservationSource, Protocol):
    """An actuator that can also report what the agent sees."""
