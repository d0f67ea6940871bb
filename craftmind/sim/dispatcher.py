"""Route permitted actions to world actuator capabilities."""

from __future__ import annotations

import logging
import math
from typing import Callable

from craftmind.sim.actuator import WorldActuator
from craftmind.sim.contracts import Action

logger = logging.getLogger(__name__)

LOOK_OFFSETS: dict[str, tuple[float, float, float]] = {
    "north": (0, 0, -10),
    "south": (0, 0, 10),
    "east": (10, 0, 0),
    "west": (-10, 0, 0),
    "up": (0, 10, 0),
    "down": (0, -10, 0),
}


class ActionDispatcher:
    """Map an action type onto one actuator capability.

    Handlers check argument shape only; whether the action makes sense in the
    world is left to the actuator.
    """

    def __init__(self, actuator: WorldActuator) -> None:
        self._actuator = actuator
        self._handlers: dict[str, Callable[[Action], bool]] = {
            "move": self._move,
            "goto": self._goto,
            "mine": self._mine,
            "collect": self._collect,
            "attack": self._attack,
            "craft": self._craft,
            "place": self._place,
            "eat": self._eat,
            "sleep": self._sleep,
            "chat": self._chat,
            "wait": self._wait,
            "look": self._look,
        }

    @property
    def verbs(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def dispatch(self, action: Action) -> bool:
        handler = self._handlers.get(action.type)
        if handler is None:
            logger.warning("Unknown action type: %s", action.type)
            return False
        try:
            return bool(handler(action))
        except Exception:
            logger.exception("Action %s failed", action.type)
            return False

    def _move(self, action: Action) -> bool:
        if not action.params:
            logger.info("Move requires a direction")
            return False
        return self._actuator.move_direction(action.params[0].lower())

    def _goto(self, action: Action) -> bool:
        if not action.params or len(action.params) != 3:
            logger.info("Goto requires x, y, z coordinates")
            return False
        try:
            x, y, z = (float(value) for value in action.params)
        except ValueError:
            logger.info("Invalid coordinates: %s", action.raw)
            return False
        if not all(math.isfinite(value) for value in (x, y, z)):
            logger.info("Invalid coordinates: %s", action.raw)
            return False
        return self._actuator.go_to(x, y, z)

    def _mine(self, action: Action) -> bool:
        name = _joined_name(action)
        if name is None:
            logger.info("Mine requires a block type")
            return False
        return self._actuator.mine_block(name)

    def _collect(self, action: Action) -> bool:
        # Collecting picks up the named block the same way mining does.
        name = _joined_name(action)
        if name is None:
            logger.info("Collect requires an item name")
            return False
        return self._actuator.mine_block(name)

    def _attack(self, action: Action) -> bool:
        name = _joined_name(action)
        if name is None:
            logger.info("Attack requires an entity type")
            return False
        return self._actuator.attack_entity(name)

    def _craft(self, action: Action) -> bool:
        name = _joined_name(action)
        if name is None:
            logger.info("Craft requires an item name")
            return False
        return self._actuator.craft(name)

    def _place(self, action: Action) -> bool:
        name = _joined_name(action)
        if name is None:
            logger.info("Place requires a block name")
            return False
        return self._actuator.place_block(name)

    def _eat(self, action: Action) -> bool:
        return self._actuator.eat_food()

    def _sleep(self, action: Action) -> bool:
        return self._actuator.sleep()

    def _chat(self, action: Action) -> bool:
        message = action.raw.strip()
        if not message:
            logger.info("Chat requires a message")
            return False
        self._actuator.chat(message)
        return True

    def _wait(self, action: Action) -> bool:
        logger.info("Waiting...")
        return True

    def _look(self, action: Action) -> bool:
        if not action.params:
            logger.info("Look requires a direction")
            return False
        direction = action.params[0].lower()
        offset = LOOK_OFFSETS.get(direction)
        if offset is None:
            logger.info("Unknown direction: %s", direction)
            return False
        position = self._actuator.position
        dx, dy, dz = offset
        return self._actuator.look_at(position.x + dx, position.y + dy, position.z + dz)


def _joined_name(action: Action) -> str | None:
    if not action.params:
        return None
    return "_".join(action.params).lower()
