"""Deterministic in-memory world used for demos and tests."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from craftmind.sim.contracts import InventoryItem, Observation, Position
from craftmind.sim.observer import (
    nearest_entities,
    time_of_day_label,
    weather_label,
)

logger = logging.getLogger(__name__)

Coord = tuple[int, int, int]

DAY_LENGTH = 24000
TICKS_PER_ACTION = 400
HUNGER_PER_ACTION = 0.25
SEARCH_RADIUS = 32.0
ATTACK_RADIUS = 16.0

MOVE_OFFSETS: dict[str, tuple[int, int]] = {
    "north": (0, -5),
    "south": (0, 5),
    "east": (5, 0),
    "west": (-5, 0),
}

SCAN_DIRECTIONS: tuple[tuple[str, int, int], ...] = (
    ("east", 1, 0),
    ("west", -1, 0),
    ("south", 0, 1),
    ("north", 0, -1),
)

PICKAXE_TIERS = ("wooden_pickaxe", "stone_pickaxe", "iron_pickaxe", "diamond_pickaxe")

# Minimum pickaxe tier index per block; unlisted blocks break by hand.
MINING_TIER: dict[str, int] = {
    "stone": 0,
    "cobblestone": 0,
    "coal_ore": 0,
    "iron_ore": 1,
    "copper_ore": 1,
    "lapis_ore": 1,
    "gold_ore": 2,
    "diamond_ore": 2,
    "redstone_ore": 2,
    "emerald_ore": 2,
}

DROPS: dict[str, str] = {
    "stone": "cobblestone",
    "coal_ore": "coal",
    "diamond_ore": "diamond",
    "grass_block": "dirt",
}

FOOD_POINTS: dict[str, int] = {
    "apple": 4,
    "bread": 5,
    "carrot": 3,
    "cooked_beef": 8,
    "cooked_porkchop": 8,
    "beef": 3,
}


@dataclass(frozen=True)
class Recipe:
    ingredients: dict[str, int]
    count: int = 1
    needs_table: bool = False


RECIPES: dict[str, Recipe] = {
    "oak_planks": Recipe({"oak_log": 1}, count=4),
    "birch_planks": Recipe({"birch_log": 1}, count=4),
    "stick": Recipe({"oak_planks": 2}, count=4),
    "crafting_table": Recipe({"oak_planks": 4}),
    "wooden_pickaxe": Recipe({"oak_planks": 3, "stick": 2}, needs_table=True),
    "wooden_sword": Recipe({"oak_planks": 2, "stick": 1}, needs_table=True),
    "stone_pickaxe": Recipe({"cobblestone": 3, "stick": 2}, needs_table=True),
    "furnace": Recipe({"cobblestone": 8}, needs_table=True),
}


@dataclass
class EntityState:
    entity_type: str
    position: Coord
    name: str | None = None
    health: float = 20.0


@dataclass
class SimulatedWorld:
    """World actuator and observation source backed by plain dictionaries."""

    position_xyz: tuple[float, float, float] = (0.5, 64.0, 0.5)
    blocks: dict[Coord, str] = field(default_factory=dict)
    entities: list[EntityState] = field(default_factory=list)
    inventory: dict[str, int] = field(default_factory=dict)
    health: float = 20.0
    food: float = 20.0
    time: int = 0
    is_raining: bool = False
    thunder_state: float = 0.0
    biome: str = "plains"
    connected: bool = False
    chat_log: list[str] = field(default_factory=list)
    look_target: tuple[float, float, float] | None = None

    def connect(self) -> None:
        self.connected = True
        logger.info("Spawned at %s", self.position_xyz)

    def disconnect(self) -> None:
        if self.connected:
            logger.info("Disconnected")
        self.connected = False

    @property
    def position(self) -> Position:
        x, y, z = self.position_xyz
        return Position(x=x, y=y, z=z)

    def observe(self) -> Observation:
        origin = self.position
        return Observation(
            position=origin,
            health=self.health,
            food=self.food,
            time_of_day=time_of_day_label(self.time),
            weather=weather_label(self.is_raining, self.thunder_state),
            nearby_blocks=self._scan_blocks(),
            nearby_entities=nearest_entities(
                origin,
                (
                    (entity.entity_type, entity.name, _to_position(entity.position))
                    for entity in self.entities
                ),
            ),
            inventory=[
                InventoryItem(name=name, count=count)
                for name, count in self.inventory.items()
            ],
            biome=self.biome,
        )

    def move_direction(self, direction: str) -> bool:
        offset = MOVE_OFFSETS.get(direction.lower())
        if offset is None:
            logger.info("Unknown direction: %s", direction)
            return False
        x, y, z = self.position_xyz
        return self.go_to(x + offset[0], y, z + offset[1])

    def go_to(self, x: float, y: float, z: float) -> bool:
        target = (math.floor(x), math.floor(y), math.floor(z))
        if target in self.blocks:
            logger.info("Failed to navigate: %s is solid", target)
            return False
        self.position_xyz = (target[0] + 0.5, float(target[1]), target[2] + 0.5)
        self._advance()
        return True

    def look_at(self, x: float, y: float, z: float) -> bool:
        self.look_target = (x, y, z)
        return True

    def mine_block(self, name: str) -> bool:
        coord = self._find_block(name)
        if coord is None:
            logger.info("No %s found nearby", name)
            return False
        required = MINING_TIER.get(name)
        if required is not None and self._best_pickaxe() < required:
            logger.info("Failed to mine: %s needs a better pickaxe", name)
            return False
        del self.blocks[coord]
        self._give(DROPS.get(name, name), 1)
        self._advance()
        logger.info("Mined %s", name)
        return True

    def place_block(self, name: str) -> bool:
        if self.inventory.get(name, 0) <= 0:
            logger.info("No %s in inventory", name)
            return False
        x, y, z = self._block_position()
        target = (x + 1, y, z)
        if target in self.blocks:
            logger.info("Failed to place: %s is occupied", target)
            return False
        self.blocks[target] = name
        self._take(name, 1)
        self._advance()
        logger.info("Placed %s", name)
        return True

    def attack_entity(self, name: str) -> bool:
        in_range = [
            (math.dist(self.position_xyz, entity.position), index)
            for index, entity in enumerate(self.entities)
            if entity.entity_type == name or entity.name == name
        ]
        in_range = [item for item in in_range if item[0] <= ATTACK_RADIUS]
        if not in_range:
            logger.info("No %s found nearby", name)
            return False
        target = self.entities[min(in_range)[1]]
        target.health -= 10
        if target.health <= 0:
            self.entities.remove(target)
        self._advance()
        return True

    def eat_food(self) -> bool:
        food = next((name for name in self.inventory if name in FOOD_POINTS), None)
        if food is None:
            logger.info("No food in inventory")
            return False
        self._take(food, 1)
        self.food = min(20.0, self.food + FOOD_POINTS[food])
        self._advance()
        logger.info("Ate %s", food)
        return True

    def craft(self, name: str) -> bool:
        recipe = RECIPES.get(name)
        if recipe is None:
            logger.info("No recipe for %s", name)
            return False
        if recipe.needs_table and self._find_block("crafting_table") is None:
            logger.info("Failed to craft: %s needs a crafting table", name)
            return False
        for ingredient, count in recipe.ingredients.items():
            if self.inventory.get(ingredient, 0) < count:
                logger.info("Failed to craft: missing %s", ingredient)
                return False
        for ingredient, count in recipe.ingredients.items():
            self._take(ingredient, count)
        self._give(name, recipe.count)
        self._advance()
        logger.info("Crafted %s", name)
        return True

    def sleep(self) -> bool:
        if self._find_block_matching(lambda block: "bed" in block) is None:
            logger.info("No bed found nearby")
            return False
        if self.time < 12000:
            logger.info("Failed to sleep: you can only sleep at night")
            return False
        self.time = 0
        logger.info("Sleeping...")
        return True

    def chat(self, message: str) -> None:
        self.chat_log.append(message)

    def _scan_blocks(self) -> list[str]:
        x, y, z = self._block_position()
        found = []
        below = self.blocks.get((x, y - 1, z))
        if below:
            found.append(f"standing on: {below}")
        for label, dx, dz in SCAN_DIRECTIONS:
            block = self.blocks.get((x + dx * 2, y, z + dz * 2))
            if block:
                found.append(f"{label}: {block}")
        return found

    def _find_block(self, name: str) -> Coord | None:
        return self._find_block_matching(lambda block: block == name)

    def _find_block_matching(self, predicate) -> Coord | None:
        origin = self.position_xyz
        best: tuple[float, Coord] | None = None
        for coord, block in self.blocks.items():
            if not predicate(block):
                continue
            gap = math.dist(origin, coord)
            if gap > SEARCH_RADIUS:
                continue
            if best is None or gap < best[0]:
                best = (gap, coord)
        return best[1] if best else None

    def _best_pickaxe(self) -> int:
        owned = [
            index
            for index, tool in enumerate(PICKAXE_TIERS)
            if self.inventory.get(tool, 0) > 0
        ]
        return max(owned, default=-1)

    def _block_position(self) -> Coord:
        x, y, z = self.position_xyz
        return math.floor(x), math.floor(y), math.floor(z)

    def _give(self, name: str, count: int) -> None:
        self.inventory[name] = self.inventory.get(name, 0) + count

    def _take(self, name: str, count: int) -> None:
        remaining = self.inventory.get(name, 0) - count
        if remaining > 0:
            self.inventory[name] = remaining
        else:
            self.inventory.pop(name, None)

    def _advance(self) -> None:
        self.time = (self.time + TICKS_PER_ACTION) % DAY_LENGTH
        self.food = max(0.0, self.food - HUNGER_PER_ACTION)


def _to_position(coord: Coord) -> Position:
    return Position(x=coord[0], y=coord[1], z=coord[2])


def build_starter_world() -> SimulatedWorld:
    """A small plains spawn with trees, an outcrop, a bed and a few mobs."""
    blocks: dict[Coord, str] = {}
    for x in range(-8, 9):
        for z in range(-8, 9):
            blocks[(x, 63, z)] = "grass_block"
    for y in (64, 65, 66):
        blocks[(2, y, 0)] = "oak_log"
        blocks[(-3, y, 4)] = "birch_log"
    blocks[(6, 64, -3)] = "stone"
    blocks[(6, 65, -3)] = "stone"
    blocks[(7, 64, -3)] = "coal_ore"
    blocks[(7, 64, -4)] = "iron_ore"
    blocks[(-6, 64, -6)] = "red_bed"
    return SimulatedWorld(
        blocks=blocks,
        entities=[
            EntityState("cow", (5, 64, 5)),
            EntityState("zombie", (-8, 64, 3)),
            EntityState("player", (10, 64, 0), name="Steve"),
        ],
        inventory={"apple": 2},
        time=1000,
    )
