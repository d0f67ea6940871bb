"""System and state prompt templates."""

from __future__ import annotations

from craftmind.config import AgentConfig
from craftmind.sim.contracts import Observation

MAX_PROMPT_BLOCKS = 10
MAX_PROMPT_ITEMS = 10

ACTION_CATALOG = """\
- move <direction> - Move north, south, east, or west
- goto <x> <y> <z> - Navigate to specific coordinates
- mine <block_type> - Mine a specific type of block nearby
- collect <item> - Collect nearby items
- attack <entity> - Attack a nearby entity
- craft <item> - Craft an item if you have materials
- place <block> - Place a block from inventory
- eat - Eat food from inventory
- sleep - Sleep in a nearby bed
- chat <message> - Send a chat message
- wait - Do nothing this turn
- look <direction> - Look in a direction to observe"""

WORLD_KNOWLEDGE = """\
IMPORTANT MINECRAFT KNOWLEDGE:
- You start with NO tools. First gather wood (oak_log, birch_log, etc.) by hand
- Basic crafting (planks, sticks) can be done without a crafting table
- CRAFTING TABLE: Required for tools, weapons, and most items! Craft from 4 planks, \
then place it
- FURNACE: Required to smelt ores into ingots! Craft from 8 cobblestone, then place it

CRAFTING PROGRESSION:
1. Mine logs by hand (oak_log, birch_log, etc.)
2. Craft logs into planks (1 log = 4 planks)
3. Craft planks into sticks (2 planks = 4 sticks)
4. Craft 4 planks into a crafting_table
5. Place the crafting table, then craft tools near it
6. Craft wooden_pickaxe (3 planks + 2 sticks)
7. Mine stone/cobblestone with wooden pickaxe
8. Craft furnace (8 cobblestone) and stone tools

MINING REQUIREMENTS:
- By hand: dirt, sand, gravel, wood
- Wooden pickaxe: stone, cobblestone, coal_ore
- Stone pickaxe: iron_ore, copper_ore, lapis_ore
- Iron pickaxe: gold_ore, diamond_ore, redstone_ore, emerald_ore

SMELTING (requires furnace + fuel like coal or planks):
- iron_ore + fuel = iron_ingot
- gold_ore + fuel = gold_ingot
- raw food + fuel = cooked food"""

RESPONSE_FORMAT = """\
IMPORTANT: First explain your reasoning (2-3 sentences), then provide your action.

Response format:
THINKING: <your reasoning about the current situation and why you chose this action>
ACTION: <action_name> <parameters>

Example response:
THINKING: I have no tools yet. I need to gather wood first to craft a pickaxe \
before I can mine stone.
ACTION: mine oak_log"""


def format_rules(rules: list[str]) -> str:
    if not rules:
        return "No specific rules."
    return "\n".join(f"{index}. {rule}" for index, rule in enumerate(rules, start=1))


def build_system_prompt(config: AgentConfig, *, rules: list[str] | None = None) -> str:
    """Render the fixed instructions; ``rules`` overrides the configured list."""
    rule_text = format_rules(config.rules if rules is None else rules)
    return (
        f"You are {config.name}, an AI agent in Minecraft.\n\n"
        f"PERSONALITY: {config.personality}\n\n"
        f"YOUR GOAL: {config.goal}\n\n"
        f"RULES YOU MUST FOLLOW:\n{rule_text}\n\n"
        f"You can perform these actions:\n{ACTION_CATALOG}\n\n"
        f"{WORLD_KNOWLEDGE}\n\n"
        f"{RESPONSE_FORMAT}"
    )


def build_user_prompt(observation: Observation, goal: str) -> str:
    position = observation.position
    blocks = ", ".join(observation.nearby_blocks[:MAX_PROMPT_BLOCKS]) or "None visible"
    entities = (
        ", ".join(
            f"{entity.type} ({entity.distance:.1f}m)"
            for entity in observation.nearby_entities
        )
        or "None"
    )
    inventory = (
        ", ".join(
            f"{item.name} x{item.count}"
            for item in observation.inventory[:MAX_PROMPT_ITEMS]
        )
        or "Empty"
    )
    return (
        "CURRENT STATE:\n"
        f"- Position: {position.x:.1f}, {position.y:.1f}, {position.z:.1f}\n"
        f"- Health: {observation.health:g}/20\n"
        f"- Hunger: {observation.food:g}/20\n"
        f"- Time: {observation.time_of_day}\n"
        f"- Weather: {observation.weather}\n\n"
        f"NEARBY BLOCKS:\n{blocks}\n\n"
        f"NEARBY ENTITIES:\n{entities}\n\n"
        f"INVENTORY:\n{inventory}\n\n"
        f"YOUR GOAL: {goal}\n\n"
        "Think about your current situation and goal. What action should you take?\n"
        "Remember to explain your THINKING first, then provide your ACTION."
    )
