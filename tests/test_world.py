from craftmind.sim.contracts import Position
from craftmind.sim.observer import nearest_entities, time_of_day_label, weather_label
from craftmind.sim.world import EntityState, SimulatedWorld, build_starter_world


def test_time_and_weather_labels() -> None:
    assert time_of_day_label(0) == "morning"
    assert time_of_day_label(6000) == "day"
    assert time_of_day_label(12000) == "evening"
    assert time_of_day_label(18000) == "night"
    assert weather_label(False) == "clear"
    assert weather_label(True) == "rain"
    assert weather_label(True, thunder_state=1.0) == "thunderstorm"


def test_nearest_entities_filters_and_sorts() -> None:
    origin = Position(x=0, y=0, z=0)
    entities = [
        ("zombie", None, Position(x=10, y=0, z=0)),
        ("cow", None, Position(x=2, y=0, z=0)),
        ("ghast", None, Position(x=40, y=0, z=0)),
    ]

    sightings = nearest_entities(origin, entities)

    assert [sighting.type for sighting in sightings] == ["cow", "zombie"]
    assert sightings[0].distance == 2


def test_starter_world_observation() -> None:
    world = build_starter_world()
    observation = world.observe()

    assert observation.time_of_day == "morning"
    assert observation.weather == "clear"
    assert "standing on: grass_block" in observation.nearby_blocks
    assert "east: oak_log" in observation.nearby_blocks
    assert observation.nearby_entities[0].type == "cow"
    assert [item.name for item in observation.inventory] == ["apple"]


def test_wood_to_pickaxe_progression() -> None:
    world = build_starter_world()

    for _ in range(3):
        assert world.mine_block("oak_log")
    assert world.mine_block("oak_log") is False
    for _ in range(3):
        assert world.craft("oak_planks")
    assert world.craft("crafting_table")
    assert world.craft("wooden_pickaxe") is False
    assert world.place_block("crafting_table")
    assert world.craft("stick")
    assert world.craft("wooden_pickaxe")
    assert world.inventory["wooden_pickaxe"] == 1
    assert world.mine_block("stone")
    assert world.inventory["cobblestone"] == 1
    assert world.mine_block("iron_ore") is False


def test_movement_attack_eat_and_sleep() -> None:
    world = SimulatedWorld(
        blocks={(3, 64, 0): "stone", (0, 64, 4): "white_bed"},
        entities=[EntityState("zombie", (2, 64, 2))],
        inventory={"bread": 1},
        food=10.0,
        time=13000,
    )

    assert world.go_to(3, 64, 0) is False
    assert world.move_direction("south")
    assert world.position == Position(x=0.5, y=64.0, z=5.5)
    assert world.move_direction("up") is False

    assert world.attack_entity("zombie")
    assert world.attack_entity("zombie")
    assert world.entities == []
    assert world.attack_entity("zombie") is False

    assert world.eat_food()
    assert world.food > 10.0
    assert world.eat_food() is False

    assert world.sleep()
    assert world.time == 0
    assert world.sleep() is False


def test_chat_look_and_connection() -> None:
    world = SimulatedWorld()
    world.connect()
    assert world.connected

    world.chat("hello")
    assert world.look_at(1, 2, 3)
    world.disconnect()

    assert world.chat_log == ["hello"]
    assert world.look_target == (1, 2, 3)
    assert world.connected is False
