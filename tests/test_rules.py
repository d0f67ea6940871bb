from craftmind.sim.contracts import Action, RuleKind
from craftmind.sim.rules import (
    PermissionEvaluator,
    classify_rule,
    compile_rules,
    extract_action_target,
    matches,
)


def test_prohibition_with_action_and_category() -> None:
    [rule] = compile_rules(["cannot attack players"])

    assert rule.kind == RuleKind.PROHIBITION
    assert rule.action == "attack"
    assert rule.target == "players"
    assert rule.original_text == "cannot attack players"


def test_material_overrides_category() -> None:
    [rule] = compile_rules(["must not mine diamond_ore"])

    assert rule.kind == RuleKind.PROHIBITION
    assert rule.action == "mine"
    assert rule.target == "diamond"


def test_classification_order() -> None:
    assert classify_rule("You MUST NOT steal") == RuleKind.PROHIBITION
    assert classify_rule("PvP is not allowed") == RuleKind.PROHIBITION
    assert classify_rule("always eat when hungry") == RuleKind.REQUIREMENT
    assert classify_rule("only craft wooden tools") == RuleKind.RESTRICTION
    assert classify_rule("be kind to villagers") == RuleKind.GUIDELINE


def test_guideline_has_no_scope() -> None:
    [rule] = compile_rules(["be friendly and mine responsibly"])

    assert rule.kind == RuleKind.GUIDELINE
    assert rule.action is None
    assert rule.target is None


def test_vocabulary_order_breaks_ties() -> None:
    # "mine" appears first in the sentence but "attack" is earlier in the list.
    action, _ = extract_action_target("never mine near or attack anything")
    assert action == "attack"


def test_partial_material_words_do_not_override() -> None:
    action, target = extract_action_target("only craft wooden tools")
    assert action == "craft"
    assert target == "items"

    _, stone_target = extract_action_target("cannot place cobblestone blocks")
    assert stone_target == "cobblestone"


def test_deny_short_circuits_on_first_prohibition() -> None:
    evaluator = PermissionEvaluator(["cannot attack players", "must always eat"])

    denied = evaluator.is_allowed(Action(type="attack", params=("player_bob",)))
    assert denied.permitted is False
    assert denied.reason == "cannot attack players"

    allowed = evaluator.is_allowed(Action(type="attack", params=("zombie",)))
    assert allowed.permitted is True
    assert allowed.reason is None


def test_players_heuristic_treats_non_zombies_as_players() -> None:
    evaluator = PermissionEvaluator(["cannot attack players"])

    assert not evaluator.is_allowed(Action(type="attack", params=("cow",))).permitted
    assert not evaluator.is_allowed(
        Action(type="attack", params=("zombie", "player"))
    ).permitted
    assert evaluator.is_allowed(Action(type="mine", params=("player",))).permitted


def test_targeted_rule_needs_params() -> None:
    evaluator = PermissionEvaluator(["must not mine diamond_ore"])

    assert not evaluator.is_allowed(
        Action(type="mine", params=("diamond_ore",))
    ).permitted
    assert evaluator.is_allowed(Action(type="mine", params=("oak_log",))).permitted
    assert evaluator.is_allowed(Action(type="mine")).permitted


def test_action_only_rule_matches_any_target() -> None:
    [rule] = compile_rules(["sleeping is forbidden: never sleep"])

    assert rule.action == "sleep"
    assert rule.target is None
    assert matches(Action(type="sleep"), rule)
    assert not matches(Action(type="eat"), rule)


def test_guidelines_and_restrictions_never_deny() -> None:
    evaluator = PermissionEvaluator(
        ["be nice to everyone", "only mine stone", "limit attack on mobs"]
    )
    actions = [
        Action(type="mine", params=("stone",)),
        Action(type="mine", params=("diamond_ore",)),
        Action(type="attack", params=("zombie",)),
        Action(type="chat", params=("hello",), raw="hello"),
        Action(type="fly"),
    ]

    for action in actions:
        assert evaluator.is_allowed(action).permitted is True


def test_is_allowed_is_idempotent() -> None:
    evaluator = PermissionEvaluator(["cannot attack players", "no griefing allowed"])
    action = Action(type="attack", params=("player_bob",))

    assert evaluator.is_allowed(action) == evaluator.is_allowed(action)


def test_runtime_rule_mutation() -> None:
    evaluator = PermissionEvaluator([])
    action = Action(type="place", params=("dirt",))
    assert evaluator.is_allowed(action).permitted is True

    rule = evaluator.add_rule("must not place dirt")
    assert rule.kind == RuleKind.PROHIBITION
    result = evaluator.is_allowed(action)
    assert result.permitted is False
    assert result.reason == "must not place dirt"
    assert evaluator.rule_texts() == ["must not place dirt"]

    assert evaluator.remove_rule("must not place dirt") == 1
    assert evaluator.is_allowed(action).permitted is True
    assert evaluator.remove_rule("must not place dirt") == 0


def test_rules_snapshot_is_read_only_view() -> None:
    evaluator = PermissionEvaluator(["cannot attack players"])
    snapshot = evaluator.rules
    evaluator.add_rule("cannot steal items")

    assert len(snapshot) == 1
    assert len(evaluator.rules) == 2
