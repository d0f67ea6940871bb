"""Compile operator rule strings and authorize proposed actions against them.

Rules are free text such as ``"cannot attack players"`` or ``"must not mine
diamond_ore"``. Compilation is keyword driven: an ordered classifier decides the
rule kind, then the first matching action verb, target category and material
are extracted. Compiled rules are owned by a :class:`PermissionEvaluator`.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Sequence

from craftmind.sim.contracts import (
    Action,
    GuidelineRule,
    PermissionResult,
    ProhibitionRule,
    RequirementRule,
    RestrictionRule,
    Rule,
    RuleKind,
)

logger = logging.getLogger(__name__)

# Vocabulary order is the tie-break when a rule names more than one verb.
ACTION_VOCABULARY: tuple[str, ...] = (
    "attack",
    "mine",
    "craft",
    "place",
    "chat",
    "goto",
    "move",
    "collect",
    "eat",
    "sleep",
    "trade",
    "steal",
    "grief",
)

TARGET_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("players", ("player", "players", "pvp", "other agents")),
    ("mobs", ("mob", "mobs", "monster", "monsters", "hostile")),
    ("passive", ("animal", "animals", "passive", "peaceful")),
    ("blocks", ("block", "blocks", "ore", "ores")),
    ("items", ("item", "items", "tool", "tools", "weapon", "weapons")),
)

MATERIALS: tuple[str, ...] = (
    "diamond",
    "iron",
    "gold",
    "coal",
    "wood",
    "stone",
    "dirt",
    "cobblestone",
    "oak",
    "birch",
    "spruce",
)

# Underscores separate tokens here, so "diamond_ore" names diamond.
_MATERIAL_PATTERN = re.compile(
    r"(?<![a-z0-9])(" + "|".join(MATERIALS) + r")(?![a-z0-9])"
)


def _contains_any(*phrases: str) -> Callable[[str], bool]:
    def predicate(text: str) -> bool:
        return any(phrase in text for phrase in phrases)

    return predicate


CLASSIFIERS: tuple[tuple[Callable[[str], bool], RuleKind], ...] = (
    (
        _contains_any("cannot", "must not", "prohibited", "forbidden", "not allowed"),
        RuleKind.PROHIBITION,
    ),
    (_contains_any("must", "required", "always"), RuleKind.REQUIREMENT),
    (_contains_any("only", "limit"), RuleKind.RESTRICTION),
)

_SCOPED_RULES = {
    RuleKind.PROHIBITION: ProhibitionRule,
    RuleKind.REQUIREMENT: RequirementRule,
    RuleKind.RESTRICTION: RestrictionRule,
}


def classify_rule(text: str) -> RuleKind:
    lowered = text.lower()
    for predicate, kind in CLASSIFIERS:
        if predicate(lowered):
            return kind
    return RuleKind.GUIDELINE


def extract_action_target(text: str) -> tuple[str | None, str | None]:
    """Return the ``(action, target)`` a rule text is scoped to.

    The material override is unconditional: a specific material always wins
    over a category found earlier.
    """
    lowered = text.lower()
    action = next((verb for verb in ACTION_VOCABULARY if verb in lowered), None)

    target = None
    for category, patterns in TARGET_CATEGORIES:
        if any(pattern in lowered for pattern in patterns):
            target = category
            break

    material = _MATERIAL_PATTERN.search(lowered)
    if material:
        target = material.group(1)
    return action, target


def compile_rule(text: str) -> Rule:
    kind = classify_rule(text)
    if kind == RuleKind.GUIDELINE:
        return GuidelineRule(original_text=text)
    action, target = extract_action_target(text)
    return _SCOPED_RULES[kind](action=action, target=target, original_text=text)


def compile_rules(rule_strings: Iterable[str]) -> list[Rule]:
    return [compile_rule(text) for text in rule_strings]


def matches(action: Action, rule: Rule) -> bool:
    if rule.action and rule.action != action.type:
        return False

    if rule.target and action.params:
        param_text = " ".join(action.params).lower()
        if rule.target == "players":
            # Anything not named like a zombie is treated as a player.
            return action.type == "attack" and (
                "player" in param_text or "zombie" not in param_text
            )
        if rule.target in param_text:
            return True

    return rule.action == action.type and not rule.target


class PermissionEvaluator:
    """Owns the compiled rule set and answers permission queries.

    Rules are mutated only through :meth:`add_rule` and :meth:`remove_rule`,
    which the decision loop calls between ticks from its own thread. There is
    no locking; concurrent callers must serialize access themselves.
    """

    def __init__(self, rule_strings: Sequence[str] = ()) -> None:
        self._rules: list[Rule] = compile_rules(rule_strings)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def is_allowed(self, action: Action) -> PermissionResult:
        for rule in self._rules:
            if rule.kind == RuleKind.GUIDELINE:
                continue
            if rule.kind == RuleKind.PROHIBITION:
                if matches(action, rule):
                    return PermissionResult(permitted=False, reason=rule.original_text)
            elif rule.kind == RuleKind.RESTRICTION:
                # Advisory only: restrictions would need per-run counters to enforce.
                if matches(action, rule):
                    logger.debug(
                        "Action %s touches restriction %r",
                        action.type,
                        rule.original_text,
                    )
        return PermissionResult(permitted=True)

    def add_rule(self, text: str) -> Rule:
        rule = compile_rule(text)
        self._rules.append(rule)
        logger.info("Added %s rule: %s", rule.kind.value, text)
        return rule

    def remove_rule(self, text: str) -> int:
        before = len(self._rules)
        self._rules = [rule for rule in self._rules if rule.original_text != text]
        removed = before - len(self._rules)
        if removed:
            logger.info("Removed rule: %s", text)
        return removed

    def rule_texts(self) -> list[str]:
        return [rule.original_text for rule in self._rules]
