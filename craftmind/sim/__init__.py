"""Rule engine, action parsing and dispatch."""

from craftmind.sim.action_parser import parse_action
from craftmind.sim.actuator import (
    ActuatorUnavailableError,
    ObservationSource,
    WorldActuator,
    WorldBody,
)
from craftmind.sim.contracts import (
    Action,
    CycleRecord,
    CycleResult,
    GuidelineRule,
    Observation,
    PermissionResult,
    ProhibitionRule,
    RequirementRule,
    RestrictionRule,
    Rule,
    RuleKind,
)
from craftmind.sim.dispatcher import ActionDispatcher
from craftmind.sim.rules import (
    PermissionEvaluator,
    classify_rule,
    compile_rule,
    compile_rules,
    extract_action_target,
    matches,
)

__all__ = [
    "Action",
    "ActionDispatcher",
    "ActuatorUnavailableError",
    "CycleRecord",
    "CycleResult",
    "GuidelineRule",
    "Observation",
    "ObservationSource",
    "PermissionEvaluator",
    "PermissionResult",
    "ProhibitionRule",
    "RequirementRule",
    "RestrictionRule",
    "Rule",
    "RuleKind",
    "WorldActuator",
    "WorldBody",
    "classify_rule",
    "compile_rule",
    "compile_rules",
    "extract_action_target",
    "matches",
    "parse_action",
]
