"""Core data contracts shared by the rule engine, parser and decision loop."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RuleKind(str, Enum):
    PROHIBITION = "prohibition"
    REQUIREMENT = "requirement"
    RESTRICTION = "restriction"
    GUIDELINE = "guideline"


class _ScopedRule(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    action: str | None = None
    target: str | None = None
    original_text: str


class ProhibitionRule(_ScopedRule):
    kind: Literal[RuleKind.PROHIBITION] = RuleKind.PROHIBITION


class RequirementRule(_ScopedRule):
    kind: Literal[RuleKind.REQUIREMENT] = RuleKind.REQUIREMENT


class RestrictionRule(_ScopedRule):
    kind: Literal[RuleKind.RESTRICTION] = RuleKind.RESTRICTION


class GuidelineRule(BaseModel):
    """Informational rule; only shown to the model, never enforced."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal[RuleKind.GUIDELINE] = RuleKind.GUIDELINE
    original_text: str

    @property
    def action(self) -> None:
        return None

    @property
    def target(self) -> None:
        return None


Rule = Annotated[
    Union[ProhibitionRule, RequirementRule, RestrictionRule, GuidelineRule],
    Field(discriminator="kind"),
]


class Action(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    params: tuple[str, ...] | None = None
    raw: str = ""


class PermissionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    permitted: bool
    reason: str | None = None

    @model_validator(mode="after")
    def validate_reason(self) -> "PermissionResult":
        if not self.permitted and not self.reason:
            raise ValueError("a denial must carry a reason")
        return self


class Position(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: float
    y: float
    z: float


class EntitySighting(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str
    name: str | None = None
    distance: float


class InventoryItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    count: int


class Observation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    position: Position
    health: float
    food: float
    time_of_day: str
    weather: str
    nearby_blocks: list[str] = Field(default_factory=list)
    nearby_entities: list[EntitySighting] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    biome: str = "unknown"


class CycleResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool
    message: str | None = None


class CycleRecord(BaseModel):
    """One decision cycle as written to the diary."""

    model_config = ConfigDict(extra="forbid")

    tick: int
    timestamp: str
    goal: str
    observation: Observation | None = None
    reasoning: str | None = None
    action: Action | None = None
    result: CycleResult
    rule_violation: str | None = None
