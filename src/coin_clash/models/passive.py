from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from coin_clash.models.ability import AbilityKind


class PassiveKind(str, Enum):
    COIN_SCALER = "CoinScaler"
    DEFENSE_CONDITIONAL = "DefenseConditional"
    ROLL_TRIGGER = "RollTrigger"
    CONDITIONAL_COIN = "ConditionalCoin"


class PassiveCondition(BaseModel):
    """Opponent attribute test, e.g. ``gender == "Female"``."""

    model_config = ConfigDict(frozen=True)

    attribute: str
    equals: str


class Passive(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: PassiveKind
    effect: str = ""
    trigger_value: Optional[int] = None
    trigger_die: int = Field(default=6, ge=1)
    coin_bonus: int = 0
    condition: Optional[PassiveCondition] = None
    defense_bonus: int = 0
    trigger_kind: AbilityKind = AbilityKind.CONTROL
