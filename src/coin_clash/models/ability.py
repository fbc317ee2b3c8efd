from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AbilityKind(str, Enum):
    ATTACK = "ATTACK"
    DEFENSE = "DEFENSE"
    CONTROL = "CONTROL"
    SWITCH = "SWITCH"


class DamageType(str, Enum):
    FORCE = "Force"
    PHYSICAL = "Physical"
    PSYCHIC = "Psychic"
    NECROTIC = "Necrotic"
    NONE = "None"


class Ability(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: AbilityKind
    damage_type: DamageType = DamageType.NONE
    base_attack: int = Field(default=0, ge=0)
    dice: int = Field(default=0, ge=0)
    coins: int = Field(default=0, ge=0)
    effect: str = ""
    hidden: bool = False
    weapon_state: Optional[str] = None
    rotating_main: bool = False
    requires_target_grappled: bool = False
    releases_grapple: bool = False


PASS_ABILITY = Ability(
    id="pass",
    name="Pass/Defend",
    kind=AbilityKind.DEFENSE,
    effect="Negates the next incoming hit entirely.",
)
