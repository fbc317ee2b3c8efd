from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coin_clash.models.ability import Ability
from coin_clash.models.passive import Passive


class BaseStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_hp: int = Field(gt=0)
    defense: int = Field(default=0, ge=0)
    level: int = 1
    gender: Optional[str] = None
    weapon_state: Optional[str] = None
    stance_cycle: tuple[str, ...] = ()


class CharacterDef(BaseModel):
    """Static roster entry. Never mutated; combatants copy what they need."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    base_stats: BaseStats
    passive: Passive
    abilities: tuple[Ability, ...]

    @model_validator(mode="after")
    def _unique_ability_ids(self) -> "CharacterDef":
        ids = [a.id for a in self.abilities]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate ability ids for character {self.id!r}")
        return self

    def get_ability(self, ability_id: str) -> Ability | None:
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        return None
