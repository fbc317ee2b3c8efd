from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from coin_clash.models.ability import Ability
from coin_clash.models.character import CharacterDef
from coin_clash.models.event import BattleLog, LogEvent
from coin_clash.models.passive import Passive


class Side(str, Enum):
    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def other(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class StatusEffect(str, Enum):
    NEGATE_NEXT_HIT = "NegateNextHit"
    GRAPPLED = "Grappled"


class BattlePhase(str, Enum):
    AWAITING_ACTIONS = "awaiting_actions"
    RESOLVING = "resolving"
    CONTINUING = "continuing"
    ENDED = "ended"


class HitPoints(BaseModel):
    current: int = 0
    max: int = 0


class Combatant(BaseModel):
    """Runtime fighter state, created fresh for every battle."""

    character_id: str
    name: str
    side: Side
    definition: CharacterDef
    hp: HitPoints = Field(default_factory=HitPoints)
    defense: int = 0
    round_defense_bonus: int = 0
    effects: list[StatusEffect] = Field(default_factory=list)
    consecutive_rounds: int = 0
    last_damage_taken: int = 0
    weapon_state: Optional[str] = None
    grapple_applied: bool = False
    profile: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_definition(cls, definition: CharacterDef, side: Side) -> "Combatant":
        own = definition.model_copy(deep=True)
        stats = own.base_stats
        profile = {}
        if stats.gender is not None:
            profile["gender"] = stats.gender
        weapon_state = stats.weapon_state
        if weapon_state is None and stats.stance_cycle:
            weapon_state = stats.stance_cycle[0]
        return cls(
            character_id=own.id,
            name=own.name,
            side=side,
            definition=own,
            hp=HitPoints(current=stats.max_hp, max=stats.max_hp),
            defense=stats.defense,
            weapon_state=weapon_state,
            profile=profile,
        )

    @property
    def passive(self) -> Passive:
        return self.definition.passive

    @property
    def abilities(self) -> tuple[Ability, ...]:
        return self.definition.abilities

    @property
    def is_alive(self) -> bool:
        return self.hp.current > 0

    @property
    def effective_defense(self) -> int:
        return self.defense + self.round_defense_bonus

    @property
    def is_grappled(self) -> bool:
        return StatusEffect.GRAPPLED in self.effects

    def take_damage(self, amount: int) -> int:
        """Lower HP by ``amount`` (floored at zero). Returns HP actually lost."""
        before = self.hp.current
        self.hp.current = max(0, min(self.hp.max, before - max(0, amount)))
        return before - self.hp.current

    def heal(self, amount: int) -> int:
        """Raise HP by ``amount`` capped at max. Returns HP actually gained."""
        before = self.hp.current
        self.hp.current = max(0, min(self.hp.max, before + max(0, amount)))
        return self.hp.current - before


class CombatantSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    character_id: str
    name: str
    side: Side
    hp: int
    max_hp: int
    defense: int
    effects: tuple[StatusEffect, ...] = ()
    is_grappled: bool = False
    weapon_state: Optional[str] = None
    passive_name: str = ""
    passive_effect: str = ""

    @classmethod
    def of(cls, combatant: Combatant) -> "CombatantSnapshot":
        return cls(
            character_id=combatant.character_id,
            name=combatant.name,
            side=combatant.side,
            hp=combatant.hp.current,
            max_hp=combatant.hp.max,
            defense=combatant.defense,
            effects=tuple(combatant.effects),
            is_grappled=combatant.is_grappled,
            weapon_state=combatant.weapon_state,
            passive_name=combatant.passive.name,
            passive_effect=combatant.passive.effect,
        )


class BattleEnded(BaseModel):
    model_config = ConfigDict(frozen=True)

    winner: Side
    winner_id: str
    winner_name: str
    rounds: int


class RoundOutcome(BaseModel):
    round_number: int
    player_clash: int
    enemy_clash: int
    clash_winner: Optional[Side] = None
    events: list[LogEvent] = Field(default_factory=list)
    player: CombatantSnapshot
    enemy: CombatantSnapshot
    ended: Optional[BattleEnded] = None


class BattleSession(BaseModel):
    """Everything one battle needs; passed explicitly to the engine."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    player: Combatant
    enemy: Combatant
    round_number: int = 1
    phase: BattlePhase = BattlePhase.AWAITING_ACTIONS
    player_action: Optional[Ability] = None
    enemy_action: Optional[Ability] = None
    result: Optional[BattleEnded] = None
    log: BattleLog = Field(default_factory=BattleLog)

    @property
    def is_over(self) -> bool:
        return self.phase == BattlePhase.ENDED

    def combatant(self, side: Side) -> Combatant:
        return self.player if side is Side.PLAYER else self.enemy

    def opponent_of(self, side: Side) -> Combatant:
        return self.combatant(side.other)

    def action_for(self, side: Side) -> Optional[Ability]:
        return self.player_action if side is Side.PLAYER else self.enemy_action

    def set_action(self, side: Side, ability: Optional[Ability]) -> None:
        if side is Side.PLAYER:
            self.player_action = ability
        else:
            self.enemy_action = ability


class ActionOption(BaseModel):
    """One entry of a combatant's selectable action list."""

    model_config = ConfigDict(frozen=True)

    ability: Ability
    label: str
    enabled: bool = True
    reason: str = ""
    combo_ready: bool = False
