"""Per-character passive rules, dispatched by passive kind.

Each handler implements only the hook points it cares about:

- ``on_round_start``: once per round, before actions are chosen
- ``on_opponent_action``: once both actions are known, before the clash
- ``modify_coins``: while computing the owner's clash coin count
- ``after_damage``: after the owner lands an attack
"""
from __future__ import annotations

import logging

from coin_clash.mechanics.dice import Dice
from coin_clash.models.ability import Ability
from coin_clash.models.combat import Combatant
from coin_clash.models.event import BattleLog, LogCategory
from coin_clash.models.passive import Passive, PassiveKind

logger = logging.getLogger(__name__)


class PassiveHandler:
    def on_round_start(self, owner: Combatant, passive: Passive, log: BattleLog) -> None:
        pass

    def on_opponent_action(
        self, owner: Combatant, passive: Passive, opponent_ability: Ability, log: BattleLog,
    ) -> None:
        pass

    def modify_coins(
        self, owner: Combatant, passive: Passive, opponent: Combatant, coins: int, log: BattleLog,
    ) -> int:
        return coins

    def after_damage(
        self, owner: Combatant, passive: Passive, target: Combatant, dice: Dice, log: BattleLog,
    ) -> None:
        pass


class CoinScalerHandler(PassiveHandler):
    """Slow Start: +1 coin for every round the battle has lasted."""

    def on_round_start(self, owner: Combatant, passive: Passive, log: BattleLog) -> None:
        owner.consecutive_rounds += 1
        log.add(f"{owner.name}'s {passive.name}: Coin bonus increases to +{owner.consecutive_rounds}!")

    def modify_coins(
        self, owner: Combatant, passive: Passive, opponent: Combatant, coins: int, log: BattleLog,
    ) -> int:
        return coins + owner.consecutive_rounds


class ConditionalCoinHandler(PassiveHandler):
    def modify_coins(
        self, owner: Combatant, passive: Passive, opponent: Combatant, coins: int, log: BattleLog,
    ) -> int:
        cond = passive.condition
        if cond is None or opponent.profile.get(cond.attribute) != cond.equals:
            return coins
        log.add(
            f"{owner.name} activates {passive.name}! (+{passive.coin_bonus} Coins)",
            LogCategory.SPECIAL,
        )
        return coins + passive.coin_bonus


class DefenseConditionalHandler(PassiveHandler):
    """Raises the owner's defense for the round when the opponent goes for a grapple."""

    def on_opponent_action(
        self, owner: Combatant, passive: Passive, opponent_ability: Ability, log: BattleLog,
    ) -> None:
        if opponent_ability.kind != passive.trigger_kind or passive.defense_bonus <= 0:
            return
        owner.round_defense_bonus += passive.defense_bonus
        log.add(
            f"{owner.name}'s {passive.name}: Defense +{passive.defense_bonus} this round!",
            LogCategory.SPECIAL,
        )


class RollTriggerHandler(PassiveHandler):
    """Chrono-Fist: a fresh die after a landed hit may heal the damage just dealt."""

    def after_damage(
        self, owner: Combatant, passive: Passive, target: Combatant, dice: Dice, log: BattleLog,
    ) -> None:
        if passive.trigger_value is None:
            return
        roll = dice.roll_die(passive.trigger_die)
        if roll.value != passive.trigger_value:
            return
        healed = owner.heal(target.last_damage_taken)
        log.add(
            f"{passive.name} ({roll.label}:{roll.value}) heals {healed} HP!",
            LogCategory.WIN,
        )


PASSIVE_HANDLERS: dict[PassiveKind, PassiveHandler] = {
    PassiveKind.COIN_SCALER: CoinScalerHandler(),
    PassiveKind.CONDITIONAL_COIN: ConditionalCoinHandler(),
    PassiveKind.DEFENSE_CONDITIONAL: DefenseConditionalHandler(),
    PassiveKind.ROLL_TRIGGER: RollTriggerHandler(),
}


def handler_for(combatant: Combatant) -> PassiveHandler:
    handler = PASSIVE_HANDLERS.get(combatant.passive.kind)
    if handler is None:
        logger.warning("No passive handler for kind %s", combatant.passive.kind)
        return PassiveHandler()
    return handler


def run_round_start(combatant: Combatant, log: BattleLog) -> None:
    handler_for(combatant).on_round_start(combatant, combatant.passive, log)


def run_opponent_action(combatant: Combatant, opponent_ability: Ability, log: BattleLog) -> None:
    handler_for(combatant).on_opponent_action(combatant, combatant.passive, opponent_ability, log)


def apply_coin_modifiers(combatant: Combatant, opponent: Combatant, coins: int, log: BattleLog) -> int:
    return handler_for(combatant).modify_coins(combatant, combatant.passive, opponent, coins, log)


def run_after_damage(combatant: Combatant, target: Combatant, dice: Dice, log: BattleLog) -> None:
    handler_for(combatant).after_damage(combatant, combatant.passive, target, dice, log)
