"""Ability effect executor — one handler per ability kind."""
from __future__ import annotations

from typing import Callable

from coin_clash.mechanics.combat_math import attack_damage, next_weapon_state
from coin_clash.mechanics.conditions import add_effect, has_effect, remove_effect
from coin_clash.mechanics.dice import Dice
from coin_clash.mechanics.passives import run_after_damage
from coin_clash.models.ability import Ability, AbilityKind
from coin_clash.models.combat import Combatant, StatusEffect
from coin_clash.models.event import BattleLog, LogCategory

EffectHandler = Callable[[Combatant, Ability, Combatant, Dice, BattleLog], None]


def _apply_attack(attacker: Combatant, ability: Ability, target: Combatant, dice: Dice, log: BattleLog) -> None:
    damage = attack_damage(ability.base_attack, ability.coins, target.effective_defense)
    if has_effect(target, StatusEffect.NEGATE_NEXT_HIT):
        log.add(f"{target.name} Phases/Braces! The attack is negated.", LogCategory.WIN)
        damage = 0
        remove_effect(target, StatusEffect.NEGATE_NEXT_HIT)

    dealt = target.take_damage(damage)
    target.last_damage_taken = dealt
    log.add(
        f"{attacker.name}'s {ability.name} hits for {dealt} ({ability.damage_type.value})",
        LogCategory.DAMAGE,
    )

    if ability.releases_grapple:
        remove_effect(target, StatusEffect.GRAPPLED)
        attacker.grapple_applied = False
        log.add(f"{target.name} released from Grapple", LogCategory.SPECIAL)

    run_after_damage(attacker, target, dice, log)


def _apply_control(attacker: Combatant, ability: Ability, target: Combatant, dice: Dice, log: BattleLog) -> None:
    add_effect(target, StatusEffect.GRAPPLED)
    attacker.grapple_applied = True
    log.add(f"{target.name} is Grappled! Coin Clash value reduced.", LogCategory.SPECIAL)


def _apply_switch(attacker: Combatant, ability: Ability, target: Combatant, dice: Dice, log: BattleLog) -> None:
    # Activation damage ignores defense and negation.
    dealt = target.take_damage(ability.base_attack)
    log.add(f"{attacker.name}'s {ability.name} deals {dealt} activation damage.", LogCategory.DAMAGE)

    cycle = attacker.definition.base_stats.stance_cycle
    if not cycle:
        return
    attacker.weapon_state = next_weapon_state(cycle, attacker.weapon_state)
    log.add(f"{attacker.name} cycles to {attacker.weapon_state}", LogCategory.SPECIAL)


def _apply_defense(owner: Combatant, ability: Ability, opponent: Combatant, dice: Dice, log: BattleLog) -> None:
    if add_effect(owner, StatusEffect.NEGATE_NEXT_HIT):
        log.add(f"{owner.name} is preparing to Negate the next hit.", LogCategory.WIN)


WINNING_EFFECTS: dict[AbilityKind, EffectHandler] = {
    AbilityKind.ATTACK: _apply_attack,
    AbilityKind.CONTROL: _apply_control,
    AbilityKind.SWITCH: _apply_switch,
    AbilityKind.DEFENSE: _apply_defense,
}

UTILITY_EFFECTS: dict[AbilityKind, EffectHandler] = {
    AbilityKind.DEFENSE: _apply_defense,
}

# Kinds whose effect fires on any decisive clash, won or lost.
ALWAYS_RESOLVES = frozenset({AbilityKind.SWITCH})


def apply_winning_effect(attacker: Combatant, ability: Ability, target: Combatant, dice: Dice, log: BattleLog) -> None:
    WINNING_EFFECTS[ability.kind](attacker, ability, target, dice, log)


def apply_utility_effect(owner: Combatant, ability: Ability, opponent: Combatant, dice: Dice, log: BattleLog) -> None:
    handler = UTILITY_EFFECTS.get(ability.kind)
    if handler is not None:
        handler(owner, ability, opponent, dice, log)


def apply_losing_effect(owner: Combatant, ability: Ability, opponent: Combatant, dice: Dice, log: BattleLog) -> None:
    """Effect of the clash loser's action: utilities, plus always-resolving kinds."""
    if ability.kind in ALWAYS_RESOLVES:
        apply_winning_effect(owner, ability, opponent, dice, log)
    else:
        apply_utility_effect(owner, ability, opponent, dice, log)
