"""Clash resolution — turns a chosen ability into a comparable number."""
from __future__ import annotations

from dataclasses import dataclass

from coin_clash.mechanics.combat_math import clash_total
from coin_clash.mechanics.conditions import coin_penalty
from coin_clash.mechanics.dice import CoinFlipResult, Dice, DiceResult
from coin_clash.mechanics.passives import apply_coin_modifiers
from coin_clash.models.ability import Ability, AbilityKind
from coin_clash.models.combat import Combatant
from coin_clash.models.event import BattleLog, LogCategory

NON_CONTESTING_KINDS = frozenset({AbilityKind.DEFENSE, AbilityKind.SWITCH})


@dataclass
class ClashRoll:
    value: int
    die: DiceResult | None = None
    coins: CoinFlipResult | None = None
    contested: bool = True


def effective_coin_count(actor: Combatant, ability: Ability, opponent: Combatant, log: BattleLog) -> int:
    """Coins to flip for this clash after passives and debuffs, never negative.

    Modifiers apply in a fixed order: the actor's passive (coin scaling or
    conditional bonus), then the grapple penalty.
    """
    coins = apply_coin_modifiers(actor, opponent, ability.coins, log)
    penalty = coin_penalty(actor)
    if penalty:
        coins = max(0, coins - penalty)
        log.add(f"{actor.name} is Grappled! -{penalty} Coins.", LogCategory.LOSS)
    return max(0, coins)


def roll_clash(actor: Combatant, ability: Ability, opponent: Combatant, dice: Dice, log: BattleLog) -> ClashRoll:
    if ability.kind in NON_CONTESTING_KINDS:
        return ClashRoll(value=dice.d100(), contested=False)

    die = dice.roll_die(ability.dice)
    coin_count = effective_coin_count(actor, ability, opponent, log)
    coins = dice.flip_coins(coin_count)
    log.add(
        f"{actor.name} rolls d{ability.dice} ({die.value}) and flips "
        f"{coins.count} coins ({coins.heads} wins)."
    )
    return ClashRoll(value=clash_total(die.value, coins.heads), die=die, coins=coins)


def compute_clash_value(actor: Combatant, ability: Ability, opponent: Combatant, dice: Dice, log: BattleLog) -> int:
    return roll_clash(actor, ability, opponent, dice, log).value
