"""Combat math — pure functions, no I/O."""
from __future__ import annotations

from typing import Sequence

from coin_clash.mechanics.dice import Dice
from coin_clash.models.ability import Ability
from coin_clash.models.character import CharacterDef
from coin_clash.models.combat import ActionOption

CLASH_BASE = 5


def attack_damage(base_attack: int, coins: int, defense: int) -> int:
    """Damage of a landed attack: base + ability coins - defense, never negative."""
    return max(0, base_attack + coins - defense)


def clash_total(die_value: int, heads: int) -> int:
    return CLASH_BASE + die_value + heads


def next_weapon_state(cycle: Sequence[str], current: str | None) -> str:
    """Advance one step through a cyclic stance sequence.

    An unknown (or missing) current stance restarts the cycle at its first entry.
    """
    if not cycle:
        raise ValueError("Stance cycle is empty.")
    if current not in cycle:
        return cycle[0]
    return cycle[(list(cycle).index(current) + 1) % len(cycle)]


def pick_random_opponent(roster: Sequence[CharacterDef], player_id: str, dice: Dice) -> CharacterDef:
    """Choose a uniformly random roster entry different from the player's."""
    candidates = [c for c in roster if c.id != player_id]
    if not candidates:
        raise ValueError(f"No opponent available for {player_id!r}.")
    return dice.choice(candidates)


def npc_choose_action(options: Sequence[ActionOption], opponent_grappled: bool, dice: Dice) -> Ability:
    """Simple opponent AI.

    Logic:
    - Opponent grappled and a combo finisher is selectable -> use the finisher
    - Otherwise -> uniformly random among selectable actions
    """
    selectable = [o.ability for o in options if o.enabled]
    if not selectable:
        raise ValueError("No selectable actions.")
    if opponent_grappled:
        finisher = next((a for a in selectable if a.requires_target_grappled), None)
        if finisher is not None:
            return finisher
    return dice.choice(selectable)
