"""Status effect bookkeeping — pure state helpers, no I/O."""
from __future__ import annotations

from typing import Any

from coin_clash.models.combat import Combatant, StatusEffect

GRAPPLE_COIN_PENALTY = 2

STATUS_EFFECTS: dict[StatusEffect, dict[str, Any]] = {
    StatusEffect.NEGATE_NEXT_HIT: {
        "negates_next_attack": True,
        "consumed_on_hit": True,
    },
    StatusEffect.GRAPPLED: {
        "coin_penalty": GRAPPLE_COIN_PENALTY,
        "enables_combo_finishers": True,
    },
}


def get_status_effects(effect: StatusEffect | str) -> dict[str, Any]:
    """Get the mechanical effects of a status."""
    try:
        return STATUS_EFFECTS.get(StatusEffect(effect), {})
    except ValueError:
        return {}


def has_effect(combatant: Combatant, effect: StatusEffect) -> bool:
    return effect in combatant.effects


def add_effect(combatant: Combatant, effect: StatusEffect) -> bool:
    """Add a status once. Returns False if it was already active."""
    if effect in combatant.effects:
        return False
    combatant.effects.append(effect)
    return True


def remove_effect(combatant: Combatant, effect: StatusEffect) -> bool:
    """Remove every instance of a status. Returns True if anything was removed."""
    before = len(combatant.effects)
    combatant.effects[:] = [e for e in combatant.effects if e != effect]
    return len(combatant.effects) != before


def coin_penalty(combatant: Combatant) -> int:
    """Total coin reduction imposed by the combatant's active statuses."""
    return sum(get_status_effects(e).get("coin_penalty", 0) for e in combatant.effects)
