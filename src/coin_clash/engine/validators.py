"""Validates action submissions and builds the legal-action list."""
from __future__ import annotations

from coin_clash.models.ability import PASS_ABILITY, Ability
from coin_clash.models.combat import ActionOption, BattlePhase, BattleSession, Combatant, Side


def is_visible(ability: Ability, combatant: Combatant) -> bool:
    """Rotating main attacks show only for the active stance; other hidden ones never."""
    if ability.rotating_main:
        return ability.weapon_state == combatant.weapon_state
    return not ability.hidden


def legal_actions(combatant: Combatant, opponent: Combatant) -> list[ActionOption]:
    options: list[ActionOption] = []
    for ability in combatant.abilities:
        if not is_visible(ability, combatant):
            continue
        if ability.requires_target_grappled:
            ready = opponent.is_grappled
            options.append(ActionOption(
                ability=ability,
                label=ability.name,
                enabled=ready,
                reason="" if ready else f"{opponent.name} must be grappled",
                combo_ready=ready,
            ))
        else:
            options.append(ActionOption(ability=ability, label=ability.name))
    return options


def find_ability(combatant: Combatant, opponent: Combatant, ability_id: str) -> Ability | None:
    """Resolve an id to a currently selectable ability (or the pass action)."""
    if ability_id == PASS_ABILITY.id:
        return PASS_ABILITY
    for option in legal_actions(combatant, opponent):
        if option.ability.id == ability_id and option.enabled:
            return option.ability
    return None


def validate_submission(session: BattleSession, side: Side, ability_id: str) -> tuple[bool, str]:
    """Validate whether ``side`` may submit ``ability_id`` right now."""
    if session.phase != BattlePhase.AWAITING_ACTIONS:
        return False, f"Actions are not accepted while the battle is {session.phase.value}."
    if not session.player.is_alive or not session.enemy.is_alive:
        return False, "A combatant is down."
    if session.action_for(side) is not None:
        return False, "An action is already chosen for this round."

    actor = session.combatant(side)
    opponent = session.opponent_of(side)
    if find_ability(actor, opponent, ability_id) is None:
        if actor.definition.get_ability(ability_id) is None:
            return False, f"Unknown ability: {ability_id}"
        return False, f"{ability_id} cannot be used right now."
    return True, ""
