"""Battle engine — runs one round at a time over an explicit battle session.

Round state machine::

    AWAITING_ACTIONS -> RESOLVING -> CONTINUING -> AWAITING_ACTIONS ...
                                 \\-> ENDED

Presentation pacing (delays between submission, resolution and the next
round) belongs to the caller; every engine call completes synchronously.
"""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from coin_clash.engine.validators import find_ability, legal_actions, validate_submission
from coin_clash.mechanics import passives
from coin_clash.mechanics.clash import roll_clash
from coin_clash.mechanics.combat_math import npc_choose_action, pick_random_opponent
from coin_clash.mechanics.dice import Dice
from coin_clash.mechanics.effects import apply_losing_effect, apply_utility_effect, apply_winning_effect
from coin_clash.models.ability import PASS_ABILITY, Ability
from coin_clash.models.character import CharacterDef
from coin_clash.models.combat import (
    ActionOption,
    BattleEnded,
    BattlePhase,
    BattleSession,
    Combatant,
    CombatantSnapshot,
    RoundOutcome,
    Side,
)
from coin_clash.models.event import BattleLog, LogCategory

logger = logging.getLogger(__name__)


class BattleEngine:
    def __init__(self, roster: Sequence[CharacterDef] | Mapping[str, CharacterDef], dice: Dice | None = None):
        if isinstance(roster, Mapping):
            roster = list(roster.values())
        self.roster: list[CharacterDef] = list(roster)
        self.dice = dice or Dice()

    # -- Battle lifecycle --

    def get_character(self, character_id: str) -> CharacterDef:
        for character in self.roster:
            if character.id == character_id:
                return character
        raise KeyError(f"Unknown character: {character_id}")

    def start_battle(self, player_id: str, opponent_id: str | None = None) -> BattleSession:
        """Create fresh combatants from the roster and open round 1."""
        player_def = self.get_character(player_id)
        if opponent_id is None:
            enemy_def = pick_random_opponent(self.roster, player_id, self.dice)
        else:
            enemy_def = self.get_character(opponent_id)

        session = BattleSession(
            player=Combatant.from_definition(player_def, Side.PLAYER),
            enemy=Combatant.from_definition(enemy_def, Side.ENEMY),
        )
        session.log.add("--- COMBAT START ---", LogCategory.SPECIAL)
        session.log.add(f"{session.player.name} enters combat with {session.enemy.name}!")
        logger.info("Battle %s started: %s vs %s", session.id, player_def.id, enemy_def.id)
        self._open_round(session)
        return session

    def begin_round(self, session: BattleSession) -> list[ActionOption]:
        """Move a resolved round on to the next one and return the player's options."""
        if session.phase == BattlePhase.ENDED:
            return []
        if session.phase == BattlePhase.CONTINUING:
            self._open_round(session)
        return self.legal_actions(session, Side.PLAYER)

    def legal_actions(self, session: BattleSession, side: Side) -> list[ActionOption]:
        return legal_actions(session.combatant(side), session.opponent_of(side))

    def snapshot(self, session: BattleSession, side: Side) -> CombatantSnapshot:
        return CombatantSnapshot.of(session.combatant(side))

    # -- Action submission --

    def submit_action(self, session: BattleSession, side: Side, ability_id: str) -> bool:
        ok, reason = validate_submission(session, side, ability_id)
        if not ok:
            logger.warning("Rejected %s action %r: %s", side.value, ability_id, reason)
            return False
        actor = session.combatant(side)
        ability = find_ability(actor, session.opponent_of(side), ability_id)
        if ability is None:
            return False
        session.set_action(side, ability)
        session.log.add(f"{actor.name} chooses {ability.name}.")
        return True

    def choose_ai_action(self, session: BattleSession, side: Side) -> Ability:
        return npc_choose_action(
            self.legal_actions(session, side),
            session.opponent_of(side).is_grappled,
            self.dice,
        )

    def submit_player_action(self, session: BattleSession, ability_id: str) -> bool:
        """Record the player's choice and let the AI answer for the enemy."""
        if not self.submit_action(session, Side.PLAYER, ability_id):
            return False
        if session.enemy_action is None:
            choice = self.choose_ai_action(session, Side.ENEMY)
            self.submit_action(session, Side.ENEMY, choice.id)
        return True

    def pass_turn(self, session: BattleSession) -> RoundOutcome | None:
        """Resolve now, defending by default when no action was chosen yet."""
        if session.player_action is None and not self.submit_player_action(session, PASS_ABILITY.id):
            return None
        return self.resolve_round(session)

    # -- Resolution --

    def resolve_round(self, session: BattleSession) -> RoundOutcome | None:
        if session.phase != BattlePhase.AWAITING_ACTIONS:
            logger.warning("resolve_round called while battle is %s", session.phase.value)
            return None
        if session.player_action is None or session.enemy_action is None:
            logger.error("Round %d resolution attempted with missing actions", session.round_number)
            session.log.add("Error: Actions missing in resolve_round", LogCategory.LOSS)
            return None

        log = session.log
        first_event = len(log)
        player, enemy = session.player, session.enemy
        player_action, enemy_action = session.player_action, session.enemy_action
        session.phase = BattlePhase.RESOLVING
        log.add(f"--- Round {session.round_number} Clash ---", LogCategory.SPECIAL)

        passives.run_opponent_action(player, enemy_action, log)
        passives.run_opponent_action(enemy, player_action, log)

        player_clash = roll_clash(player, player_action, enemy, self.dice, log).value
        enemy_clash = roll_clash(enemy, enemy_action, player, self.dice, log).value
        log.add(f"{player.name} Clash Value: {player_clash}")
        log.add(f"{enemy.name} Clash Value: {enemy_clash}")

        clash_winner: Side | None = None
        if player_clash > enemy_clash:
            clash_winner = Side.PLAYER
            self._apply_decisive(session, Side.PLAYER)
        elif enemy_clash > player_clash:
            clash_winner = Side.ENEMY
            self._apply_decisive(session, Side.ENEMY)
        else:
            log.add("Clash Tie! No damage dealt.")
            for side in (Side.PLAYER, Side.ENEMY):
                if self._someone_down(session):
                    break
                apply_utility_effect(
                    session.combatant(side), session.action_for(side), session.opponent_of(side), self.dice, log,
                )

        player.round_defense_bonus = 0
        enemy.round_defense_bonus = 0

        resolved_round = session.round_number
        if self._someone_down(session):
            self._end_battle(session)
        else:
            session.round_number += 1
            session.phase = BattlePhase.CONTINUING

        return RoundOutcome(
            round_number=resolved_round,
            player_clash=player_clash,
            enemy_clash=enemy_clash,
            clash_winner=clash_winner,
            events=log.since(first_event),
            player=CombatantSnapshot.of(player),
            enemy=CombatantSnapshot.of(enemy),
            ended=session.result,
        )

    def run_auto_battle(self, session: BattleSession, max_rounds: int = 200) -> BattleEnded | None:
        """Let the AI pick for both sides until the battle ends or the cap is hit."""
        while not session.is_over and session.round_number <= max_rounds:
            self.begin_round(session)
            for side in (Side.PLAYER, Side.ENEMY):
                if session.action_for(side) is None:
                    self.submit_action(session, side, self.choose_ai_action(session, side).id)
            if self.resolve_round(session) is None:
                break
        return session.result

    # -- Helpers --

    def _open_round(self, session: BattleSession) -> None:
        session.player_action = None
        session.enemy_action = None
        session.log.round_number = session.round_number
        passives.run_round_start(session.player, session.log)
        passives.run_round_start(session.enemy, session.log)
        session.phase = BattlePhase.AWAITING_ACTIONS

    def _apply_decisive(self, session: BattleSession, winner: Side) -> None:
        log: BattleLog = session.log
        loser = winner.other
        apply_winning_effect(
            session.combatant(winner), session.action_for(winner), session.combatant(loser), self.dice, log,
        )
        if self._someone_down(session):
            return
        apply_losing_effect(
            session.combatant(loser), session.action_for(loser), session.combatant(winner), self.dice, log,
        )

    @staticmethod
    def _someone_down(session: BattleSession) -> bool:
        return not session.player.is_alive or not session.enemy.is_alive

    def _end_battle(self, session: BattleSession) -> None:
        # Player is checked first: a double knockout goes to the enemy.
        winner_side = Side.PLAYER if session.player.is_alive else Side.ENEMY
        winner = session.combatant(winner_side)
        session.result = BattleEnded(
            winner=winner_side,
            winner_id=winner.character_id,
            winner_name=winner.name,
            rounds=session.round_number,
        )
        session.phase = BattlePhase.ENDED
        session.log.add("--- GAME OVER ---", LogCategory.SPECIAL)
        if winner_side is Side.PLAYER:
            session.log.add(f"{winner.name} is victorious!", LogCategory.WIN)
        else:
            session.log.add(f"{winner.name} has defeated you.", LogCategory.LOSS)
        logger.info("Battle %s ended in round %d, winner %s", session.id, session.round_number, winner.character_id)
