"""Main application bootstrap — wires config, roster, engine and display together."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from coin_clash.models.combat import BattleSession, Side

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "game": {"seed": None, "max_rounds": 200},
    "display": {"resolve_delay": 1.0, "round_delay": 2.0, "show_rolls": True},
    "logging": {"level": "WARNING"},
}


def _load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config.toml from project root, layered over the defaults."""
    import tomllib

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    config_path = config_path or Path(__file__).parent.parent.parent / "config.toml"
    if config_path.exists():
        with open(config_path, "rb") as f:
            loaded = tomllib.load(f)
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
    return config


def configure_logging(level: str) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
    )


class ArenaApp:
    """Main application class that bootstraps and runs battles."""

    def __init__(self, seed: int | None = None, config_path: Path | None = None, fast: bool = False):
        self.config = _load_config(config_path)
        configure_logging(self.config["logging"].get("level", "WARNING"))
        if seed is None:
            seed = self.config["game"].get("seed")
        self.seed = seed
        self.fast = fast

        # Lazy-initialized components
        self._engine = None
        self._display = None
        self._input_handler = None

    # -- Component initialization (lazy) --

    @property
    def engine(self):
        if self._engine is None:
            from coin_clash.content.loader import load_roster
            from coin_clash.engine.battle_engine import BattleEngine
            from coin_clash.mechanics.dice import Dice

            self._engine = BattleEngine(load_roster(), Dice(self.seed))
        return self._engine

    @property
    def display(self):
        if self._display is None:
            from coin_clash.cli.combat_display import CombatDisplay

            disp_cfg = self.config.get("display", {})
            self._display = CombatDisplay(show_rolls=disp_cfg.get("show_rolls", True))
        return self._display

    @property
    def input_handler(self):
        if self._input_handler is None:
            from coin_clash.cli.input_handler import InputHandler

            self._input_handler = InputHandler()
        return self._input_handler

    def _pause(self, key: str) -> None:
        if self.fast:
            return
        delay = float(self.config.get("display", {}).get(key, 0) or 0)
        if delay > 0:
            time.sleep(delay)

    # -- Commands --

    def show_roster(self) -> None:
        self.display.show_roster(self.engine.roster)

    def play(self, hero_id: str, opponent_id: str | None = None) -> BattleSession:
        """Run an interactive battle until someone falls or the player quits."""
        engine = self.engine
        display = self.display
        session = engine.start_battle(hero_id, opponent_id)
        display.show_combat_start(engine.snapshot(session, Side.PLAYER), engine.snapshot(session, Side.ENEMY))
        shown = 0

        while not session.is_over:
            options = engine.begin_round(session)
            display.show_events(session.log.since(shown))
            shown = len(session.log)
            display.show_status(session.round_number, engine.snapshot(session, Side.PLAYER), engine.snapshot(session, Side.ENEMY))
            display.show_action_menu(options)

            raw = display.console.input(f"[bold cyan]Choose your next action, {session.player.name} > [/bold cyan]")
            command = self.input_handler.classify(raw, options)
            action_type = command["action_type"]

            if action_type == "quit":
                display.show_message("You leave the arena.", "dim")
                logger.info("Player quit battle %s in round %d", session.id, session.round_number)
                return session
            if action_type == "help":
                display.show_help()
                continue
            if action_type in ("status", None):
                continue
            if action_type == "pass":
                ok = engine.submit_player_action(session, "pass")
            elif action_type == "ability":
                ok = engine.submit_player_action(session, command["ability_id"])
            else:
                display.show_message(f"'{raw.strip()}' is not one of your actions. Type help for options.")
                continue

            if not ok:
                display.show_message("That action is not available right now.")
                continue

            display.show_events(session.log.since(shown))
            shown = len(session.log)
            self._pause("resolve_delay")
            engine.resolve_round(session)
            display.show_events(session.log.since(shown))
            shown = len(session.log)
            if not session.is_over:
                self._pause("round_delay")

        if session.result is not None:
            display.show_status(session.result.rounds, engine.snapshot(session, Side.PLAYER), engine.snapshot(session, Side.ENEMY))
            display.show_battle_end(session.result, session.result.winner is Side.PLAYER)
        return session

    def simulate(self, hero_id: str, opponent_id: str | None, battles: int) -> dict[str, Any]:
        """Run AI-vs-AI battles and summarise the results."""
        engine = self.engine
        max_rounds = int(self.config["game"].get("max_rounds", 200))
        wins = {"player": 0, "enemy": 0}
        rounds: list[int] = []
        unfinished = 0
        player_name = enemy_name = ""

        for _ in range(max(0, battles)):
            session = engine.start_battle(hero_id, opponent_id)
            player_name, enemy_name = session.player.name, session.enemy.name
            result = engine.run_auto_battle(session, max_rounds=max_rounds)
            if result is None:
                unfinished += 1
                continue
            wins[result.winner.value] += 1
            rounds.append(result.rounds)

        avg_rounds = sum(rounds) / len(rounds) if rounds else 0.0
        if battles > 0:
            label = enemy_name if opponent_id else "Random opponents"
            self.display.show_simulation(player_name, label, wins, avg_rounds, unfinished)
        return {"wins": wins, "avg_rounds": avg_rounds, "unfinished": unfinished}
