"""Tests for src/coin_clash/cli/combat_display.py."""
from __future__ import annotations

import pytest
from rich.console import Console

from coin_clash.cli.combat_display import CombatDisplay, hp_bar
from coin_clash.content.loader import load_roster
from coin_clash.engine.validators import legal_actions
from coin_clash.models.combat import BattleEnded, CombatantSnapshot, Side
from coin_clash.models.event import BattleLog


@pytest.fixture
def display():
    return CombatDisplay(console=Console(record=True, width=160))


def _text(display: CombatDisplay) -> str:
    return display.console.export_text()


class TestHpBar:
    @pytest.mark.parametrize("current, maximum, color", [
        (100, 100, "green"),
        (40, 100, "yellow"),
        (10, 100, "red"),
        (0, 0, "red"),
    ])
    def test_color(self, current, maximum, color):
        assert hp_bar(current, maximum).startswith(f"[{color}]")

    def test_width(self):
        bar = hp_bar(50, 100, width=10)
        assert bar.count("█") == 5
        assert bar.count("░") == 5


class TestStatus:
    def test_shows_both_sides(self, display, make_combatant):
        zectus = CombatantSnapshot.of(make_combatant("zectus"))
        striker = CombatantSnapshot.of(make_combatant("striker", Side.ENEMY))
        display.show_status(3, zectus, striker)
        text = _text(display)
        assert "Round 3" in text
        assert "120/120" in text
        assert "110/110" in text
        assert "Scythe" in text
        assert "Slow Start" in text


class TestActionMenu:
    def test_disabled_combo_reason(self, display, make_combatant):
        options = legal_actions(make_combatant("juggernaut"), make_combatant("striker", Side.ENEMY))
        display.show_action_menu(options)
        text = _text(display)
        assert "[1] Grapple" in text
        assert "Striker must be grappled" in text
        assert "[p] Pass/Defend" in text
        assert "[q] Quit" in text


class TestEvents:
    def test_prints_messages(self, display):
        log = BattleLog()
        log.add("Striker rolls d4 (3) and flips 3 coins (2 wins).")
        log.add("Striker's Dragon Strike hits for [2] (Force)")
        display.show_events(log.events)
        text = _text(display)
        assert "rolls d4" in text
        assert "hits for [2]" in text

    def test_hides_rolls(self, make_combatant):
        display = CombatDisplay(console=Console(record=True, width=160), show_rolls=False)
        log = BattleLog()
        log.add("Striker rolls d4 (3) and flips 3 coins (2 wins).")
        log.add("Striker Clash Value: 10")
        display.show_events(log.events)
        text = _text(display)
        assert "rolls d4" not in text
        assert "Clash Value: 10" in text


class TestSummaries:
    def test_battle_end(self, display):
        result = BattleEnded(winner=Side.ENEMY, winner_id="juggernaut", winner_name="Juggernaut", rounds=7)
        display.show_battle_end(result, player_won=False)
        assert "Juggernaut won in Round 7" in _text(display)

    def test_roster(self, display):
        display.show_roster(load_roster())
        text = _text(display)
        for name in ("Striker", "Juggernaut", "Shutenmaru", "Zectus"):
            assert name in text

    def test_simulation(self, display):
        display.show_simulation("Striker", "Zectus", {"player": 6, "enemy": 4}, 31.0, 0)
        text = _text(display)
        assert "Striker vs Zectus" in text
        assert "Average rounds: 31.0" in text
        assert "Unfinished" not in text
