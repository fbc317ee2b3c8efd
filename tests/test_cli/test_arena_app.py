"""Tests for src/coin_clash/app.py and the typer commands."""
from __future__ import annotations

import pytest
from rich.console import Console
from typer.testing import CliRunner

from coin_clash.app import ArenaApp, _load_config
from coin_clash.cli.combat_display import CombatDisplay
from coin_clash.cli.main import app


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        "[game]\nseed = 9\nmax_rounds = 300\n"
        "[display]\nresolve_delay = 0\nround_delay = 0\n"
    )
    return path


@pytest.fixture
def arena(config_file):
    arena = ArenaApp(config_path=config_file, fast=True)
    arena._display = CombatDisplay(console=Console(record=True, width=160))
    return arena


def _script_input(monkeypatch, arena, lines):
    feed = iter(lines)
    monkeypatch.setattr(arena.display.console, "input", lambda prompt="": next(feed))


class TestConfig:
    def test_defaults_when_missing(self, tmp_path):
        config = _load_config(tmp_path / "absent.toml")
        assert config["game"]["max_rounds"] == 200
        assert config["display"]["show_rolls"] is True

    def test_file_overrides(self, config_file):
        config = _load_config(config_file)
        assert config["game"]["seed"] == 9
        assert config["display"]["resolve_delay"] == 0
        assert config["logging"]["level"] == "WARNING"

    def test_cli_seed_wins(self, config_file):
        assert ArenaApp(seed=4, config_path=config_file).seed == 4
        assert ArenaApp(config_path=config_file).seed == 9


class TestPlay:
    def test_quit_immediately(self, arena, monkeypatch):
        _script_input(monkeypatch, arena, ["help", "quit"])
        session = arena.play("striker", "juggernaut")
        assert not session.is_over
        assert session.round_number == 1
        assert "You leave the arena." in arena.display.console.export_text()

    def test_one_round_then_quit(self, arena, monkeypatch):
        _script_input(monkeypatch, arena, ["fireball", "1", "quit"])
        session = arena.play("striker", "juggernaut")
        assert session.round_number == 2
        text = arena.display.console.export_text()
        assert "'fireball' is not one of your actions." in text
        assert "Round 1 Clash" in text

    def test_gated_choice_rejected(self, arena, monkeypatch):
        _script_input(monkeypatch, arena, ["2", "quit"])
        session = arena.play("juggernaut", "striker")
        assert session.round_number == 1
        assert "not available right now" in arena.display.console.export_text()


class TestSimulate:
    def test_counts_add_up(self, arena):
        summary = arena.simulate("striker", "shutenmaru", 3)
        wins = summary["wins"]
        assert wins["player"] + wins["enemy"] + summary["unfinished"] == 3
        assert "Average rounds" in arena.display.console.export_text()

    def test_zero_battles(self, arena):
        summary = arena.simulate("striker", None, 0)
        assert summary["avg_rounds"] == 0.0


class TestCommands:
    def test_simulate_command(self):
        result = CliRunner().invoke(app, ["simulate", "--hero", "zectus", "--opponent", "striker", "--battles", "2", "--seed", "1"])
        assert result.exit_code == 0
        assert "Average rounds" in result.output

    def test_unknown_hero(self):
        result = CliRunner().invoke(app, ["play", "--hero", "gandalf", "--fast"])
        assert result.exit_code == 1
        assert "Unknown character: gandalf" in result.output
