"""Shared fixtures for the Coin Clash test suite."""
from __future__ import annotations

from typing import Callable, Iterable

import pytest

from coin_clash.content.loader import load_all_characters
from coin_clash.mechanics.dice import Dice
from coin_clash.models.character import CharacterDef
from coin_clash.models.combat import Combatant, Side
from coin_clash.models.event import BattleLog


class ScriptedDice(Dice):
    """Dice that replay a fixed list of draws, in call order."""

    def __init__(self, values: Iterable[int] = ()) -> None:
        super().__init__(seed=0)
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def push(self, *values: int) -> None:
        self.values.extend(values)

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        assert self.values, f"dice script exhausted on randint({low}, {high})"
        value = self.values.pop(0)
        assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
        return value


@pytest.fixture(scope="session")
def characters() -> dict[str, CharacterDef]:
    return load_all_characters()


@pytest.fixture
def scripted_dice() -> Callable[..., ScriptedDice]:
    def _make(*values: int) -> ScriptedDice:
        return ScriptedDice(values)
    return _make


@pytest.fixture
def make_combatant(characters) -> Callable[..., Combatant]:
    def _make(character_id: str, side: Side = Side.PLAYER) -> Combatant:
        return Combatant.from_definition(characters[character_id], side)
    return _make


@pytest.fixture
def log() -> BattleLog:
    return BattleLog()


@pytest.fixture
def seeded_dice() -> Dice:
    return Dice(seed=42)
