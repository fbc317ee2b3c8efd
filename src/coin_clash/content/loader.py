from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any

from coin_clash.models.character import CharacterDef

CONTENT_DIR = Path(__file__).parent

def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)

def load_all_characters(character_dir: Path | None = None) -> dict[str, CharacterDef]:
    """Load the roster from characters/*.toml, keeping file and entry order.

    Each TOML file holds one or more [[characters]] tables, or a single
    character at the top level.
    """
    characters: dict[str, CharacterDef] = {}
    char_dir = character_dir or CONTENT_DIR / "characters"
    for f in sorted(char_dir.glob("*.toml")):
        data = load_toml(f)
        for entry in data.get("characters", [data]):
            character = CharacterDef.model_validate(entry)
            if character.id in characters:
                raise ValueError(f"Duplicate character id {character.id!r} in {f.name}")
            characters[character.id] = character
    return characters

def load_roster(character_dir: Path | None = None) -> list[CharacterDef]:
    return list(load_all_characters(character_dir).values())

def get_character(character_id: str, character_dir: Path | None = None) -> CharacterDef:
    characters = load_all_characters(character_dir)
    if character_id not in characters:
        raise KeyError(f"Unknown character: {character_id}")
    return characters[character_id]
