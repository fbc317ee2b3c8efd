"""Processes and classifies player text input during a battle."""
from __future__ import annotations

import re
from typing import Any, Sequence

from coin_clash.models.combat import ActionOption

# Meta commands first; the last pattern matches anything.
PATTERNS: list[tuple[str, re.Pattern]] = [
    ("quit", re.compile(r"^(?:quit|exit|q|forfeit)$", re.I)),
    ("help", re.compile(r"^(?:help|\?|commands)$", re.I)),
    ("status", re.compile(r"^(?:status|stats|hp)$", re.I)),
    ("pass", re.compile(r"^(?:pass|defend|wait|p)$", re.I)),
    ("ability", re.compile(r"^(\d+)$")),
    ("ability", re.compile(r"^(?:use\s+)?(.+?)$", re.I)),
]


def _normalize(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


class InputHandler:
    def classify(self, raw_input: str, options: Sequence[ActionOption] = ()) -> dict[str, Any]:
        text = raw_input.strip()
        result: dict[str, Any] = {"action_type": None, "ability_id": None, "raw_input": raw_input}
        if not text:
            return result

        for action_type, pattern in PATTERNS:
            match = pattern.match(text)
            if not match:
                continue
            if action_type != "ability":
                result["action_type"] = action_type
                return result
            ability_id = self._match_option(match.group(1), options)
            if ability_id is None:
                result["action_type"] = "unrecognized"
                return result
            result["action_type"] = "ability"
            result["ability_id"] = ability_id
            return result
        return result

    @staticmethod
    def _match_option(token: str, options: Sequence[ActionOption]) -> str | None:
        """Resolve a menu number, ability id or ability name to an ability id."""
        if token.isdigit():
            index = int(token) - 1
            if 0 <= index < len(options):
                return options[index].ability.id
            return None
        key = _normalize(token)
        for option in options:
            if key in (option.ability.id, _normalize(option.ability.name), _normalize(option.label)):
                return option.ability.id
        return None
