from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class LogCategory(str, Enum):
    DEFAULT = "default"
    DAMAGE = "damage"
    WIN = "win"
    LOSS = "loss"
    SPECIAL = "special"


class LogEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    round_number: int
    message: str
    category: LogCategory = LogCategory.DEFAULT


class BattleLog(BaseModel):
    """Chronological battle narration consumed by the presentation layer."""

    round_number: int = 1
    events: list[LogEvent] = Field(default_factory=list)

    def add(self, message: str, category: LogCategory = LogCategory.DEFAULT) -> LogEvent:
        event = LogEvent(round_number=self.round_number, message=message, category=category)
        self.events.append(event)
        logger.debug("[round %d][%s] %s", self.round_number, category.value, message)
        return event

    def since(self, index: int) -> list[LogEvent]:
        return list(self.events[index:])

    def __len__(self) -> int:
        return len(self.events)
