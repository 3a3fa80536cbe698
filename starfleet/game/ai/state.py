"""Persistable opponent AI state."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import StrEnum

from starfleet.game.core.models import Coord, Orientation


class AIMode(StrEnum):
    """Top-level targeting mode."""

    HUNT = "hunt"
    TARGET = "target"


class LineEnd(StrEnum):
    """Extremity of the damaged line being extended."""

    POS = "pos"
    NEG = "neg"


@dataclass(slots=True)
class AIState:
    """Hunt/target state carried across opponent moves and saves."""

    mode: AIMode = AIMode.HUNT
    targets: deque[Coord] = field(default_factory=deque)
    current_hits: list[Coord] = field(default_factory=list)
    direction: Orientation | None = None
    blocked_pos: bool = False
    blocked_neg: bool = False
    last_end: LineEnd | None = None

    def reset(self) -> None:
        """Return to hunt mode, forgetting the pursued ship."""
        self.mode = AIMode.HUNT
        self.targets.clear()
        self.current_hits.clear()
        self.direction = None
        self.blocked_pos = False
        self.blocked_neg = False
        self.last_end = None

    def block(self, end: LineEnd) -> None:
        if end is LineEnd.POS:
            self.blocked_pos = True
        else:
            self.blocked_neg = True

    def is_blocked(self, end: LineEnd) -> bool:
        return self.blocked_pos if end is LineEnd.POS else self.blocked_neg

    @property
    def fully_blocked(self) -> bool:
        return self.blocked_pos and self.blocked_neg


@dataclass(frozen=True, slots=True)
class TargetChoice:
    """Coordinate picked by the AI and the line extremity it extends, if any."""

    coord: Coord
    end: LineEnd | None = None
