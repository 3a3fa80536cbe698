"""AI strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from starfleet.game.ai.state import TargetChoice
from starfleet.game.core.board import Side
from starfleet.game.core.models import ShotOutcome


class SearchExhaustedError(RuntimeError):
    """Raised when the AI is asked for a shot but every cell was already fired upon."""


class AIStrategy(ABC):
    """Opponent strategy contract: pick a cell, then learn from its outcome."""

    @abstractmethod
    def choose_shot(self, side: Side) -> TargetChoice:
        """Return next coordinate to fire at on the given side."""

    @abstractmethod
    def notify_result(self, choice: TargetChoice, outcome: ShotOutcome, side: Side) -> None:
        """Update strategy state with shot result."""
