"""Hunt/target AI with direction lock after two aligned hits."""

from __future__ import annotations

import logging
import random

from starfleet.game.ai.state import AIMode, AIState, LineEnd, TargetChoice
from starfleet.game.ai.strategy import AIStrategy, SearchExhaustedError
from starfleet.game.core.board import Side
from starfleet.game.core.models import Coord, Orientation, ShotOutcome

logger = logging.getLogger(__name__)


class HuntTargetAI(AIStrategy):
    """Random hunt, neighbour exploration, then line extension from both ends.

    All state lives in the wrapped :class:`AIState` so it can be persisted with
    the session; the strategy object itself is disposable.
    """

    def __init__(self, state: AIState, rng: random.Random) -> None:
        self._state = state
        self._rng = rng

    @property
    def state(self) -> AIState:
        return self._state

    def choose_shot(self, side: Side) -> TargetChoice:
        choice = self._extend_locked_line(side)
        if choice is None:
            choice = self._next_queued(side)
        if choice is None:
            choice = self._random_hunt(side)
        self._state.last_end = choice.end
        return choice

    def notify_result(self, choice: TargetChoice, outcome: ShotOutcome, side: Side) -> None:
        state = self._state
        if outcome.hit:
            state.mode = AIMode.TARGET
            state.current_hits.append(choice.coord)
            if outcome.sunk is not None:
                logger.debug("ai_reset reason=sunk ship=%s", outcome.sunk)
                state.reset()
                return
            if state.direction is None:
                direction = infer_direction(state.current_hits)
                if direction is not None:
                    logger.debug("ai_direction_locked direction=%s", direction.value)
                    state.direction = direction
                    state.targets.clear()
                    state.blocked_pos = False
                    state.blocked_neg = False
                else:
                    self._enqueue_neighbors(choice.coord, side)
            return

        if state.mode is AIMode.TARGET and state.direction is not None and state.last_end:
            state.block(state.last_end)
        if state.direction is not None and state.fully_blocked:
            logger.debug("ai_reset reason=line_exhausted")
            state.reset()

    def _extend_locked_line(self, side: Side) -> TargetChoice | None:
        state = self._state
        if state.mode is not AIMode.TARGET or state.direction is None or not state.current_hits:
            return None

        pos_end, neg_end = line_ends(state.current_hits, state.direction)
        for end, origin, sign in ((LineEnd.POS, pos_end, 1), (LineEnd.NEG, neg_end, -1)):
            if state.is_blocked(end):
                continue
            candidate = step(origin, state.direction, sign)
            if side.in_bounds(candidate) and not side.was_shot(candidate):
                return TargetChoice(coord=candidate, end=end)
            state.block(end)

        logger.debug("ai_reset reason=line_exhausted")
        state.reset()
        return None

    def _next_queued(self, side: Side) -> TargetChoice | None:
        state = self._state
        while state.mode is AIMode.TARGET and state.targets:
            coord = state.targets.popleft()
            if not side.was_shot(coord):
                return TargetChoice(coord=coord)
        return None

    def _random_hunt(self, side: Side) -> TargetChoice:
        options = side.untargeted()
        if not options:
            raise SearchExhaustedError("No untargeted cells remain on the player side.")
        return TargetChoice(coord=self._rng.choice(options))

    def _enqueue_neighbors(self, coord: Coord, side: Side) -> None:
        queued = set(self._state.targets)
        for cell in neighbors(coord):
            if not side.in_bounds(cell) or side.was_shot(cell) or cell in queued:
                continue
            self._state.targets.append(cell)
            queued.add(cell)


def neighbors(coord: Coord) -> tuple[Coord, ...]:
    """Return the up/down/left/right neighbours, bounds unchecked."""
    return (
        Coord(coord.row - 1, coord.col),
        Coord(coord.row + 1, coord.col),
        Coord(coord.row, coord.col - 1),
        Coord(coord.row, coord.col + 1),
    )


def infer_direction(hits: list[Coord]) -> Orientation | None:
    """Return the axis of the first aligned pair of hits; rows are checked before columns."""
    for i, first in enumerate(hits):
        for second in hits[i + 1 :]:
            if first.row == second.row:
                return Orientation.HORIZONTAL
            if first.col == second.col:
                return Orientation.VERTICAL
    return None


def line_ends(hits: list[Coord], direction: Orientation) -> tuple[Coord, Coord]:
    """Return ``(pos_end, neg_end)``: hits with max/min coordinate along the axis."""
    if direction is Orientation.HORIZONTAL:
        return max(hits, key=lambda c: c.col), min(hits, key=lambda c: c.col)
    return max(hits, key=lambda c: c.row), min(hits, key=lambda c: c.row)


def step(coord: Coord, direction: Orientation, sign: int) -> Coord:
    if direction is Orientation.HORIZONTAL:
        return Coord(coord.row, coord.col + sign)
    return Coord(coord.row + sign, coord.col)
