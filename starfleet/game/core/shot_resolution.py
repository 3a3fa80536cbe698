"""Shot outcome evaluation (miss/hit/sunk)."""

from __future__ import annotations

from starfleet.game.core.board import Side
from starfleet.game.core.models import Coord, ShotOutcome


def apply_shot(side: Side, coord: Coord) -> ShotOutcome:
    """Record a shot on a side and report hit/sunk.

    The coordinate must be in bounds. Repeating a shot is harmless for the
    side's sets, but a ship is only reported sunk by the shot that completes it.
    """
    side.shots.add(coord)
    ship_id = side.ship_id_at(coord)
    if ship_id is None:
        return ShotOutcome(hit=False)

    ship = side.ship_by_id(ship_id)
    fresh = coord not in ship.hits
    ship.hits.add(coord)
    if fresh and ship.sunk:
        return ShotOutcome(hit=True, sunk=ship.name)
    return ShotOutcome(hit=True)
