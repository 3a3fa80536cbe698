from __future__ import annotations

from starfleet.game.core.board import Side
from starfleet.game.core.fleet import build_side
from starfleet.game.core.models import Coord, Orientation, ShipPlacement, ShipSpec
from starfleet.game.core.rules import GameSession

RUNABOUT = ShipSpec("Runabout (Support Craft)", 2)
VOYAGER = ShipSpec("USS Voyager (Intrepid)", 3)


def make_known_side() -> Side:
    """Runabout at A1-B1 and Voyager at F6-F8."""
    return build_side(
        [
            ShipPlacement(RUNABOUT, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(VOYAGER, Coord(5, 5), Orientation.VERTICAL),
        ]
    )


def make_known_session() -> GameSession:
    return GameSession(player=make_known_side(), cpu=make_known_side())
