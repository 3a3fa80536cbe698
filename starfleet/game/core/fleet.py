"""Fleet placement and side construction."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from starfleet.game.core.board import Side, Ship
from starfleet.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    Orientation,
    ShipPlacement,
    ShipSpec,
    cells_for_placement,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10_000


class PlacementError(RuntimeError):
    """Raised when a ship cannot be placed within the retry budget."""


def build_side(placements: Sequence[ShipPlacement], size: int = BOARD_SIZE) -> Side:
    """Create a side from explicit placements; ship ids follow list order."""
    side = Side(size=size)
    for idx, placement in enumerate(placements):
        cells = cells_for_placement(placement)
        if not side.can_place(cells):
            raise ValueError(f"Invalid placement for {placement.spec.name}.")
        side.place_ship(
            Ship(id=idx, name=placement.spec.name, length=placement.spec.length, cells=set(cells))
        )
    return side


def random_side(
    rng: random.Random,
    fleet: Sequence[ShipSpec] = DEFAULT_FLEET,
    *,
    size: int = BOARD_SIZE,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Side:
    """Create a side with every ship of the fleet placed at random."""
    side = Side(size=size)
    for idx, spec in enumerate(fleet):
        placement = _sample_placement(side, spec, rng, max_attempts)
        side.place_ship(
            Ship(id=idx, name=spec.name, length=spec.length, cells=set(cells_for_placement(placement)))
        )
    return side


def _sample_placement(
    side: Side, spec: ShipSpec, rng: random.Random, max_attempts: int
) -> ShipPlacement:
    for _ in range(max_attempts):
        orientation = Orientation.HORIZONTAL if rng.random() < 0.5 else Orientation.VERTICAL
        bow = Coord(row=rng.randrange(side.size), col=rng.randrange(side.size))
        placement = ShipPlacement(spec=spec, bow=bow, orientation=orientation)
        if side.can_place(cells_for_placement(placement)):
            return placement
    logger.error("placement_exhausted ship=%s attempts=%d", spec.name, max_attempts)
    raise PlacementError(f"Failed to place {spec.name} after {max_attempts} attempts.")
