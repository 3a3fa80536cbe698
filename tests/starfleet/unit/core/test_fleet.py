import random

import pytest

from starfleet.game.core.fleet import PlacementError, build_side, random_side
from starfleet.game.core.models import DEFAULT_FLEET, Coord, Orientation, ShipPlacement, ShipSpec, in_bounds


def test_build_side_assigns_ids_in_order() -> None:
    side = build_side(
        [
            ShipPlacement(ShipSpec("A", 2), Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipSpec("B", 3), Coord(2, 2), Orientation.VERTICAL),
        ]
    )
    assert [ship.id for ship in side.ships] == [0, 1]
    assert side.ship_id_at(Coord(4, 2)) == 1


def test_build_side_rejects_overlap() -> None:
    with pytest.raises(ValueError):
        build_side(
            [
                ShipPlacement(ShipSpec("A", 2), Coord(0, 0), Orientation.HORIZONTAL),
                ShipPlacement(ShipSpec("B", 2), Coord(0, 1), Orientation.VERTICAL),
            ]
        )


def test_random_side_is_always_valid_over_many_placements() -> None:
    rng = random.Random(2024)
    for _ in range(1000):
        side = random_side(rng)
        assert len(side.ships) == len(DEFAULT_FLEET)
        all_cells = [cell for ship in side.ships for cell in ship.cells]
        assert len(all_cells) == len(set(all_cells))
        assert all(in_bounds(cell) for cell in all_cells)
        for ship in side.ships:
            assert len(ship.cells) == ship.length
            assert all(side.ship_id_at(cell) == ship.id for cell in ship.cells)
        assert int((side.grid >= 0).sum()) == len(all_cells)


def test_random_side_gives_up_after_bounded_attempts() -> None:
    with pytest.raises(PlacementError):
        random_side(random.Random(1), [ShipSpec("Too long", 11)], max_attempts=50)
