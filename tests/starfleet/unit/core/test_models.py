from starfleet.game.core.models import (
    Coord,
    Orientation,
    ShipPlacement,
    ShipSpec,
    cells_for_placement,
    coord_label,
    in_bounds,
    parse_label,
)


def test_cells_for_placement_horizontal_and_vertical() -> None:
    spec = ShipSpec("Voyager", 3)
    horizontal = ShipPlacement(spec, Coord(1, 2), Orientation.HORIZONTAL)
    vertical = ShipPlacement(spec, Coord(1, 2), Orientation.VERTICAL)
    assert cells_for_placement(horizontal) == [Coord(1, 2), Coord(1, 3), Coord(1, 4)]
    assert cells_for_placement(vertical) == [Coord(1, 2), Coord(2, 2), Coord(3, 2)]


def test_in_bounds_edges() -> None:
    assert in_bounds(Coord(0, 0))
    assert in_bounds(Coord(9, 9))
    assert not in_bounds(Coord(-1, 0))
    assert not in_bounds(Coord(0, 10))


def test_coord_label_uses_column_letter_and_one_based_row() -> None:
    assert coord_label(Coord(0, 0)) == "A1"
    assert coord_label(Coord(6, 1)) == "B7"
    assert coord_label(Coord(9, 9)) == "J10"


def test_parse_label_accepts_labels_and_rejects_garbage() -> None:
    assert parse_label("b7") == Coord(6, 1)
    assert parse_label(" J10 ") == Coord(9, 9)
    assert parse_label("K1") is None
    assert parse_label("A0") is None
    assert parse_label("A11") is None
    assert parse_label("7B") is None
    assert parse_label("") is None
