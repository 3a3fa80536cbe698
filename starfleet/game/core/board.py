"""Side state representation and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from starfleet.game.core.models import BOARD_SIZE, Coord, in_bounds

EMPTY = -1


@dataclass(slots=True)
class Ship:
    """Placed ship with its occupied and damaged cells."""

    id: int
    name: str
    length: int
    cells: set[Coord] = field(default_factory=set)
    hits: set[Coord] = field(default_factory=set)

    @property
    def sunk(self) -> bool:
        return len(self.hits) == len(self.cells)


@dataclass(slots=True)
class Side:
    """One player's board: numpy-backed occupancy grid, shot history and ships."""

    size: int = BOARD_SIZE
    grid: np.ndarray = field(
        default_factory=lambda: np.full((BOARD_SIZE, BOARD_SIZE), EMPTY, dtype=np.int16)
    )
    shots: set[Coord] = field(default_factory=set)
    ships: list[Ship] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.grid.shape != (self.size, self.size):
            self.grid = np.full((self.size, self.size), EMPTY, dtype=np.int16)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return in_bounds(coord, self.size)

    def can_place(self, cells: list[Coord]) -> bool:
        """Return whether all cells are on the board and unoccupied."""
        for cell in cells:
            if not self.in_bounds(cell):
                return False
            if self.grid[cell.row, cell.col] != EMPTY:
                return False
        return True

    def place_ship(self, ship: Ship) -> None:
        """Commit a ship to the grid."""
        cells = sorted(ship.cells, key=lambda c: (c.row, c.col))
        if not self.can_place(cells):
            raise ValueError(f"Invalid placement for {ship.name}.")
        for cell in cells:
            self.grid[cell.row, cell.col] = ship.id
        self.ships.append(ship)

    def ship_id_at(self, coord: Coord) -> int | None:
        """Return the ship identity occupying a cell, or ``None`` when empty."""
        value = int(self.grid[coord.row, coord.col])
        return None if value == EMPTY else value

    def ship_by_id(self, ship_id: int) -> Ship:
        for ship in self.ships:
            if ship.id == ship_id:
                return ship
        raise KeyError(ship_id)

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return coord in self.shots

    def untargeted(self) -> list[Coord]:
        """Return all cells not yet fired upon, in row-major order."""
        return [
            Coord(r, c)
            for r in range(self.size)
            for c in range(self.size)
            if Coord(r, c) not in self.shots
        ]

    def all_ships_sunk(self) -> bool:
        """Return whether every ship has been sunk."""
        return all(ship.sunk for ship in self.ships)

    def hit_count(self) -> int:
        """Return the total number of damaged ship cells."""
        return sum(len(ship.hits) for ship in self.ships)
