"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation, also used as the AI's locked line axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Phase(StrEnum):
    """Mission phase."""

    BATTLE = "battle"
    GAMEOVER = "gameover"


class Turn(StrEnum):
    """Current turn owner."""

    PLAYER = "player"
    CPU = "cpu"


class ShotResult(StrEnum):
    """Result of a single shot as seen by the session layer."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"
    INVALID = "INVALID"


class LogKind(StrEnum):
    """Display category of a mission log entry."""

    MUTED = "muted"
    SINK = "sink"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipSpec:
    """Ship definition used when building a fleet."""

    name: str
    length: int


DEFAULT_FLEET: tuple[ShipSpec, ...] = (
    ShipSpec("USS Enterprise (Heavy Cruiser)", 5),
    ShipSpec("USS Defiant (Escort)", 4),
    ShipSpec("USS Voyager (Intrepid)", 3),
    ShipSpec("USS Discovery (Science)", 3),
    ShipSpec("Runabout (Support Craft)", 2),
)


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    spec: ShipSpec
    bow: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Raw resolver outcome: hit flag and the name of a ship sunk by this shot."""

    hit: bool
    sunk: str | None = None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Single mission log line."""

    text: str
    kind: LogKind = LogKind.MUTED


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate lies on the board."""
    return 0 <= coord.row < size and 0 <= coord.col < size


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.spec.length):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.bow.row, placement.bow.col + i))
        else:
            result.append(Coord(placement.bow.row + i, placement.bow.col))
    return result


def coord_label(coord: Coord) -> str:
    """Format a coordinate as a sector label, e.g. ``Coord(6, 1)`` -> ``B7``."""
    return f"{chr(ord('A') + coord.col)}{coord.row + 1}"


def parse_label(label: str, size: int = BOARD_SIZE) -> Coord | None:
    """Parse a sector label back into a coordinate, or ``None`` if malformed."""
    cleaned = label.strip().upper()
    if len(cleaned) < 2 or not cleaned[0].isalpha() or not cleaned[1:].isdigit():
        return None
    coord = Coord(row=int(cleaned[1:]) - 1, col=ord(cleaned[0]) - ord("A"))
    return coord if in_bounds(coord, size) else None
