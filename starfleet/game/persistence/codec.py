"""Lossless session <-> JSON payload conversion with structural validation."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from enum import StrEnum
from typing import TypeVar

import numpy as np
import orjson

from starfleet.game.ai.state import AIMode, AIState, LineEnd
from starfleet.game.core.board import EMPTY, Ship, Side
from starfleet.game.core.models import (
    BOARD_SIZE,
    Coord,
    LogEntry,
    LogKind,
    Orientation,
    Phase,
    Turn,
    in_bounds,
)
from starfleet.game.core.rules import GameSession

_E = TypeVar("_E", bound=StrEnum)

_LOG_KINDS = frozenset(kind.value for kind in LogKind)


class SaveCorruptedError(ValueError):
    """Raised when saved session data cannot be turned back into a session."""


def encode_session(session: GameSession) -> str:
    """Serialize a session to JSON text."""
    return orjson.dumps(session_to_payload(session)).decode("utf-8")


def decode_session(text: str) -> GameSession:
    """Parse JSON text into a session, raising ``SaveCorruptedError`` on bad data."""
    try:
        payload = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise SaveCorruptedError("Saved session is not valid JSON.") from exc
    return payload_to_session(payload)


def session_to_payload(session: GameSession) -> dict[str, object]:
    """Convert a session to a JSON-serializable payload."""
    return {
        "phase": session.phase.value,
        "turn": session.turn.value,
        "revealCPU": session.reveal_cpu,
        "log": [{"text": entry.text, "kind": entry.kind.value} for entry in session.log],
        "ai": ai_to_payload(session.ai),
        "player": side_to_payload(session.player),
        "cpu": side_to_payload(session.cpu),
    }


def ai_to_payload(state: AIState) -> dict[str, object]:
    return {
        "mode": state.mode.value,
        "targets": [_coord_to_payload(coord) for coord in state.targets],
        "currentHits": [_coord_to_payload(coord) for coord in state.current_hits],
        "dir": state.direction.value if state.direction is not None else None,
        "blockedPos": state.blocked_pos,
        "blockedNeg": state.blocked_neg,
        "lastEnd": state.last_end.value if state.last_end is not None else None,
    }


def side_to_payload(side: Side) -> dict[str, object]:
    return {
        "grid": [[None if value == EMPTY else int(value) for value in row] for row in side.grid],
        "shots": _coords_to_payload(side.shots),
        "ships": [
            {
                "id": ship.id,
                "name": ship.name,
                "length": ship.length,
                "cells": _coords_to_payload(ship.cells),
                "hits": _coords_to_payload(ship.hits),
            }
            for ship in side.ships
        ],
    }


def payload_to_session(payload: object) -> GameSession:
    """Convert a loaded payload into a session."""
    data = _require_dict(payload, "session")
    raw_log = data.get("log")
    raw_ai = data.get("ai")
    raw_reveal = data.get("revealCPU")
    return GameSession(
        phase=_enum(Phase, data.get("phase"), "phase"),
        turn=_enum(Turn, data.get("turn"), "turn"),
        reveal_cpu=False if raw_reveal is None else _bool(raw_reveal, "revealCPU"),
        log=[] if raw_log is None else _log(raw_log),
        ai=AIState() if raw_ai is None else payload_to_ai(raw_ai),
        player=payload_to_side(data.get("player"), "player"),
        cpu=payload_to_side(data.get("cpu"), "cpu"),
    )


def payload_to_ai(payload: object) -> AIState:
    data = _require_dict(payload, "ai")
    raw_dir = data.get("dir")
    raw_end = data.get("lastEnd")
    return AIState(
        mode=_enum(AIMode, data.get("mode", AIMode.HUNT.value), "ai.mode"),
        targets=deque(_coords(data.get("targets", []), "ai.targets")),
        current_hits=_coords(data.get("currentHits", []), "ai.currentHits"),
        direction=None if raw_dir is None else _enum(Orientation, raw_dir, "ai.dir"),
        blocked_pos=_bool(data.get("blockedPos", False), "ai.blockedPos"),
        blocked_neg=_bool(data.get("blockedNeg", False), "ai.blockedNeg"),
        last_end=None if raw_end is None else _enum(LineEnd, raw_end, "ai.lastEnd"),
    )


def payload_to_side(payload: object, label: str) -> Side:
    data = _require_dict(payload, label)
    grid = _grid(data.get("grid"), f"{label}.grid")
    shots = set(_coords(data.get("shots", []), f"{label}.shots"))

    raw_ships = data.get("ships", [])
    if not isinstance(raw_ships, list):
        raise SaveCorruptedError(f"{label}.ships must be a list.")
    ships = [_ship(item, f"{label}.ships[{idx}]") for idx, item in enumerate(raw_ships)]
    if not ships:
        raise SaveCorruptedError(f"{label} has no ships.")

    seen_ids: set[int] = set()
    occupied = 0
    for ship in ships:
        if ship.id in seen_ids:
            raise SaveCorruptedError(f"{label} has duplicate ship id {ship.id}.")
        seen_ids.add(ship.id)
        if not ship.hits <= shots:
            raise SaveCorruptedError(f"{label} ship {ship.id} has hits that were never fired.")
        for cell in ship.cells:
            if int(grid[cell.row, cell.col]) != ship.id:
                raise SaveCorruptedError(f"{label} grid does not match ship {ship.id}.")
        occupied += len(ship.cells)
    if int(np.count_nonzero(grid != EMPTY)) != occupied:
        raise SaveCorruptedError(f"{label} grid has cells owned by no ship.")
    return Side(grid=grid, shots=shots, ships=ships)


def _ship(payload: object, label: str) -> Ship:
    data = _require_dict(payload, label)
    ship_id = _int(data.get("id"), f"{label}.id")
    name = data.get("name")
    if not isinstance(name, str):
        raise SaveCorruptedError(f"{label}.name must be a string.")
    length = _int(data.get("length"), f"{label}.length")
    cells = set(_coords(data.get("cells", []), f"{label}.cells"))
    hits = set(_coords(data.get("hits", []), f"{label}.hits"))
    if length < 2 or len(cells) != length:
        raise SaveCorruptedError(f"{label} length does not match its cells.")
    if not hits <= cells:
        raise SaveCorruptedError(f"{label} has hits outside its cells.")
    return Ship(id=ship_id, name=name, length=length, cells=cells, hits=hits)


def _grid(payload: object, label: str) -> np.ndarray:
    if not isinstance(payload, list) or len(payload) != BOARD_SIZE:
        raise SaveCorruptedError(f"{label} must have {BOARD_SIZE} rows.")
    grid = np.full((BOARD_SIZE, BOARD_SIZE), EMPTY, dtype=np.int16)
    for r, row in enumerate(payload):
        if not isinstance(row, list) or len(row) != BOARD_SIZE:
            raise SaveCorruptedError(f"{label} row {r} must have {BOARD_SIZE} cells.")
        for c, value in enumerate(row):
            if value is None:
                continue
            ship_id = _int(value, f"{label}[{r}][{c}]")
            if not 0 <= ship_id < BOARD_SIZE * BOARD_SIZE:
                raise SaveCorruptedError(f"{label}[{r}][{c}] is not a ship index.")
            grid[r, c] = ship_id
    return grid


def _log(payload: object) -> list[LogEntry]:
    if not isinstance(payload, list):
        raise SaveCorruptedError("log must be a list.")
    entries: list[LogEntry] = []
    for item in payload:
        data = _require_dict(item, "log entry")
        text = data.get("text")
        if not isinstance(text, str):
            raise SaveCorruptedError("log entry text must be a string.")
        raw_kind = data.get("kind")
        # Unknown display kinds fall back to the default styling.
        kind = LogKind(raw_kind) if isinstance(raw_kind, str) and raw_kind in _LOG_KINDS else LogKind.MUTED
        entries.append(LogEntry(text=text, kind=kind))
    return entries


def _coords(payload: object, label: str) -> list[Coord]:
    if not isinstance(payload, list):
        raise SaveCorruptedError(f"{label} must be a list of coordinates.")
    return [_coord(item, label) for item in payload]


def _coord(payload: object, label: str) -> Coord:
    if not isinstance(payload, list) or len(payload) != 2:
        raise SaveCorruptedError(f"{label} entries must be [row, col] pairs.")
    coord = Coord(row=_int(payload[0], label), col=_int(payload[1], label))
    if not in_bounds(coord):
        raise SaveCorruptedError(f"{label} has out-of-bounds coordinate {payload}.")
    return coord


def _coord_to_payload(coord: Coord) -> list[int]:
    return [coord.row, coord.col]


def _coords_to_payload(coords: Iterable[Coord]) -> list[list[int]]:
    return [_coord_to_payload(coord) for coord in sorted(coords, key=lambda c: (c.row, c.col))]


def _require_dict(payload: object, label: str) -> dict[str, object]:
    if not isinstance(payload, dict):
        raise SaveCorruptedError(f"{label} must be an object.")
    return payload


def _int(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SaveCorruptedError(f"{label} must be an integer.")
    return value


def _bool(value: object, label: str) -> bool:
    if not isinstance(value, bool):
        raise SaveCorruptedError(f"{label} must be a boolean.")
    return value


def _enum(enum_cls: type[_E], value: object, label: str) -> _E:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise SaveCorruptedError(f"{label} has unknown value {value!r}.") from exc
