"""Mission session state and turn resolution logic."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from starfleet.game.ai.hunt_target import HuntTargetAI
from starfleet.game.ai.state import AIState
from starfleet.game.core.board import Side
from starfleet.game.core.fleet import DEFAULT_MAX_ATTEMPTS, random_side
from starfleet.game.core.models import (
    DEFAULT_FLEET,
    Coord,
    LogEntry,
    LogKind,
    Phase,
    ShipSpec,
    ShotOutcome,
    ShotResult,
    Turn,
    coord_label,
)
from starfleet.game.core.shot_resolution import apply_shot

logger = logging.getLogger(__name__)

FEDERATION = "Federation"
ENEMY = "Enemy"


@dataclass(slots=True)
class GameSession:
    """Runtime mission state."""

    player: Side
    cpu: Side
    phase: Phase = Phase.BATTLE
    turn: Turn = Turn.PLAYER
    reveal_cpu: bool = False
    log: list[LogEntry] = field(default_factory=list)
    ai: AIState = field(default_factory=AIState)

    @property
    def winner(self) -> Turn | None:
        """Return the winning party once the mission is over."""
        if self.phase is not Phase.GAMEOVER:
            return None
        return self.turn

    def add_log(self, text: str, kind: LogKind = LogKind.MUTED) -> None:
        self.log.append(LogEntry(text=text, kind=kind))


@dataclass(frozen=True, slots=True)
class FireResult:
    """Session-level outcome of a single shot."""

    result: ShotResult
    coord: Coord
    sunk: str | None = None
    winner: Turn | None = None

    @property
    def accepted(self) -> bool:
        return self.result not in (ShotResult.INVALID, ShotResult.REPEAT)


def new_mission(
    rng: random.Random,
    fleet: Sequence[ShipSpec] = DEFAULT_FLEET,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> GameSession:
    """Create a fresh mission with both fleets placed at random."""
    session = GameSession(
        player=random_side(rng, fleet, max_attempts=max_attempts),
        cpu=random_side(rng, fleet, max_attempts=max_attempts),
    )
    session.add_log("Stardate 2402.5 - Mission initialized. Enemy vessels detected.")
    logger.info("mission_started ships=%d", len(fleet))
    return session


def player_fire(session: GameSession, coord: Coord) -> FireResult:
    """Resolve a player shot at the enemy side."""
    rejected = _reject(session, session.cpu, coord, Turn.PLAYER)
    if rejected is not None:
        return rejected

    outcome = apply_shot(session.cpu, coord)
    where = coord_label(coord)
    if outcome.hit:
        session.add_log(f"You fired on {where}: HIT.")
        if outcome.sunk:
            session.add_log(f"Enemy vessel disabled: {outcome.sunk}.")
    else:
        session.add_log(f"You fired on {where}: MISS.")
    return _finish_turn(session, session.cpu, coord, outcome, Turn.PLAYER)


def cpu_fire(session: GameSession, rng: random.Random) -> FireResult:
    """Let the hunt/target AI pick a cell and resolve its shot at the player side."""
    if session.phase is not Phase.BATTLE or session.turn is not Turn.CPU:
        logger.debug("cpu_fire_rejected phase=%s turn=%s", session.phase, session.turn)
        return FireResult(result=ShotResult.INVALID, coord=Coord(-1, -1))

    ai = HuntTargetAI(session.ai, rng)
    choice = ai.choose_shot(session.player)
    outcome = apply_shot(session.player, choice.coord)
    where = coord_label(choice.coord)
    if outcome.hit:
        session.add_log(f"Enemy fired on {where}: HIT.")
        if outcome.sunk:
            session.add_log(f"We lost: {outcome.sunk}.")
    else:
        session.add_log(f"Enemy fired on {where}: MISS.")
    ai.notify_result(choice, outcome, session.player)
    return _finish_turn(session, session.player, choice.coord, outcome, Turn.CPU)


def accuracy_percent(shots: int, hits: int) -> int:
    """Return hit accuracy rounded half-up to a whole percent; 0 when nothing was fired."""
    if shots <= 0:
        return 0
    return (200 * hits + shots) // (2 * shots)


def _reject(session: GameSession, target: Side, coord: Coord, shooter: Turn) -> FireResult | None:
    if session.phase is not Phase.BATTLE or session.turn is not shooter:
        logger.debug("shot_rejected reason=turn shooter=%s coord=%s", shooter, coord)
        return FireResult(result=ShotResult.INVALID, coord=coord)
    if not target.in_bounds(coord):
        logger.debug("shot_rejected reason=bounds coord=%s", coord)
        return FireResult(result=ShotResult.INVALID, coord=coord)
    if target.was_shot(coord):
        logger.debug("shot_rejected reason=repeat coord=%s", coord)
        return FireResult(result=ShotResult.REPEAT, coord=coord)
    return None


def _finish_turn(
    session: GameSession, target: Side, coord: Coord, outcome: ShotOutcome, shooter: Turn
) -> FireResult:
    if not outcome.hit:
        result = ShotResult.MISS
    elif outcome.sunk:
        result = ShotResult.SUNK
    else:
        result = ShotResult.HIT
    logger.info("shot shooter=%s coord=%s result=%s", shooter, coord_label(coord), result)

    # Victory or defeat can only follow a hit.
    if outcome.hit and target.all_ships_sunk():
        session.phase = Phase.GAMEOVER
        session.turn = shooter
        if shooter is Turn.PLAYER:
            session.add_log("Enemy fleet neutralized. Mission accomplished.", LogKind.SINK)
            _append_summary(session, FEDERATION)
        else:
            session.add_log("Starfleet task force disabled. Mission failed.", LogKind.SINK)
            _append_summary(session, ENEMY)
        logger.info("mission_over winner=%s", shooter)
        return FireResult(result=result, coord=coord, sunk=outcome.sunk, winner=shooter)

    session.turn = Turn.CPU if shooter is Turn.PLAYER else Turn.PLAYER
    return FireResult(result=result, coord=coord, sunk=outcome.sunk)


def _append_summary(session: GameSession, winner: str) -> None:
    fed_shots = len(session.cpu.shots)
    enemy_shots = len(session.player.shots)
    fed_hits = session.cpu.hit_count()
    enemy_hits = session.player.hit_count()
    session.add_log("--- Mission Summary ---")
    session.add_log(f"Winner: {winner}")
    session.add_log(
        f"Federation shots: {fed_shots} | hits: {fed_hits} | "
        f"accuracy: {accuracy_percent(fed_shots, fed_hits)}%"
    )
    session.add_log(
        f"Enemy shots: {enemy_shots} | hits: {enemy_hits} | "
        f"accuracy: {accuracy_percent(enemy_shots, enemy_hits)}%"
    )
