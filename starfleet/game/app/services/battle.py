"""Battle flow orchestration: session lifecycle, deferred opponent moves, persistence."""

from __future__ import annotations

import logging
import random

from starfleet.game.app.scheduler import Scheduler
from starfleet.game.core.models import Coord, Phase, ShotResult, Turn, coord_label
from starfleet.game.core.rules import FireResult, GameSession, cpu_fire, new_mission, player_fire
from starfleet.game.infra.config import GameSettings
from starfleet.game.persistence.repository import MissionRepository
from starfleet.game.persistence.stats import CareerStats

logger = logging.getLogger(__name__)


class BattleService:
    """Owns the single live session and persists it after every state change."""

    def __init__(
        self,
        *,
        repository: MissionRepository,
        scheduler: Scheduler,
        rng: random.Random,
        settings: GameSettings | None = None,
    ) -> None:
        self._repository = repository
        self._scheduler = scheduler
        self._rng = rng
        self._settings = settings or GameSettings()
        self._session: GameSession | None = None
        self._pending_cpu_task: int | None = None
        self._stats = repository.load_stats()
        self.status = "Press 'New Mission' to begin."

    @property
    def session(self) -> GameSession | None:
        return self._session

    @property
    def stats(self) -> CareerStats:
        return self._stats

    @property
    def cpu_move_pending(self) -> bool:
        return self._pending_cpu_task is not None

    def new_mission(self) -> GameSession:
        """Start a fresh mission, discarding any pending opponent move."""
        self._cancel_pending_cpu_move()
        self._session = new_mission(
            self._rng, max_attempts=self._settings.placement_max_attempts
        )
        self._repository.save_session(self._session)
        self.status = "Mission started. Choose an enemy sector to fire phasers."
        return self._session

    def resume(self) -> bool:
        """Load the saved mission; return False when no usable save exists."""
        loaded = self._repository.load_session()
        if loaded is None:
            self.status = "No saved mission found. Start a new mission."
            return False
        self._cancel_pending_cpu_move()
        self._session = loaded
        if loaded.phase is Phase.GAMEOVER:
            self.status = "Loaded previous mission (completed). Start a new mission."
        else:
            self.status = "Mission resumed from saved state."
            if loaded.turn is Turn.CPU:
                self._schedule_cpu_move()
        return True

    def clear_saved_mission(self) -> None:
        self._cancel_pending_cpu_move()
        self._repository.clear_session()
        self.status = "Saved mission cleared."

    def toggle_reveal(self) -> bool:
        """Flip the enemy-reveal display flag and log it."""
        session = self._session
        if session is None:
            return False
        session.reveal_cpu = not session.reveal_cpu
        if session.reveal_cpu:
            self.status = "Long-range scan engaged: enemy signatures revealed."
            session.add_log("Scan engaged - enemy ship signatures temporarily visible.")
        else:
            self.status = "Scan offline: enemy vessels cloaked."
            session.add_log("Scan offline - enemy vessels cloaked again.")
        self._repository.save_session(session)
        return session.reveal_cpu

    def fire(self, coord: Coord) -> FireResult:
        """Resolve a player shot and schedule the opponent's reply."""
        session = self._session
        if session is None:
            return FireResult(result=ShotResult.INVALID, coord=coord)
        result = player_fire(session, coord)
        if not result.accepted:
            return result

        where = coord_label(coord)
        if result.result is ShotResult.MISS:
            self.status = f"Phasers missed in sector {where}. Enemy returning fire..."
        elif result.sunk:
            self.status = f"Direct hit in sector {where}! Enemy vessel disabled: {result.sunk}."
        else:
            self.status = f"Direct hit in sector {where}!"

        self._repository.save_session(session)
        if result.winner is not None:
            self._conclude(result.winner)
        else:
            self._schedule_cpu_move()
        return result

    def _schedule_cpu_move(self) -> None:
        session = self._session
        self._cancel_pending_cpu_move()
        self._pending_cpu_task = self._scheduler.call_later(
            self._settings.cpu_delay_seconds, lambda: self._cpu_move(session)
        )

    def _cancel_pending_cpu_move(self) -> None:
        if self._pending_cpu_task is not None:
            self._scheduler.cancel(self._pending_cpu_task)
            self._pending_cpu_task = None

    def _cpu_move(self, expected: GameSession | None) -> None:
        self._pending_cpu_task = None
        session = self._session
        if session is None or session is not expected:
            logger.debug("cpu_move_skipped reason=stale_session")
            return
        if session.phase is not Phase.BATTLE or session.turn is not Turn.CPU:
            return

        result = cpu_fire(session, self._rng)
        where = coord_label(result.coord)
        if result.result is ShotResult.MISS:
            self.status = f"Enemy missed sector {where}. Your turn, Captain."
        elif result.sunk:
            self.status = f"Red alert! Enemy disabled {result.sunk}!"
        else:
            self.status = f"Red alert! Enemy hit sector {where}!"

        self._repository.save_session(session)
        if result.winner is not None:
            self._conclude(result.winner)

    def _conclude(self, winner: Turn) -> None:
        if winner is Turn.PLAYER:
            self.status = "Victory! Enemy fleet neutralized. Mission accomplished."
        else:
            self.status = "Defeat. Starfleet task force disabled."
        self._stats = self._repository.record_win(winner)
        self._repository.clear_session()
