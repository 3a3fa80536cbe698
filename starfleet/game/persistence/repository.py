"""Save-slot and career-stats persistence over a key-value store."""

from __future__ import annotations

import logging

import orjson

from starfleet.game.core.models import Turn
from starfleet.game.core.rules import GameSession
from starfleet.game.persistence.codec import SaveCorruptedError, decode_session, encode_session
from starfleet.game.persistence.stats import CareerStats, payload_to_stats, stats_to_payload
from starfleet.game.persistence.store import KeyValueStore

logger = logging.getLogger(__name__)

SAVE_KEY = "st_battleship_save_v1"
STATS_KEY = "st_battleship_stats_v1"


class MissionRepository:
    """Single mission save slot plus independent career counters."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save_session(self, session: GameSession) -> None:
        """Persist the full session, replacing any previous save."""
        self._store.set(SAVE_KEY, encode_session(session))

    def load_session(self) -> GameSession | None:
        """Load the saved session; corrupted data is discarded and reported as absent."""
        raw = self._store.get(SAVE_KEY)
        if not raw:
            return None
        try:
            session = decode_session(raw)
        except SaveCorruptedError as exc:
            logger.warning("save_discarded reason=%s", exc)
            self._store.remove(SAVE_KEY)
            return None
        logger.info("save_loaded phase=%s turn=%s", session.phase, session.turn)
        return session

    def clear_session(self) -> None:
        self._store.remove(SAVE_KEY)

    def load_stats(self) -> CareerStats:
        raw = self._store.get(STATS_KEY)
        if not raw:
            return CareerStats()
        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("stats_unreadable key=%s", STATS_KEY)
            return CareerStats()
        return payload_to_stats(payload)

    def save_stats(self, stats: CareerStats) -> None:
        self._store.set(STATS_KEY, orjson.dumps(stats_to_payload(stats)).decode("utf-8"))

    def record_win(self, winner: Turn) -> CareerStats:
        """Increment the winner's career counter and persist it."""
        stats = self.load_stats().with_win(winner)
        self.save_stats(stats)
        logger.info("stats_updated fed_wins=%d enemy_wins=%d", stats.fed_wins, stats.enemy_wins)
        return stats
