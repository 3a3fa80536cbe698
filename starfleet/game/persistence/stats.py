"""Career win/loss counters and their payload schema."""

from __future__ import annotations

from dataclasses import dataclass

from starfleet.game.core.models import Turn


@dataclass(frozen=True, slots=True)
class CareerStats:
    """Cumulative wins across all completed missions."""

    fed_wins: int = 0
    enemy_wins: int = 0

    def with_win(self, winner: Turn) -> CareerStats:
        """Return stats with the winner's counter incremented by one."""
        if winner is Turn.PLAYER:
            return CareerStats(fed_wins=self.fed_wins + 1, enemy_wins=self.enemy_wins)
        return CareerStats(fed_wins=self.fed_wins, enemy_wins=self.enemy_wins + 1)

    def record_line(self) -> str:
        return f"Career record - Federation wins: {self.fed_wins} | Enemy wins: {self.enemy_wins}"


def stats_to_payload(stats: CareerStats) -> dict[str, object]:
    return {"fedWins": stats.fed_wins, "enemyWins": stats.enemy_wins}


def payload_to_stats(payload: object) -> CareerStats:
    """Convert a loaded payload to stats; anything unusable counts as zero."""
    if not isinstance(payload, dict):
        return CareerStats()
    return CareerStats(
        fed_wins=_counter(payload.get("fedWins")),
        enemy_wins=_counter(payload.get("enemyWins")),
    )


def _counter(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return 0
    return value
