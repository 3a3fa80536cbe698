from starfleet.game.core.models import Turn
from starfleet.game.persistence.stats import CareerStats, payload_to_stats, stats_to_payload


def test_payload_round_trip() -> None:
    stats = CareerStats(fed_wins=3, enemy_wins=7)
    assert payload_to_stats(stats_to_payload(stats)) == stats


def test_non_numeric_and_missing_fields_default_to_zero() -> None:
    assert payload_to_stats({}) == CareerStats()
    assert payload_to_stats([]) == CareerStats()
    assert payload_to_stats({"fedWins": "abc", "enemyWins": None}) == CareerStats()
    assert payload_to_stats({"fedWins": True, "enemyWins": -2}) == CareerStats()
    assert payload_to_stats({"fedWins": "4", "enemyWins": 2.0}) == CareerStats(4, 2)


def test_with_win_increments_exactly_one_counter() -> None:
    stats = CareerStats()
    assert stats.with_win(Turn.PLAYER) == CareerStats(1, 0)
    assert stats.with_win(Turn.CPU) == CareerStats(0, 1)
    assert stats.record_line() == "Career record - Federation wins: 0 | Enemy wins: 0"
