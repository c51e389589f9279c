import pytest

from wordle_app.models.game import GameStatus, StatsEvent
from wordle_app.models.stats import GameStats, WordLengthStats
from wordle_app.services.stats_service import (
    apply_outcome, get_available_word_lengths, get_max_guess_count, get_stats_for_word_length, get_win_rate,
    stats_summary
)


def win(answer, guesses_used=3, word_length=5):
    return StatsEvent(GameStatus.WON, guesses_used, answer, word_length, 6)


def loss(answer, word_length=5):
    return StatsEvent(GameStatus.LOST, 6, answer, word_length, 6)


def test_apply_win():
    stats = apply_outcome(GameStats(), win("CRANE", 3), now=100.0)
    assert stats.games_played == 1
    assert stats.wins == 1
    assert stats.current_streak == 1
    assert stats.best_streak == 1
    assert stats.guess_distribution == {3: 1}
    assert stats.last_answer == "CRANE"
    assert stats.last_result == "won"
    assert stats.last_completed_at == 100.0
    assert stats.by_word_length[5].wins == 1


def test_apply_loss_resets_streak_but_keeps_best():
    stats = GameStats()
    stats = apply_outcome(stats, win("CRANE"), now=0)
    stats = apply_outcome(stats, win("SLATE"), now=100)
    stats = apply_outcome(stats, loss("TRACE"), now=200)
    assert stats.games_played == 3
    assert stats.wins == 2
    assert stats.current_streak == 0
    assert stats.best_streak == 2
    assert stats.last_result == "lost"


def test_apply_outcome_tracks_each_word_length():
    stats = GameStats()
    stats = apply_outcome(stats, win("CRANE", 2), now=0)
    stats = apply_outcome(stats, loss("LETTER", word_length=6), now=100)
    stats = apply_outcome(stats, win("BALL", 4, word_length=4), now=200)

    assert stats.games_played == 3
    assert stats.guess_distribution == {2: 1, 4: 1}
    assert stats.by_word_length[5].guess_distribution == {2: 1}
    assert stats.by_word_length[6].wins == 0
    assert stats.by_word_length[6].games_played == 1
    assert stats.by_word_length[4].current_streak == 1
    assert get_available_word_lengths(stats) == [4, 5, 6]


def test_duplicate_event_within_window_is_ignored():
    stats = apply_outcome(GameStats(), win("CRANE", 1), now=1000.0)
    again = apply_outcome(stats, win("CRANE", 1), now=1030.0)
    assert again is stats
    assert again.wins == 1
    assert again.guess_distribution == {1: 1}


def test_same_answer_after_window_counts_again():
    stats = apply_outcome(GameStats(), win("CRANE", 1), now=1000.0)
    later = apply_outcome(stats, win("CRANE", 1), now=1061.0)
    assert later.wins == 2


def test_input_stats_are_not_mutated():
    stats = GameStats()
    apply_outcome(stats, win("CRANE"), now=0)
    assert stats == GameStats()


def test_win_rate_and_max_guess_count():
    stats = WordLengthStats(games_played=3, wins=2, guess_distribution={2: 1, 5: 1})
    assert get_win_rate(stats) == 67
    assert get_max_guess_count(stats) == 5
    assert get_win_rate(WordLengthStats()) == 0
    assert get_max_guess_count(WordLengthStats()) == 0


def test_unseen_word_length_has_empty_stats():
    assert get_stats_for_word_length(GameStats(), 7) == WordLengthStats()


def test_stats_summary_includes_derived_values():
    summary = stats_summary(WordLengthStats(games_played=2, wins=1, guess_distribution={4: 1}))
    assert summary["win_rate"] == 50
    assert summary["max_guess_count"] == 4
    assert summary["guess_distribution"] == {"4": 1}


def test_stats_round_trip_and_defaults():
    stats = apply_outcome(GameStats(), win("CRANE", 3), now=5.0)
    assert GameStats.from_dict(stats.to_dict()) == stats

    legacy = GameStats.from_dict({"games_played": 4, "wins": 3, "guess_distribution": None})
    assert legacy.games_played == 4
    assert legacy.guess_distribution == {}
    assert legacy.by_word_length == {}
    assert GameStats.from_dict(None) == GameStats()


# --- StatsService ---

def test_record_persists(stats_service, store):
    stats_service.record(win("CRANE", 1))
    assert store.load_stats()["wins"] == 1
    assert stats_service.get_stats().guess_distribution == {1: 1}


def test_record_twice_within_window_counts_once(stats_service, clock):
    stats_service.record(win("CRANE", 1))
    clock.advance(5)
    stats = stats_service.record(win("CRANE", 1))
    assert stats.wins == 1
    assert stats.by_word_length[5].guess_distribution == {1: 1}


def test_record_after_window_counts_again(stats_service, clock):
    stats_service.record(win("CRANE", 1))
    clock.advance(120)
    assert stats_service.record(win("CRANE", 1)).wins == 2


def test_reset_stats(stats_service, store):
    stats_service.record(loss("CRANE"))
    assert stats_service.reset_stats() is True
    assert store.load_stats() is None
    assert stats_service.get_stats() == GameStats()
    assert stats_service.reset_stats() is False


@pytest.mark.parametrize("stored", [
    {"games_played": 1},
    {"by_word_length": {"5": {"wins": 1, "games_played": 1}}},
    {"guess_distribution": "broken"},
])
def test_get_stats_merges_with_defaults(stats_service, store, stored):
    store.save_stats(stored)
    stats = stats_service.get_stats()
    assert isinstance(stats, GameStats)
    assert stats.best_streak == 0
