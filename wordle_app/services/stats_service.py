"""
Statistics Service

Records finished games into the persisted win/loss counters, both in
aggregate and per word length.
"""

import threading
import time
from dataclasses import replace
from typing import Callable, List, Optional, TypeVar
from ..models.game import StatsEvent
from ..models.stats import GameStats, WordLengthStats
from ..utils.game_logger import game_logger
from .store_service import GameStore

DEFAULT_DEDUPE_WINDOW_SECONDS = 60.0

S = TypeVar('S', bound=WordLengthStats)


def _apply_to_counters(counters: S, event: StatsEvent, now: float) -> S:
    if event.won:
        distribution = dict(counters.guess_distribution)
        distribution[event.guesses_used] = distribution.get(event.guesses_used, 0) + 1
        return replace(
            counters,
            games_played=counters.games_played + 1,
            wins=counters.wins + 1,
            current_streak=counters.current_streak + 1,
            best_streak=max(counters.best_streak, counters.current_streak + 1),
            guess_distribution=distribution,
            last_completed_at=now,
            last_answer=event.answer,
            last_result=event.result.value,
        )
    return replace(
        counters,
        games_played=counters.games_played + 1,
        current_streak=0,
        last_completed_at=now,
        last_answer=event.answer,
        last_result=event.result.value,
    )


def is_duplicate(stats: WordLengthStats, event: StatsEvent, now: float,
                 dedupe_window: float = DEFAULT_DEDUPE_WINDOW_SECONDS) -> bool:
    """True when the same answer was already recorded within the dedupe window."""
    return (
        stats.last_answer == event.answer
        and stats.last_completed_at is not None
        and now - stats.last_completed_at < dedupe_window
    )


def apply_outcome(stats: GameStats, event: StatsEvent, now: float,
                  dedupe_window: float = DEFAULT_DEDUPE_WINDOW_SECONDS) -> GameStats:
    """
    Fold one finished game into the statistics.

    Repeated events for the same answer inside the dedupe window return
    the statistics unchanged.
    """
    if is_duplicate(stats, event, now, dedupe_window):
        return stats

    by_word_length = dict(stats.by_word_length)
    bucket = by_word_length.get(event.word_length, WordLengthStats())
    by_word_length[event.word_length] = _apply_to_counters(bucket, event, now)

    return replace(_apply_to_counters(stats, event, now), by_word_length=by_word_length)


def get_win_rate(stats: WordLengthStats) -> int:
    """Win percentage rounded to a whole number."""
    if stats.games_played == 0:
        return 0
    return round(stats.wins / stats.games_played * 100)


def get_max_guess_count(stats: WordLengthStats) -> int:
    """Largest guess count that appears in the distribution, 0 when empty."""
    return max(stats.guess_distribution.keys(), default=0)


def get_available_word_lengths(stats: GameStats) -> List[int]:
    """Word lengths with at least one recorded game."""
    return sorted(length for length, bucket in stats.by_word_length.items() if bucket.games_played > 0)


def get_stats_for_word_length(stats: GameStats, word_length: int) -> WordLengthStats:
    return stats.by_word_length.get(word_length, WordLengthStats())


def stats_summary(stats: WordLengthStats) -> dict:
    """Counters plus derived values, as served to clients."""
    data = WordLengthStats.to_dict(stats)
    data.pop('by_word_length', None)
    data['win_rate'] = get_win_rate(stats)
    data['max_guess_count'] = get_max_guess_count(stats)
    return data


class StatsService:
    """
    Statistics recorder backed by a GameStore.

    Args:
        store: Where the statistics document lives
        dedupe_window: Seconds during which a repeat event for the same answer is ignored
        clock: Returns the current time in epoch seconds
    """

    def __init__(self, store: GameStore,
                 dedupe_window: float = DEFAULT_DEDUPE_WINDOW_SECONDS,
                 clock: Callable[[], float] = time.time):
        self.store = store
        self.dedupe_window = dedupe_window
        self.clock = clock
        self._lock = threading.Lock()

    def get_stats(self) -> GameStats:
        """Load the statistics, defaulting every missing field."""
        return GameStats.from_dict(self.store.load_stats())

    def record(self, event: StatsEvent, game_id: Optional[str] = None) -> GameStats:
        """Record a finished game; duplicates inside the dedupe window are ignored."""
        with self._lock:
            stats = self.get_stats()
            now = self.clock()
            updated = apply_outcome(stats, event, now, self.dedupe_window)

            if updated is stats:
                game_logger.log_game_event(
                    game_id, 'stats_duplicate_ignored',
                    answer=event.answer, word_length=event.word_length
                )
                return stats

            self.store.save_stats(updated.to_dict())
            game_logger.log_game_event(
                game_id, 'stats_recorded',
                **event.to_dict(), games_played=updated.games_played, current_streak=updated.current_streak
            )
            return updated

    def reset_stats(self) -> bool:
        with self._lock:
            deleted = self.store.delete_stats()
        game_logger.log_game_event(None, 'stats_reset', deleted=deleted)
        return deleted
