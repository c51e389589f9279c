"""
Statistics Data Models

Contains the win/loss counters kept per word length and in aggregate.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WordLengthStats:
    """Counters for one word length (also used for the aggregate view)."""
    games_played: int = 0
    wins: int = 0
    current_streak: int = 0
    best_streak: int = 0
    guess_distribution: Dict[int, int] = field(default_factory=dict)  # guess count -> wins
    last_completed_at: Optional[float] = None  # epoch seconds
    last_answer: Optional[str] = None
    last_result: Optional[str] = None  # "won" or "lost"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # JSON object keys are strings
        data["guess_distribution"] = {str(count): wins for count, wins in self.guess_distribution.items()}
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WordLengthStats":
        """Merge stored counters over the defaults, tolerating missing or malformed fields."""
        data = data or {}
        distribution = data.get("guess_distribution")
        if not isinstance(distribution, dict):
            distribution = {}
        return cls(
            games_played=int(data.get("games_played") or 0),
            wins=int(data.get("wins") or 0),
            current_streak=int(data.get("current_streak") or 0),
            best_streak=int(data.get("best_streak") or 0),
            guess_distribution={int(count): int(wins) for count, wins in distribution.items()},
            last_completed_at=data.get("last_completed_at"),
            last_answer=data.get("last_answer"),
            last_result=data.get("last_result"),
        )


@dataclass(frozen=True)
class GameStats(WordLengthStats):
    """Aggregate counters across all word lengths plus one bucket per length."""
    by_word_length: Dict[int, WordLengthStats] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = WordLengthStats.to_dict(self)
        data["by_word_length"] = {
            str(length): bucket.to_dict() for length, bucket in self.by_word_length.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameStats":
        data = data or {}
        aggregate = WordLengthStats.from_dict(data)
        by_word_length = data.get("by_word_length")
        if not isinstance(by_word_length, dict):
            by_word_length = {}
        return cls(
            **{name: getattr(aggregate, name) for name in aggregate.__dataclass_fields__},
            by_word_length={
                int(length): WordLengthStats.from_dict(bucket) for length, bucket in by_word_length.items()
            },
        )
