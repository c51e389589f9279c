"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple
from ..config.game_settings import DEFAULT_MAX_GUESSES


class LetterState(Enum):
    """Letter evaluation status, ordered Correct > Present > Absent for the keyboard."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def rank(self) -> int:
        return _LETTER_STATE_RANK[self]


_LETTER_STATE_RANK = {
    LetterState.ABSENT: 0,
    LetterState.PRESENT: 1,
    LetterState.CORRECT: 2,
}


class GameStatus(Enum):
    """Game progress. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class LetterEvaluation:
    letter: str
    state: LetterState

    def to_dict(self) -> Dict[str, str]:
        return {"letter": self.letter, "state": self.state.value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LetterEvaluation":
        return cls(letter=data["letter"].upper(), state=LetterState(data["state"]))


@dataclass(frozen=True)
class GuessEvaluation:
    """Verdict for one submitted guess, one LetterEvaluation per position."""
    guess: str
    evaluations: Tuple[LetterEvaluation, ...]

    def __post_init__(self):
        if len(self.evaluations) != len(self.guess):
            raise ValueError(
                f"Evaluation has {len(self.evaluations)} letters for a {len(self.guess)}-letter guess"
            )

    @property
    def states(self) -> List[LetterState]:
        return [evaluation.state for evaluation in self.evaluations]

    @property
    def is_solved(self) -> bool:
        return all(evaluation.state is LetterState.CORRECT for evaluation in self.evaluations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guess": self.guess,
            "evaluations": [evaluation.to_dict() for evaluation in self.evaluations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuessEvaluation":
        return cls(
            guess=data["guess"].upper(),
            evaluations=tuple(LetterEvaluation.from_dict(item) for item in data["evaluations"]),
        )


@dataclass(frozen=True)
class StatsEvent:
    """Outcome of a finished game, consumed by the statistics recorder."""
    result: GameStatus
    guesses_used: int
    answer: str
    word_length: int
    max_guesses: int

    @property
    def won(self) -> bool:
        return self.result is GameStatus.WON

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.value,
            "guesses_used": self.guesses_used,
            "answer": self.answer,
            "word_length": self.word_length,
            "max_guesses": self.max_guesses,
        }


@dataclass(frozen=True)
class GameState:
    """
    Authoritative snapshot of one game.

    Snapshots are never mutated; every transition in game_engine returns a
    new GameState (or the very same one when the transition is rejected).
    """
    answer: str
    word_length: int
    max_guesses: int
    guesses: Tuple[str, ...] = ()
    evaluations: Tuple[GuessEvaluation, ...] = ()
    current_guess: str = ""
    status: GameStatus = GameStatus.PLAYING
    key_status: Dict[str, LetterState] = field(default_factory=dict)

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    @property
    def guesses_remaining(self) -> int:
        return self.max_guesses - len(self.guesses)

    def to_dict(self) -> Dict[str, Any]:
        """Full snapshot for persistence, answer included."""
        return {
            "answer": self.answer,
            "word_length": self.word_length,
            "max_guesses": self.max_guesses,
            "guesses": list(self.guesses),
            "evaluations": [evaluation.to_dict() for evaluation in self.evaluations],
            "current_guess": self.current_guess,
            "status": self.status.value,
            "key_status": {letter: state.value for letter, state in self.key_status.items()},
        }

    def public_dict(self) -> Dict[str, Any]:
        """Snapshot for clients; the answer is only revealed once the game is over."""
        data = self.to_dict()
        data["answer"] = self.answer if self.is_over else None
        data["guesses_remaining"] = self.guesses_remaining
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a snapshot written by to_dict().

        Missing fields from older snapshots fall back to defaults. Guesses
        without evaluations are scored again against the answer, and a
        missing key status map is rebuilt from the evaluations.
        """
        # Imported lazily; game_engine imports this module
        from ..services.game_engine import build_key_status, evaluate_guess

        answer = str(data["answer"]).upper()
        evaluations = tuple(GuessEvaluation.from_dict(item) for item in data.get("evaluations") or [])
        guesses = tuple(str(guess).upper() for guess in data.get("guesses") or [])
        if not guesses and evaluations:
            guesses = tuple(evaluation.guess for evaluation in evaluations)
        elif guesses and not evaluations:
            evaluations = tuple(evaluate_guess(guess, answer) for guess in guesses)

        key_status_data = data.get("key_status")
        if key_status_data is None:
            key_status = build_key_status(evaluations)
        else:
            key_status = {letter.upper(): LetterState(state) for letter, state in key_status_data.items()}

        return cls(
            answer=answer,
            word_length=int(data.get("word_length") or len(answer)),
            max_guesses=int(data.get("max_guesses") or DEFAULT_MAX_GUESSES),
            guesses=guesses,
            evaluations=evaluations,
            current_guess=str(data.get("current_guess") or "").upper(),
            status=GameStatus(data.get("status") or GameStatus.PLAYING.value),
            key_status=key_status,
        )
