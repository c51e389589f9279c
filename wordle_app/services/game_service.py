"""
Game Service

Drives single-player games: loads and saves snapshots, applies the game
engine transitions, turns rejected transitions into player-facing messages
and reports finished games to the statistics recorder.
"""

import random
import threading
import uuid
import weakref
from dataclasses import dataclass
from typing import Optional, Tuple
from ..config.game_settings import (
    DEFAULT_MAX_GUESSES, DEFAULT_WORD_LENGTH, MAX_GUESSES, MAX_WORD_LENGTH, MIN_GUESSES, MIN_WORD_LENGTH,
    is_supported_guess_budget, is_supported_word_length
)
from ..models.game import GameState, GameStatus
from ..utils.game_logger import game_logger
from . import game_engine
from .dictionary_service import Dictionary
from .stats_service import StatsService
from .store_service import GameStore

WIN_MESSAGES = (
    "Great job! ✨",
    "Splendid! 🎉",
    "You're on fire! 💪",
    "Magnificent! 🌟",
    "Genius! 🚀",
)

LOSE_MESSAGES = (
    "Nice try! The word was {answer}. You'll get it next time! 💪",
    "So close! It was {answer}. Keep going! 🌟",
    "That's okay! The answer was {answer}. Try again! ✨",
)

NOT_ENOUGH_LETTERS = "Not enough letters"
NOT_A_VALID_WORD = "Not a valid word"
GAME_ALREADY_OVER = "Game is already over"


class GameNotFoundError(KeyError):
    """Raised when no snapshot exists for a game id."""


@dataclass(frozen=True)
class GuessResult:
    """Outcome of a submit: the resulting state and what to tell the player."""
    state: GameState
    accepted: bool
    message: str = ""


class GameService:
    """
    Single-player game session manager.

    This class handles:
    - Game creation with a random answer from the dictionary
    - Resuming a stored game or starting a fresh one
    - Letter entry, backspace and guess submission through the game engine
    - One transition at a time per game id
    - Statistics recording when a game finishes
    """

    def __init__(self,
                 store: GameStore,
                 dictionary: Dictionary,
                 stats_service: StatsService,
                 default_word_length: int = DEFAULT_WORD_LENGTH,
                 default_max_guesses: int = DEFAULT_MAX_GUESSES,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.dictionary = dictionary
        self.stats_service = stats_service
        self.default_word_length = default_word_length
        self.default_max_guesses = default_max_guesses
        self.rng = rng or random.Random()
        # Entries vanish once no caller holds the lock
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    def _load(self, game_id: str) -> GameState:
        data = self.store.load_game(game_id)
        if data is None:
            raise GameNotFoundError(game_id)
        return GameState.from_dict(data)

    def _save(self, game_id: str, state: GameState) -> None:
        self.store.save_game(game_id, state.to_dict())

    def _resolve_settings(self, word_length: Optional[int], max_guesses: Optional[int]) -> Tuple[int, int]:
        word_length = self.default_word_length if word_length is None else int(word_length)
        max_guesses = self.default_max_guesses if max_guesses is None else int(max_guesses)

        if not is_supported_word_length(word_length):
            raise ValueError(f"Word length must be between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}")
        if not is_supported_guess_budget(max_guesses):
            raise ValueError(f"Max guesses must be between {MIN_GUESSES} and {MAX_GUESSES}")
        return word_length, max_guesses

    def new_game(self,
                 word_length: Optional[int] = None,
                 max_guesses: Optional[int] = None,
                 game_id: Optional[str] = None) -> Tuple[str, GameState]:
        """
        Creates a new game, replacing any stored game with the same id.

        Args:
            word_length: Letters per word (4-8), defaults to the configured length
            max_guesses: Rows on the board (4-8), defaults to the configured budget
            game_id: Reuse this id instead of generating one

        Returns:
            Tuple of (game_id, initial GameState)

        Raises:
            ValueError: If the settings are out of range
        """
        word_length, max_guesses = self._resolve_settings(word_length, max_guesses)
        game_id = game_id or str(uuid.uuid4())

        with self._lock_for(game_id):
            answer = self.dictionary.random_word(word_length)
            state = game_engine.create_game_state(word_length, max_guesses, answer)
            self._save(game_id, state)

        game_logger.log_game_event(
            game_id, 'game_started', word_length=word_length, max_guesses=max_guesses
        )
        return game_id, state

    def start_session(self,
                      game_id: Optional[str] = None,
                      word_length: Optional[int] = None,
                      max_guesses: Optional[int] = None) -> Tuple[str, GameState, bool]:
        """
        Load-or-create: resume the stored game if it is still being played,
        otherwise start a new one.

        Returns:
            Tuple of (game_id, GameState, resumed)
        """
        if game_id:
            data = self.store.load_game(game_id)
            if data is not None:
                state = GameState.from_dict(data)
                if state.status is GameStatus.PLAYING:
                    game_logger.log_game_event(game_id, 'game_resumed', guesses=len(state.guesses))
                    return game_id, state, True
        game_id, state = self.new_game(word_length, max_guesses, game_id)
        return game_id, state, False

    def get_state(self, game_id: str) -> GameState:
        return self._load(game_id)

    def type_letter(self, game_id: str, letter: str) -> GameState:
        with self._lock_for(game_id):
            state = self._load(game_id)
            new_state = game_engine.add_letter(state, letter)
            if new_state is not state:
                self._save(game_id, new_state)
            return new_state

    def backspace(self, game_id: str) -> GameState:
        with self._lock_for(game_id):
            state = self._load(game_id)
            new_state = game_engine.remove_letter(state)
            if new_state is not state:
                self._save(game_id, new_state)
            return new_state

    def submit(self, game_id: str, guess: Optional[str] = None) -> GuessResult:
        """
        Submits the current guess, optionally typing a whole word first.

        Args:
            game_id: Unique game identifier
            guess: When given, replaces the current guess before submitting

        Returns:
            GuessResult with the resulting state and the message for the player
        """
        with self._lock_for(game_id):
            stored = self._load(game_id)
            if stored.is_over:
                return GuessResult(stored, False, GAME_ALREADY_OVER)

            state = stored

            if guess is not None:
                staged = state
                while staged.current_guess:
                    staged = game_engine.remove_letter(staged)
                for letter in guess.strip():
                    staged = game_engine.add_letter(staged, letter)
                if staged.current_guess != guess.strip().upper():
                    # Too long or not made of letters; keep the stored guess untouched
                    return GuessResult(stored, False, NOT_A_VALID_WORD)
                state = staged

            if len(state.current_guess) != state.word_length:
                if state is not stored:
                    self._save(game_id, state)
                return GuessResult(state, False, NOT_ENOUGH_LETTERS)

            new_state = game_engine.submit_guess(
                state, lambda word: self.dictionary.is_valid_word(word, state.word_length)
            )
            self._save(game_id, new_state)

            if new_state is state:
                return GuessResult(state, False, NOT_A_VALID_WORD)

            message = ""
            event = game_engine.outcome_event(new_state)
            if event is not None:
                self.stats_service.record(event, game_id)
                if event.won:
                    message = self.rng.choice(WIN_MESSAGES)
                    game_logger.log_game_event(
                        game_id, 'game_won', guesses_used=event.guesses_used, answer=event.answer
                    )
                else:
                    message = self.rng.choice(LOSE_MESSAGES).format(answer=event.answer)
                    game_logger.log_game_event(
                        game_id, 'game_lost', guesses_used=event.guesses_used, answer=event.answer
                    )

            return GuessResult(new_state, True, message)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a stored game (manual reset).

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock_for(game_id):
            deleted = self.store.delete_game(game_id)
        return deleted


# Global service instances
_game_service = None
_stats_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def get_stats_service() -> Optional[StatsService]:
    """Get the global statistics service instance."""
    return _stats_service


def initialize_game_service(store: GameStore, dictionary: Dictionary, config) -> GameService:
    """Initialize the global game and statistics service instances."""
    global _game_service, _stats_service
    _stats_service = StatsService(store, dedupe_window=config.STATS_DEDUPE_WINDOW_SECONDS)
    _game_service = GameService(
        store, dictionary, _stats_service,
        default_word_length=config.DEFAULT_WORD_LENGTH,
        default_max_guesses=config.DEFAULT_MAX_GUESSES
    )
    return _game_service
