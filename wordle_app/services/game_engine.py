"""
Game Engine

Pure Wordle rules: guess evaluation, keyboard hint aggregation and the
game state transitions. Nothing in here performs I/O or keeps state; every
function takes a snapshot and returns a new one.
"""

from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional
from ..config.game_settings import ALPHABET, is_supported_word_length
from ..models.game import (
    GameState, GameStatus, GuessEvaluation, LetterEvaluation, LetterState, StatsEvent
)


class LengthMismatchError(ValueError):
    """Raised when a guess and the answer it is scored against differ in length."""


def evaluate_guess(guess: str, answer: str) -> GuessEvaluation:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Exact position matches are resolved first and consume their answer
    slot. Every other position then takes the left-most unconsumed answer
    slot holding the same letter (PRESENT), or is ABSENT when none is left.
    For each letter this marks min(count in guess, count in answer)
    positions as CORRECT or PRESENT.

    Args:
        guess: The guessed word
        answer: The hidden word

    Returns:
        GuessEvaluation for the uppercased guess

    Raises:
        LengthMismatchError: If guess and answer lengths differ
    """
    guess = guess.upper()
    answer = answer.upper()
    if len(guess) != len(answer):
        raise LengthMismatchError(
            f"Guess '{guess}' has {len(guess)} letters but the answer has {len(answer)}"
        )

    states: List[Optional[LetterState]] = [None] * len(guess)
    consumed = [False] * len(answer)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == answer[i]:
            states[i] = LetterState.CORRECT
            consumed[i] = True

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if states[i] is not None:
            continue
        for j, answer_letter in enumerate(answer):
            if not consumed[j] and answer_letter == letter:
                states[i] = LetterState.PRESENT
                consumed[j] = True
                break
        else:
            states[i] = LetterState.ABSENT

    return GuessEvaluation(
        guess=guess,
        evaluations=tuple(LetterEvaluation(letter, state) for letter, state in zip(guess, states)),
    )


def fold_evaluation(key_status: Dict[str, LetterState], evaluation: GuessEvaluation) -> Dict[str, LetterState]:
    """
    Returns a copy of the keyboard hint map updated with one guess.

    CORRECT is never downgraded. PRESENT replaces anything below it.
    ABSENT is only written for letters with no entry yet.
    """
    updated = dict(key_status)
    for letter_evaluation in evaluation.evaluations:
        letter = letter_evaluation.letter
        new_state = letter_evaluation.state
        current_state = updated.get(letter)

        if current_state is LetterState.CORRECT:
            continue
        if new_state is LetterState.CORRECT:
            updated[letter] = LetterState.CORRECT
        elif new_state is LetterState.PRESENT and current_state is not LetterState.PRESENT:
            updated[letter] = LetterState.PRESENT
        elif new_state is LetterState.ABSENT and current_state is None:
            updated[letter] = LetterState.ABSENT
    return updated


def build_key_status(evaluations: Iterable[GuessEvaluation]) -> Dict[str, LetterState]:
    """Fold a whole guess history into a fresh keyboard hint map."""
    key_status: Dict[str, LetterState] = {}
    for evaluation in evaluations:
        key_status = fold_evaluation(key_status, evaluation)
    return key_status


def create_game_state(word_length: int, max_guesses: int, answer: str) -> GameState:
    """
    Creates the initial snapshot for a new game.

    Raises:
        ValueError: If the board size is unsupported or the answer does not fit it
    """
    if not is_supported_word_length(word_length):
        raise ValueError(f"Unsupported word length: {word_length}")
    if max_guesses < 1:
        raise ValueError(f"max_guesses must be positive, got {max_guesses}")
    if len(answer) != word_length:
        raise ValueError(f"Answer '{answer}' is not {word_length} letters long")

    return GameState(answer=answer.upper(), word_length=word_length, max_guesses=max_guesses)


def add_letter(state: GameState, letter: str) -> GameState:
    """Append a letter to the current guess."""
    if state.status is not GameStatus.PLAYING:
        return state
    if len(state.current_guess) >= state.word_length:
        return state

    letter = letter.upper()
    if len(letter) != 1 or letter not in ALPHABET:
        return state

    return replace(state, current_guess=state.current_guess + letter)


def remove_letter(state: GameState) -> GameState:
    """Drop the last letter of the current guess."""
    if state.status is not GameStatus.PLAYING or not state.current_guess:
        return state
    return replace(state, current_guess=state.current_guess[:-1])


def submit_guess(state: GameState, is_valid_word: Callable[[str], bool]) -> GameState:
    """
    Score the current guess and advance the game.

    Returns the unchanged state when the game is over, the guess is not
    complete, or is_valid_word rejects it. Reporting why is left to the caller.
    """
    if state.status is not GameStatus.PLAYING:
        return state
    if len(state.current_guess) != state.word_length:
        return state
    if not is_valid_word(state.current_guess):
        return state

    guess = state.current_guess.upper()
    evaluation = evaluate_guess(guess, state.answer)
    guesses = state.guesses + (guess,)

    if guess == state.answer:
        status = GameStatus.WON
    elif len(guesses) >= state.max_guesses:
        status = GameStatus.LOST
    else:
        status = GameStatus.PLAYING

    return replace(
        state,
        guesses=guesses,
        evaluations=state.evaluations + (evaluation,),
        key_status=fold_evaluation(state.key_status, evaluation),
        current_guess="",
        status=status,
    )


def outcome_event(state: GameState) -> Optional[StatsEvent]:
    """Statistics payload for a finished game, None while still playing."""
    if state.status is GameStatus.PLAYING:
        return None
    return StatsEvent(
        result=state.status,
        guesses_used=len(state.guesses),
        answer=state.answer,
        word_length=state.word_length,
        max_guesses=state.max_guesses,
    )
