"""
Dictionary Service

Word source for the game: checks guesses against the valid-word lists and
draws answers. Every answer is also a valid guess, so a word returned by
random_word() always passes is_valid_word().
"""

import random
import re
from typing import Dict, Iterable, List, Optional, Set
from ..config.game_settings import (
    ALPHABET, ANSWER_WORDS_FILE, FALLBACK_ANSWERS, FALLBACK_VALID, VALID_WORDS_FILE, WORD_LENGTHS,
    get_word_statistics, is_supported_word_length
)
from ..utils.game_logger import game_logger

_LINE_BREAK = re.compile(r'\r?\n|\r')


class DictionaryError(RuntimeError):
    """Raised when no words are available for a requested length."""


def parse_words_text(text: str) -> Dict[int, Set[str]]:
    """
    Parse a one-word-per-line file into words grouped by length.

    Handles CRLF, LF and CR line endings. Lines are trimmed and uppercased;
    anything that is not 4-8 letters A-Z is skipped.
    """
    words_by_length: Dict[int, Set[str]] = {length: set() for length in WORD_LENGTHS}
    for line in _LINE_BREAK.split(text):
        word = line.strip().upper()
        if is_supported_word_length(len(word)) and all(char in ALPHABET for char in word):
            words_by_length[len(word)].add(word)
    return words_by_length


class Dictionary:
    """
    In-memory word lists keyed by word length.

    Args:
        valid_by_length: Words accepted as guesses
        answers_by_length: Words that may be drawn as answers
        rng: Source of randomness for random_word (defaults to a fresh random.Random)
    """

    def __init__(self,
                 valid_by_length: Dict[int, Iterable[str]],
                 answers_by_length: Optional[Dict[int, Iterable[str]]] = None,
                 rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.valid_by_length: Dict[int, Set[str]] = {}
        self.answers_by_length: Dict[int, List[str]] = {}

        answers_by_length = answers_by_length or {}
        for length in WORD_LENGTHS:
            valid = {word.upper() for word in valid_by_length.get(length, ())}
            answers = sorted({word.upper() for word in answers_by_length.get(length, ())})

            if not answers:
                if valid:
                    game_logger.logger.warning(
                        f"No answer words found for length {length}, using valid words as fallback"
                    )
                    answers = sorted(valid)
                else:
                    game_logger.logger.warning(
                        f"No words found for length {length}, using hardcoded fallback"
                    )
                    answers = list(FALLBACK_ANSWERS[length])
                    valid = set(FALLBACK_VALID[length])

            # Answers must always be accepted as guesses
            valid.update(answers)
            self.valid_by_length[length] = valid
            self.answers_by_length[length] = answers

    def is_valid_word(self, word: str, length: int) -> bool:
        """Check if a word is valid for the given length."""
        words = self.valid_by_length.get(length)
        if not words or not word or len(word) != length:
            return False
        return word.upper() in words

    def random_word(self, length: int) -> str:
        """
        Gets a random answer of the specified length.

        Raises:
            DictionaryError: If no answers exist for that length
        """
        answers = self.answers_by_length.get(length)
        if not answers:
            raise DictionaryError(f"No words available for length {length}")
        return self.rng.choice(answers)

    def word_counts(self) -> Dict[int, Dict[str, int]]:
        """Number of valid and answer words per length."""
        return {
            length: {
                'valid': len(self.valid_by_length[length]),
                'answers': len(self.answers_by_length[length])
            }
            for length in WORD_LENGTHS
        }

    def word_statistics(self) -> dict:
        """Letter and size statistics for the accepted guesses."""
        return get_word_statistics({length: sorted(words) for length, words in self.valid_by_length.items()})


def _read_words_file(path: str) -> Dict[int, Set[str]]:
    with open(path, 'r', encoding='utf-8') as f:
        return parse_words_text(f.read())


def load_dictionary(valid_words_file: str = VALID_WORDS_FILE,
                    answer_words_file: str = ANSWER_WORDS_FILE,
                    rng: Optional[random.Random] = None) -> Dictionary:
    """
    Loads the plain-text word lists and builds a Dictionary.

    Both files default to the lists bundled with the package. If either
    cannot be read, the error is logged and the hardcoded fallback lists
    are used instead.
    """
    try:
        valid = _read_words_file(valid_words_file)
        answers = _read_words_file(answer_words_file)
    except OSError as e:
        game_logger.logger.error(f"Error loading word dictionaries: {e}")
        valid, answers = FALLBACK_VALID, FALLBACK_ANSWERS

    dictionary = Dictionary(valid, answers, rng=rng)
    game_logger.logger.info(f"Dictionary loaded: {dictionary.word_counts()}")
    return dictionary
