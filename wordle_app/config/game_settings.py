"""
Game Configuration Constants Module

This module defines the game rules: allowed word lengths, guess budgets,
the bundled word list files and the built-in fallback words used when no
dictionary can be loaded.
"""

import os
from typing import Dict, List, Final

# Board limits (both sliders in the settings panel run from 4 to 8)
MIN_WORD_LENGTH: Final[int] = 4
MAX_WORD_LENGTH: Final[int] = 8
MIN_GUESSES: Final[int] = 4
MAX_GUESSES: Final[int] = 8

DEFAULT_WORD_LENGTH: Final[int] = 5
DEFAULT_MAX_GUESSES: Final[int] = 6

WORD_LENGTHS: Final[List[int]] = list(range(MIN_WORD_LENGTH, MAX_WORD_LENGTH + 1))

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Emergency word lists, only used when the dictionary has nothing for a length
FALLBACK_VALID: Final[Dict[int, List[str]]] = {
    4: ['ABLE', 'ACID', 'AGED', 'ALSO', 'AREA', 'ARMY', 'AWAY', 'BABY', 'BACK', 'BALL'],
    5: ['ABOUT', 'ABOVE', 'ABUSE', 'ACTOR', 'ACUTE', 'ADMIT', 'ADOPT', 'ADULT', 'AFTER', 'AGAIN'],
    6: ['ABACUS', 'ABDUCT', 'ABJECT', 'ABLAZE', 'ABOUND', 'ABROAD', 'ABSORB', 'ABSURD', 'ACCEPT', 'ACCORD'],
    7: ['ABILITY', 'ABSENCE', 'ACADEMY', 'ACCOUNT', 'ACHIEVE', 'ACQUIRE', 'ADDRESS', 'ADVANCE', 'ADVERSE', 'ADVISED'],
    8: ['ABANDONS', 'ABERRANT', 'ABNORMAL', 'ABORTIVE', 'ABRASIVE', 'ABRIDGED', 'ABSOLUTE', 'ABSTRACT', 'ACADEMIC', 'ACCENTED'],
}

FALLBACK_ANSWERS: Final[Dict[int, List[str]]] = {
    4: ['ABLE', 'ACID', 'AGED', 'ALSO', 'AREA'],
    5: ['ABOUT', 'ABOVE', 'ABUSE', 'ACTOR', 'ACUTE'],
    6: ['ABACUS', 'ABDUCT', 'ABJECT', 'ABLAZE', 'ABOUND'],
    7: ['ABILITY', 'ABSENCE', 'ACADEMY', 'ACCOUNT', 'ACHIEVE'],
    8: ['ABANDONS', 'ABERRANT', 'ABNORMAL', 'ABORTIVE', 'ABRASIVE'],
}

_CONFIG_DIR: Final[str] = os.path.dirname(os.path.abspath(__file__))

# Bundled plain-text word lists, one word per line
VALID_WORDS_FILE: Final[str] = os.path.join(_CONFIG_DIR, 'valid-words.txt')
ANSWER_WORDS_FILE: Final[str] = os.path.join(_CONFIG_DIR, 'answer-words.txt')


def is_supported_word_length(word_length: int) -> bool:
    """Return True when a board of this width can be played."""
    return MIN_WORD_LENGTH <= word_length <= MAX_WORD_LENGTH


def is_supported_guess_budget(max_guesses: int) -> bool:
    """Return True when this number of rows can be played."""
    return MIN_GUESSES <= max_guesses <= MAX_GUESSES


def get_word_statistics(words_by_length: Dict[int, List[str]]) -> dict:
    """
    Analyzes a word database and returns statistical information.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words across all lengths
            - words_per_length: Number of words for each length
            - avg_vowel_count: Average vowels per word
            - most_common_letters: Five most frequent letters
    """
    all_words = [word for word_list in words_by_length.values() for word in word_list]
    if not all_words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in all_words)

    letter_frequency = {}
    for word in all_words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(all_words),
        "words_per_length": {length: len(word_list) for length, word_list in sorted(words_by_length.items())},
        "avg_vowel_count": round(total_vowels / len(all_words), 2),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
