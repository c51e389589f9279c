"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameState, GameStatus, GuessEvaluation, LetterEvaluation, LetterState, StatsEvent
from .stats import GameStats, WordLengthStats

__all__ = [
    'GameState', 'GameStatus', 'GuessEvaluation', 'LetterEvaluation', 'LetterState', 'StatsEvent',
    'GameStats', 'WordLengthStats'
]
