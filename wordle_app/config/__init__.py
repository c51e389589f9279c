"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    MIN_WORD_LENGTH, MAX_WORD_LENGTH, MIN_GUESSES, MAX_GUESSES,
    DEFAULT_WORD_LENGTH, DEFAULT_MAX_GUESSES,
    VALID_WORDS_FILE, ANSWER_WORDS_FILE, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'MIN_WORD_LENGTH', 'MAX_WORD_LENGTH', 'MIN_GUESSES', 'MAX_GUESSES',
    'DEFAULT_WORD_LENGTH', 'DEFAULT_MAX_GUESSES',
    'VALID_WORDS_FILE', 'ANSWER_WORDS_FILE', 'get_word_statistics'
]
