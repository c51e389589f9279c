"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv
from .game_settings import ANSWER_WORDS_FILE as BUNDLED_ANSWER_WORDS, VALID_WORDS_FILE as BUNDLED_VALID_WORDS

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Storage Settings
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'json')  # "memory", "json" or "mongo"
    DATA_DIR = os.getenv('DATA_DIR', 'data')
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB = os.getenv('MONGO_DB', 'wordle_game')

    # Game Settings
    DEFAULT_WORD_LENGTH = int(os.getenv('DEFAULT_WORD_LENGTH', 5))
    DEFAULT_MAX_GUESSES = int(os.getenv('DEFAULT_MAX_GUESSES', 6))
    STATS_DEDUPE_WINDOW_SECONDS = float(os.getenv('STATS_DEDUPE_WINDOW_SECONDS', 60))

    # Dictionary Settings (plain-text word lists, one word per line)
    VALID_WORDS_FILE = os.getenv('VALID_WORDS_FILE', BUNDLED_VALID_WORDS)
    ANSWER_WORDS_FILE = os.getenv('ANSWER_WORDS_FILE', BUNDLED_ANSWER_WORDS)

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    STORE_BACKEND = 'memory'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
