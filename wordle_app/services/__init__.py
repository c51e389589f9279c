"""
Services Package

Contains the game engine and all business logic and service classes.
"""

from .dictionary_service import Dictionary, DictionaryError, load_dictionary
from .game_engine import LengthMismatchError
from .game_service import (
    GameNotFoundError, GameService, GuessResult, get_game_service, get_stats_service, initialize_game_service
)
from .stats_service import StatsService
from .store_service import GameStore, JsonFileStore, MemoryStore, MongoStore, create_store

__all__ = [
    'Dictionary', 'DictionaryError', 'load_dictionary',
    'LengthMismatchError',
    'GameNotFoundError', 'GameService', 'GuessResult', 'get_game_service', 'get_stats_service',
    'initialize_game_service',
    'StatsService',
    'GameStore', 'JsonFileStore', 'MemoryStore', 'MongoStore', 'create_store'
]
