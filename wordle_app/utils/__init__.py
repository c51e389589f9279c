"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import with_game_service
from .helpers import get_json_body, optional_int
from .game_logger import game_logger

__all__ = ['with_game_service', 'get_json_body', 'optional_int', 'game_logger']
