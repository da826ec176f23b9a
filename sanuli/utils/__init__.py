"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game_manager
from .helpers import get_json_body, get_user_identity
from .game_logger import game_logger

__all__ = ['require_game_manager', 'get_json_body', 'get_user_identity', 'game_logger']
