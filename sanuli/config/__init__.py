"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word-list loading
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALPHABET, DAILY_EPOCH, DEFAULT_MAX_GUESSES, DEFAULT_WORD_LENGTH, QUAD_BOARD_COUNT,
    QUAD_MAX_GUESSES, load_word_list, validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ALPHABET', 'DAILY_EPOCH', 'DEFAULT_MAX_GUESSES', 'DEFAULT_WORD_LENGTH',
    'QUAD_BOARD_COUNT', 'QUAD_MAX_GUESSES',
    'load_word_list', 'validate_word_list_integrity', 'get_word_statistics'
]
