"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    CharacterCount, GameMode, GameRound, GameState, GameStatus, GuessResult,
    LetterFeedback, SharedGame, TileState, WordListScope
)
from .state import ModeRecord, PersistedState, Settings, Streak

__all__ = [
    'CharacterCount', 'GameMode', 'GameRound', 'GameState', 'GameStatus', 'GuessResult',
    'LetterFeedback', 'SharedGame', 'TileState', 'WordListScope',
    'ModeRecord', 'PersistedState', 'Settings', 'Streak'
]
