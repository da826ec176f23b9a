"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import LetterKnowledge, evaluate
from .word_corpus import WordCorpus
from .daily import DailyWordSelector, index_for_date
from .game_service import GameService
from .share_codec import ShareCodec
from .state_store import (
    JsonFileStateStore, MemoryStateStore, MongoStateStore, StateStore, create_state_store
)
from .game_manager import GameManager, get_game_manager, initialize_game_manager

__all__ = [
    'LetterKnowledge', 'evaluate',
    'WordCorpus',
    'DailyWordSelector', 'index_for_date',
    'GameService',
    'ShareCodec',
    'JsonFileStateStore', 'MemoryStateStore', 'MongoStateStore', 'StateStore', 'create_state_store',
    'GameManager', 'get_game_manager', 'initialize_game_manager'
]
