"""
Word Corpus

Read-only access to the word lists: the full list of accepted guesses,
the common-word subset, the ordered daily lists and the profanity list.
"""

import os
import random
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..config.game_settings import (
    COMMON_WORDS_FILE, DAILY_WORDS_FILES, FULL_WORDS_FILE, PROFANITIES_FILE, load_word_list
)
from ..errors import OutOfRange
from ..models.game import WordListScope


class WordCorpus:
    """
    Holds every word list the engine needs. Never changes after construction.
    """

    def __init__(self,
                 full_words: Iterable[str],
                 common_words: Iterable[str],
                 daily_words: Optional[Dict[int, Sequence[str]]] = None,
                 profanities: Iterable[str] = ()):
        self._full: Set[str] = {word.upper() for word in full_words}
        self._common: Set[str] = {word.upper() for word in common_words}
        self._profanities: Set[str] = {word.upper() for word in profanities}
        self._daily: Dict[int, List[str]] = {
            length: [word.upper() for word in words]
            for length, words in (daily_words or {}).items()
        }

        stray = sorted(self._common - self._full)
        if stray:
            raise ValueError(f"Common words missing from the full word list: {stray[:10]}")

        # Sorted pools keep random picks reproducible with a seeded generator
        self._pools: Dict[tuple, List[str]] = {}
        for scope, words in ((WordListScope.FULL, self._full), (WordListScope.COMMON, self._common)):
            for word in words:
                self._pools.setdefault((scope, len(word)), []).append(word)
        for pool in self._pools.values():
            pool.sort()

    @classmethod
    def from_directory(cls, directory: str) -> "WordCorpus":
        """Load the flat word-list files from a directory."""
        daily_words = {
            length: load_word_list(os.path.join(directory, file_name), optional=True)
            for length, file_name in DAILY_WORDS_FILES.items()
        }
        return cls(
            full_words=load_word_list(os.path.join(directory, FULL_WORDS_FILE)),
            common_words=load_word_list(os.path.join(directory, COMMON_WORDS_FILE)),
            daily_words={length: words for length, words in daily_words.items() if words},
            profanities=load_word_list(os.path.join(directory, PROFANITIES_FILE), optional=True),
        )

    def is_valid(self, word: str) -> bool:
        """Membership in the full word list, case-insensitive."""
        return word.upper() in self._full

    def is_profanity(self, word: str) -> bool:
        return word.upper() in self._profanities

    def words(self, scope: WordListScope, word_length: int, allow_profanities: bool = True) -> List[str]:
        """Target candidates for a scope and length."""
        pool = self._pools.get((scope, word_length), [])
        if allow_profanities:
            return list(pool)
        return [word for word in pool if word not in self._profanities]

    def random_target(self,
                      scope: WordListScope,
                      word_length: int,
                      allow_profanities: bool = False,
                      exclude: Iterable[str] = (),
                      rng: Optional[random.Random] = None) -> str:
        """
        Uniform pick from the full list or the common subset.

        Raises:
            ValueError: If no word is left to pick
        """
        excluded = set(exclude)
        candidates = [
            word for word in self.words(scope, word_length, allow_profanities)
            if word not in excluded
        ]
        if not candidates:
            raise ValueError(f"No {word_length}-letter words available in the {scope.value} list")
        return (rng or random).choice(candidates)

    def daily_word_count(self, word_length: int) -> int:
        return len(self._daily.get(word_length, []))

    def daily_target(self, index: int, word_length: int) -> str:
        """
        Fixed lookup into the ordered daily list.

        Raises:
            OutOfRange: If the list has no word for this index
        """
        words = self._daily.get(word_length, [])
        if index < 0 or index >= len(words):
            raise OutOfRange(
                f"Daily word #{index} requested but the {word_length}-letter daily list "
                f"has {len(words)} words"
            )
        return words[index]

    def __len__(self) -> int:
        return len(self._full)
