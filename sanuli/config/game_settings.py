"""
Game Configuration Constants Module

This module defines the game constants and the loaders for the flat
word-list files the engine is built from. The lists themselves are
external data; this module only reads and sanity-checks them.
"""

import os
from collections import Counter
from datetime import date
from typing import Dict, Final, FrozenSet, List

# Core Game Configuration Constants
DEFAULT_WORD_LENGTH: Final[int] = 5
ALLOWED_WORD_LENGTHS: Final[FrozenSet[int]] = frozenset({5, 6})

DEFAULT_MAX_GUESSES: Final[int] = 6
"""Maximum number of guess attempts per single-board round."""

QUAD_MAX_GUESSES: Final[int] = 9
"""Shared attempt budget of the four-board mode."""

QUAD_BOARD_COUNT: Final[int] = 4

DAILY_EPOCH: Final[date] = date(2022, 1, 7)
"""Day of daily word index 0."""

# Letters of the Finnish keyboard
ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZÅÄÖ"

# Word list file names inside WORD_LIST_DIR
FULL_WORDS_FILE: Final[str] = "full-words.txt"
COMMON_WORDS_FILE: Final[str] = "common-words.txt"
DAILY_WORDS_FILES: Final[Dict[int, str]] = {
    5: "daily-words.txt",
    6: "daily-words-6.txt",
}
PROFANITIES_FILE: Final[str] = "profanities.txt"


def is_word_shaped(word: str) -> bool:
    """True if word is uppercase, has an allowed length and only alphabet letters."""
    return (
        len(word) in ALLOWED_WORD_LENGTHS
        and word == word.upper()
        and all(char in ALPHABET for char in word)
    )


def load_word_list(path: str, optional: bool = False) -> List[str]:
    """
    Load a flat word list: one word per line, no header.

    Args:
        path: File to read
        optional: Return an empty list instead of failing when the file is missing

    Returns:
        List[str]: Uppercase words in file order

    Raises:
        FileNotFoundError: If the file is missing and not optional
        ValueError: If a line is not a 5 or 6 letter word
    """
    if not os.path.exists(path):
        if optional:
            return []
        raise FileNotFoundError(f"Word list file not found: {path}")

    words = []
    with open(path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, start=1):
            word = line.strip().upper()
            if not word:
                continue
            if not is_word_shaped(word):
                raise ValueError(f"{os.path.basename(path)}:{line_number}: '{word}' is not a valid word")
            words.append(word)

    return words


def validate_word_list_integrity(words: List[str], name: str = "word list") -> bool:
    """
    Validates the integrity and consistency of a word list.

    This function checks that:
    1. The list is not empty
    2. Every word has an allowed length and only alphabet letters
    3. Every word is uppercase
    4. There are no duplicate entries

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError(f"{name} cannot be empty")

    for index, word in enumerate(words):
        if len(word) not in ALLOWED_WORD_LENGTHS:
            raise ValueError(f"Word at index {index} '{word}' in {name} has length {len(word)}")

        if word != word.upper():
            raise ValueError(f"Word at index {index} '{word}' in {name} is not in uppercase format")

        if not all(char in ALPHABET for char in word):
            raise ValueError(f"Word at index {index} '{word}' in {name} contains non-alphabetic characters")

    duplicates = sorted(word for word, count in Counter(words).items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate words found in {name}: {duplicates}")

    return True


def get_word_statistics(words: List[str]) -> dict:
    """
    Analyzes a word list and returns statistical information.

    Returns:
        dict: total_words, words_by_length, letter_frequency, most_common_letters
    """
    if not words:
        return {"error": "Word list is empty"}

    letter_frequency = Counter(char for word in words for char in word)
    words_by_length = Counter(len(word) for word in words)

    return {
        "total_words": len(words),
        "words_by_length": dict(sorted(words_by_length.items())),
        "letter_frequency": dict(letter_frequency),
        "most_common_letters": letter_frequency.most_common(5)
    }
