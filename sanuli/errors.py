"""
Engine Errors

Every failure the game engine reports is a subclass of SanuliError so
callers can catch the whole family at the HTTP boundary.
"""


class SanuliError(Exception):
    """Base class for all game engine errors."""


class InvalidWord(SanuliError):
    """Guess is not an accepted word or has the wrong length. No state changes."""

    def __init__(self, word: str, reason: str):
        super().__init__(reason)
        self.word = word
        self.reason = reason


class LengthMismatch(SanuliError):
    """Target and guess lengths differ when evaluating."""


class GameOver(SanuliError):
    """A guess was submitted to a round that has already ended."""


class GameInProgress(SanuliError):
    """The operation needs a finished round (sharing, starting the next word)."""


class OutOfRange(SanuliError):
    """The daily word list does not cover the requested day."""


class InvalidToken(SanuliError):
    """A share token could not be decoded."""


class PersistenceCorrupt(SanuliError):
    """Stored state could not be read back."""


class PersistenceFailed(SanuliError):
    """State could not be written. The change that needed saving is undone."""
