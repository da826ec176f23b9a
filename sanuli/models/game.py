"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config.game_settings import (
    DEFAULT_MAX_GUESSES, QUAD_BOARD_COUNT, QUAD_MAX_GUESSES, is_word_shaped
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class LetterFeedback(Enum):
    """Per-letter result of comparing a guess against the target."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class TileState(Enum):
    """Derived display state for tiles and keyboard keys."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"


class GameStatus(Enum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"


class WordListScope(Enum):
    """Which list random targets are drawn from."""
    FULL = "full"
    COMMON = "common"


class GameMode(Enum):
    """The closed set of playable modes. Each has its own boards and streak."""
    CLASSIC_5 = "classic5"
    CLASSIC_6 = "classic6"
    DAILY_5 = "daily5"
    DAILY_6 = "daily6"
    QUAD = "quad"

    @property
    def word_length(self) -> int:
        if self in (GameMode.CLASSIC_6, GameMode.DAILY_6):
            return 6
        return 5

    @property
    def is_daily(self) -> bool:
        return self in (GameMode.DAILY_5, GameMode.DAILY_6)

    @property
    def board_count(self) -> int:
        return QUAD_BOARD_COUNT if self is GameMode.QUAD else 1

    @property
    def max_guesses(self) -> int:
        return QUAD_MAX_GUESSES if self is GameMode.QUAD else DEFAULT_MAX_GUESSES


@dataclass(frozen=True)
class CharacterCount:
    """What is known about how many times a letter occurs in a target."""
    count: int
    exact: bool

    @classmethod
    def at_least(cls, count: int) -> "CharacterCount":
        return cls(count, False)

    @classmethod
    def exactly(cls, count: int) -> "CharacterCount":
        return cls(count, True)


@dataclass
class GuessResult:
    """A submitted guess and its feedback."""
    word: str
    feedback: List[LetterFeedback]

    @property
    def is_correct(self) -> bool:
        return all(status == LetterFeedback.CORRECT for status in self.feedback)

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "feedback": [status.value for status in self.feedback]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuessResult":
        word = data["word"]
        feedback = [LetterFeedback(value) for value in data["feedback"]]
        if not isinstance(word, str) or len(word) != len(feedback):
            raise ValueError(f"Malformed guess record: {data!r}")
        return cls(word=word, feedback=feedback)


@dataclass
class GameState:
    """
    One board: a target word and the guesses made against it.

    Mutated only by GameService, one guess at a time. Once status leaves
    IN_PROGRESS the board is never changed again.
    """
    mode: GameMode
    target: str
    max_attempts: int
    guesses: List[GuessResult] = field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS
    word_list: WordListScope = WordListScope.COMMON
    daily_index: Optional[int] = None

    @property
    def word_length(self) -> int:
        return len(self.target)

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    @property
    def won(self) -> bool:
        return self.status == GameStatus.WON

    def feedback_grid(self) -> List[List[LetterFeedback]]:
        return [list(guess.feedback) for guess in self.guesses]

    def to_dict(self, reveal_target: bool = True) -> Dict[str, Any]:
        """Serialize the board. The target is omitted unless reveal_target is set."""
        return {
            "mode": self.mode.value,
            "target": self.target if reveal_target else None,
            "max_attempts": self.max_attempts,
            "guesses": [guess.to_dict() for guess in self.guesses],
            "status": self.status.value,
            "word_list": self.word_list.value,
            "daily_index": self.daily_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        target = data["target"]
        if not isinstance(target, str) or not is_word_shaped(target):
            raise ValueError(f"Malformed target in stored board: {target!r}")

        max_attempts = data.get("max_attempts", DEFAULT_MAX_GUESSES)
        if not _is_int(max_attempts) or max_attempts < 1:
            raise ValueError(f"Malformed max_attempts: {max_attempts!r}")

        guesses = [GuessResult.from_dict(item) for item in data.get("guesses", [])]
        if any(len(guess.word) != len(target) for guess in guesses):
            raise ValueError("Stored guess length does not match target")

        daily_index = data.get("daily_index")
        if daily_index is not None and not _is_int(daily_index):
            raise ValueError(f"Malformed daily_index: {daily_index!r}")

        return cls(
            mode=GameMode(data["mode"]),
            target=target,
            max_attempts=max_attempts,
            guesses=guesses,
            status=GameStatus(data.get("status", GameStatus.IN_PROGRESS.value)),
            word_list=WordListScope(data.get("word_list", WordListScope.COMMON.value)),
            daily_index=daily_index,
        )


@dataclass
class GameRound:
    """
    The boards of one mode played together with a shared attempt counter.

    Single-board modes hold one board. The four-board mode broadcasts each
    guess to every board still in progress.
    """
    mode: GameMode
    boards: List[GameState]
    max_attempts: int
    attempts: int = 0
    daily_index: Optional[int] = None

    @property
    def active_boards(self) -> List[GameState]:
        return [board for board in self.boards if not board.is_terminal]

    @property
    def is_terminal(self) -> bool:
        return not self.active_boards or self.attempts >= self.max_attempts

    @property
    def won(self) -> bool:
        return all(board.won for board in self.boards)

    def to_dict(self, reveal_targets: bool = True) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "boards": [
                board.to_dict(reveal_target=reveal_targets or board.is_terminal)
                for board in self.boards
            ],
            "max_attempts": self.max_attempts,
            "attempts": self.attempts,
            "daily_index": self.daily_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRound":
        mode = GameMode(data["mode"])
        boards = [GameState.from_dict(item) for item in data["boards"]]
        if len(boards) != mode.board_count:
            raise ValueError(f"{mode.value} round needs {mode.board_count} boards, found {len(boards)}")
        if any(board.mode is not mode or board.word_length != mode.word_length for board in boards):
            raise ValueError(f"Stored boards do not belong to a {mode.value} round")

        attempts = data.get("attempts", max((board.attempts for board in boards), default=0))
        if not _is_int(attempts) or attempts < 0:
            raise ValueError(f"Malformed attempts: {attempts!r}")

        max_attempts = data.get("max_attempts", mode.max_guesses)
        if not _is_int(max_attempts) or max_attempts < 1:
            raise ValueError(f"Malformed max_attempts: {max_attempts!r}")

        daily_index = data.get("daily_index")
        if daily_index is not None and not _is_int(daily_index):
            raise ValueError(f"Malformed daily_index: {daily_index!r}")

        return cls(
            mode=mode,
            boards=boards,
            max_attempts=max_attempts,
            attempts=attempts,
            daily_index=daily_index,
        )


@dataclass
class SharedGame:
    """Read-only replay of a shared board. Never accepts guesses."""
    mode: GameMode
    word_length: int
    max_attempts: int
    status: GameStatus
    rows: List[List[LetterFeedback]]
    target: Optional[str] = None
    words: Optional[List[str]] = None
    daily_index: Optional[int] = None

    read_only = True

    def feedback_grid(self) -> List[List[LetterFeedback]]:
        return [list(row) for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "word_length": self.word_length,
            "max_attempts": self.max_attempts,
            "status": self.status.value,
            "rows": [[status.value for status in row] for row in self.rows],
            "target": self.target,
            "words": self.words,
            "daily_index": self.daily_index,
            "read_only": True,
        }
