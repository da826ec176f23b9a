"""
Game Service

Contains the board state machine: validating guesses, evaluating them
and moving boards and rounds from IN_PROGRESS to WON or LOST.
"""

from typing import Iterable, List, Optional, Tuple

from ..errors import GameOver, InvalidWord
from ..models.game import (
    GameMode, GameRound, GameState, GameStatus, GuessResult, LetterFeedback, WordListScope
)
from ..models.state import Settings
from .evaluator import evaluate
from .word_corpus import WordCorpus


class GameService:
    """
    Board and round transitions.

    This class handles:
    - Guess normalization and validation against the corpus
    - Evaluation and appending of guesses to boards
    - Terminal status of boards and of whole rounds
    - Broadcasting one guess to every active board of a round
    """

    def __init__(self, corpus: WordCorpus):
        self.corpus = corpus

    @staticmethod
    def normalize(guess: str) -> str:
        return guess.strip().upper()

    def new_board(self,
                  mode: GameMode,
                  target: str,
                  max_attempts: Optional[int] = None,
                  word_list: WordListScope = WordListScope.COMMON,
                  daily_index: Optional[int] = None) -> GameState:
        return GameState(
            mode=mode,
            target=target.upper(),
            max_attempts=max_attempts or mode.max_guesses,
            word_list=word_list,
            daily_index=daily_index,
        )

    def new_round(self, mode: GameMode, targets: List[str],
                  word_list: WordListScope = WordListScope.COMMON,
                  daily_index: Optional[int] = None) -> GameRound:
        boards = [
            self.new_board(mode, target, mode.max_guesses, word_list, daily_index)
            for target in targets
        ]
        return GameRound(mode=mode, boards=boards, max_attempts=mode.max_guesses,
                         daily_index=daily_index)

    def is_valid_guess(self,
                       guess: str,
                       word_length: int,
                       settings: Settings,
                       targets: Iterable[str] = ()) -> Tuple[bool, str]:
        """
        Validates a guess for boards of the given word length.

        Args:
            guess: The word to validate
            word_length: Length every guess must have
            settings: Current player settings
            targets: Targets of the boards receiving the guess, always accepted

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not guess or not isinstance(guess, str):
            return False, "Guess must be a valid string"

        normalized_guess = self.normalize(guess)

        if len(normalized_guess) != word_length:
            return False, f"Guess must be exactly {word_length} letters"

        if not normalized_guess.isalpha():
            return False, "Guess must contain only letters"

        # The answer is always accepted even if the full list lacks it
        if normalized_guess in targets:
            return True, ""

        if not self.corpus.is_valid(normalized_guess):
            return False, "Word not in word list"

        if settings.profanity_filter and self.corpus.is_profanity(normalized_guess):
            return False, "Word not in word list"

        return True, ""

    def check_guess(self, guess: str, word_length: int, settings: Settings,
                    targets: Iterable[str] = ()) -> str:
        """
        Like is_valid_guess but raises.

        Returns:
            str: The normalized guess

        Raises:
            InvalidWord: If the guess is rejected
        """
        is_valid, error = self.is_valid_guess(guess, word_length, settings, targets)
        if not is_valid:
            raise InvalidWord(guess, error)
        return self.normalize(guess)

    @staticmethod
    def apply_result(board: GameState, word: str, feedback: List[LetterFeedback]) -> GameState:
        """Append an evaluated guess and move the board to its next status."""
        if board.is_terminal:
            raise GameOver(f"Board is already {board.status.value}")

        board.guesses.append(GuessResult(word=word, feedback=list(feedback)))

        if all(status == LetterFeedback.CORRECT for status in feedback):
            board.status = GameStatus.WON
        elif board.attempts >= board.max_attempts:
            board.status = GameStatus.LOST

        return board

    def make_guess(self, board: GameState, guess: str, settings: Settings) -> GameState:
        """
        Processes a guess on a single board.

        Raises:
            GameOver: If the board has already ended
            InvalidWord: If the guess is rejected; the board is unchanged
        """
        if board.is_terminal:
            raise GameOver(f"Board is already {board.status.value}")

        word = self.check_guess(guess, board.word_length, settings, [board.target])
        return self.apply_result(board, word, evaluate(board.target, word))

    def submit_to_round(self, game_round: GameRound, guess: str, settings: Settings) -> List[GameState]:
        """
        Broadcast one guess to every board of the round that is still in progress.

        Validation and evaluation happen for all receiving boards before any
        board is changed, so a rejected guess leaves the whole round untouched.
        When the shared attempt budget runs out, boards still in progress lose.

        Returns:
            List[GameState]: The boards that received the guess

        Raises:
            GameOver: If the round has already ended
            InvalidWord: If the guess is rejected
        """
        if game_round.is_terminal:
            raise GameOver(f"The {game_round.mode.value} round has already ended")

        receivers = game_round.active_boards
        word_length = receivers[0].word_length
        word = self.check_guess(guess, word_length, settings,
                                [board.target for board in receivers])

        results = [(board, evaluate(board.target, word)) for board in receivers]

        for board, feedback in results:
            self.apply_result(board, word, feedback)
        game_round.attempts += 1

        if game_round.attempts >= game_round.max_attempts:
            for board in game_round.active_boards:
                board.status = GameStatus.LOST

        return receivers
