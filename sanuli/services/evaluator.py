"""
Guess Evaluator

Compares a guess against a target and derives what the player knows
about each letter from the full guess history.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..errors import LengthMismatch
from ..models.game import CharacterCount, GuessResult, LetterFeedback, TileState


def evaluate(target: str, guess: str) -> List[LetterFeedback]:
    """
    Implements the two-pass Wordle evaluation.

    Correct letters are marked first and consume their copy of the letter.
    The remaining positions are then scanned left to right, each claiming
    one of the copies still available. A letter is therefore never marked
    Correct or Present more times than it occurs in the target.

    Raises:
        LengthMismatch: If target and guess differ in length
    """
    if len(target) != len(guess):
        raise LengthMismatch(
            f"Guess has {len(guess)} letters but the target has {len(target)}"
        )

    feedback: List[Optional[LetterFeedback]] = [None] * len(target)
    available = Counter(target)

    # First pass: exact position matches
    for i, (guessed, expected) in enumerate(zip(guess, target)):
        if guessed == expected:
            feedback[i] = LetterFeedback.CORRECT
            available[guessed] -= 1

    # Second pass: remaining copies, left to right
    for i, guessed in enumerate(guess):
        if feedback[i] is not None:
            continue
        if available[guessed] > 0:
            feedback[i] = LetterFeedback.PRESENT
            available[guessed] -= 1
        else:
            feedback[i] = LetterFeedback.ABSENT

    return feedback  # type: ignore[return-value]


def count_from_guess(letter: str, guess: GuessResult) -> Optional[CharacterCount]:
    """What a single guess reveals about how often letter occurs in the target."""
    marked = 0
    has_absent = False
    seen = False
    for guessed, status in zip(guess.word, guess.feedback):
        if guessed != letter:
            continue
        seen = True
        if status == LetterFeedback.ABSENT:
            has_absent = True
        else:
            marked += 1

    if not seen:
        return None
    # An absent copy means every real copy was already marked
    if has_absent:
        return CharacterCount.exactly(marked)
    return CharacterCount.at_least(marked)


def merge_counts(known: Optional[CharacterCount], new: Optional[CharacterCount]) -> Optional[CharacterCount]:
    if known is None:
        return new
    if new is None or known.exact:
        return known
    if new.exact:
        return new
    return CharacterCount.at_least(max(known.count, new.count))


class LetterKnowledge:
    """
    Letter knowledge accumulated over a guess history.

    Always built from the complete history so a resumed or replayed board
    ends up with exactly the same knowledge as the live one.
    """

    def __init__(self, guesses: Iterable[GuessResult]):
        self.counts: Dict[str, CharacterCount] = {}
        self.correct_positions: Set[Tuple[str, int]] = set()
        self.absent_positions: Set[Tuple[str, int]] = set()

        for guess in guesses:
            for index, (letter, status) in enumerate(zip(guess.word, guess.feedback)):
                if status == LetterFeedback.CORRECT:
                    self.correct_positions.add((letter, index))
                else:
                    self.absent_positions.add((letter, index))

            for letter in set(guess.word):
                merged = merge_counts(self.counts.get(letter), count_from_guess(letter, guess))
                if merged is not None:
                    self.counts[letter] = merged

    def correct_count(self, letter: str) -> int:
        return sum(1 for known_letter, _ in self.correct_positions if known_letter == letter)

    def is_exhausted(self, letter: str) -> bool:
        """True once every copy of letter in the target has been found in place."""
        count = self.counts.get(letter)
        return count is not None and count.exact and self.correct_count(letter) == count.count

    def keyboard_state(self, letter: str) -> TileState:
        if self.correct_count(letter) > 0:
            return TileState.CORRECT

        count = self.counts.get(letter)
        if count is None:
            return TileState.UNKNOWN
        if count.count == 0:
            return TileState.ABSENT if count.exact else TileState.UNKNOWN
        return TileState.PRESENT

    def hint(self, letter: str, index: int) -> TileState:
        """Expected state of letter typed at index, before it is submitted."""
        if (letter, index) in self.correct_positions:
            return TileState.CORRECT
        if (letter, index) in self.absent_positions:
            return TileState.ABSENT

        count = self.counts.get(letter)
        if count is None:
            return TileState.UNKNOWN
        if count.exact and (count.count == 0 or self.is_exhausted(letter)):
            return TileState.ABSENT
        return TileState.PRESENT

    def hints(self, partial_guess: str) -> List[TileState]:
        return [self.hint(letter, index) for index, letter in enumerate(partial_guess)]


def tile_states(guesses: Iterable[GuessResult]) -> List[List[TileState]]:
    """Display states of submitted rows."""
    return [[TileState(status.value) for status in guess.feedback] for guess in guesses]
