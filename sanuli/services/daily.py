"""
Daily Word Selection

The daily word is a pure function of the calendar date. Nothing here is
cached: callers recompute the index on every interaction, which is how a
session left open past midnight notices the new day.
"""

from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..config.game_settings import DAILY_EPOCH
from ..errors import OutOfRange
from ..models.game import GameMode
from .word_corpus import WordCorpus


def index_for_date(day: date, epoch: date = DAILY_EPOCH) -> int:
    """Days elapsed since the epoch. The epoch itself is index 0."""
    index = (day - epoch).days
    if index < 0:
        raise OutOfRange(f"{day.isoformat()} is before the daily word epoch {epoch.isoformat()}")
    return index


def seconds_until_next_word(now: datetime) -> int:
    """Seconds until the next local midnight, when the daily word changes."""
    tomorrow = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    return int((tomorrow - now).total_seconds())


class DailyWordSelector:
    """Maps the current date to the daily target of a word length."""

    def __init__(self, corpus: WordCorpus,
                 today: Optional[Callable[[], date]] = None,
                 epoch: date = DAILY_EPOCH):
        self.corpus = corpus
        self.today = today or date.today
        self.epoch = epoch

    def current_index(self) -> int:
        return index_for_date(self.today(), self.epoch)

    def target_for(self, mode: GameMode, index: Optional[int] = None) -> str:
        if index is None:
            index = self.current_index()
        return self.corpus.daily_target(index, mode.word_length)

    def has_rolled_over(self, previous_index: Optional[int]) -> bool:
        """True when previous_index is not today's index. An unknown day counts as stale."""
        return previous_index is None or previous_index != self.current_index()

    def verify_coverage(self) -> None:
        """
        Check that every daily list has a word for today.

        Raises:
            OutOfRange: If a daily list is too short
        """
        index = self.current_index()
        for mode in GameMode:
            if mode.is_daily:
                self.corpus.daily_target(index, mode.word_length)
