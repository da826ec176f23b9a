"""Shared word lists and clocks for the test suite."""

from datetime import date, timedelta

from sanuli.services.word_corpus import WordCorpus

FULL_5 = ["KISSA", "KOIRA", "PIANO", "TALLI", "KUKKA", "SIENI", "SAIKU", "PASKA", "KÄSKY", "LLAMA"]
FULL_6 = ["KAUPPA", "KISSAT", "KOIRAT", "SAUNAT", "LEIPÄÄ"]
COMMON_5 = ["KISSA", "KOIRA", "PIANO", "TALLI", "SIENI", "PASKA"]
COMMON_6 = ["KAUPPA", "KISSAT", "SAUNAT"]
DAILY_5 = ["KISSA", "KOIRA", "PIANO"]
DAILY_6 = ["KAUPPA", "KISSAT", "KOIRAT"]
PROFANITIES = ["PASKA"]


def make_corpus() -> WordCorpus:
    return WordCorpus(
        full_words=FULL_5 + FULL_6,
        common_words=COMMON_5 + COMMON_6,
        daily_words={5: DAILY_5, 6: DAILY_6},
        profanities=PROFANITIES,
    )


def wrong_word(target: str, length: int = 5) -> str:
    """An accepted, non-profane word that is not the target."""
    pool = FULL_5 if length == 5 else FULL_6
    return next(word for word in pool if word != target and word not in PROFANITIES)


class Clock:
    """Settable stand-in for date.today."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int = 1) -> None:
        self.today += timedelta(days=days)
