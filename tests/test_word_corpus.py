import os
import random
import tempfile
import unittest

from sanuli.config.game_settings import (
    COMMON_WORDS_FILE, DAILY_WORDS_FILES, FULL_WORDS_FILE, PROFANITIES_FILE
)
from sanuli.errors import OutOfRange
from sanuli.models.game import WordListScope
from sanuli.services.word_corpus import WordCorpus
from tests.helpers import COMMON_5, DAILY_5, FULL_5, FULL_6, make_corpus


class TestWordCorpus(unittest.TestCase):

    def setUp(self):
        self.corpus = make_corpus()

    def test_validity_is_case_insensitive(self):
        self.assertTrue(self.corpus.is_valid("kissa"))
        self.assertTrue(self.corpus.is_valid("KÄSKY"))
        self.assertFalse(self.corpus.is_valid("XXXXX"))

    def test_len_counts_full_list(self):
        self.assertEqual(len(self.corpus), len(FULL_5) + len(FULL_6))

    def test_common_must_be_subset_of_full(self):
        with self.assertRaises(ValueError):
            WordCorpus(full_words=["KISSA"], common_words=["KOIRA"])

    def test_words_by_scope_and_length(self):
        self.assertEqual(self.corpus.words(WordListScope.COMMON, 5), sorted(COMMON_5))
        self.assertEqual(self.corpus.words(WordListScope.FULL, 5), sorted(FULL_5))
        self.assertNotIn("PASKA", self.corpus.words(WordListScope.COMMON, 5, allow_profanities=False))

    def test_random_target_is_reproducible(self):
        first = self.corpus.random_target(WordListScope.COMMON, 5, rng=random.Random(7))
        second = self.corpus.random_target(WordListScope.COMMON, 5, rng=random.Random(7))
        self.assertEqual(first, second)
        self.assertIn(first, COMMON_5)

    def test_random_target_honours_filter_and_exclusions(self):
        rng = random.Random(1)
        excluded = ["KISSA", "KOIRA", "PIANO", "TALLI"]
        for _ in range(20):
            self.assertEqual(
                self.corpus.random_target(WordListScope.COMMON, 5, exclude=excluded, rng=rng),
                "SIENI"
            )

    def test_random_target_empty_pool(self):
        with self.assertRaises(ValueError):
            self.corpus.random_target(WordListScope.COMMON, 5, exclude=COMMON_5)

    def test_daily_target(self):
        self.assertEqual(self.corpus.daily_target(0, 5), DAILY_5[0])
        self.assertEqual(self.corpus.daily_word_count(5), len(DAILY_5))
        with self.assertRaises(OutOfRange):
            self.corpus.daily_target(len(DAILY_5), 5)
        with self.assertRaises(OutOfRange):
            self.corpus.daily_target(-1, 5)


class TestWordCorpusFromDirectory(unittest.TestCase):

    def _write(self, directory, name, words):
        with open(os.path.join(directory, name), 'w', encoding='utf-8') as f:
            f.write("\n".join(words) + "\n")

    def test_loads_flat_files(self):
        with tempfile.TemporaryDirectory() as directory:
            self._write(directory, FULL_WORDS_FILE, ["kissa", "koira", "käsky", "kauppa"])
            self._write(directory, COMMON_WORDS_FILE, ["kissa", "kauppa"])
            self._write(directory, DAILY_WORDS_FILES[5], ["koira", "kissa"])

            corpus = WordCorpus.from_directory(directory)

        self.assertTrue(corpus.is_valid("KÄSKY"))
        self.assertEqual(corpus.daily_target(0, 5), "KOIRA")
        self.assertEqual(corpus.daily_word_count(6), 0)
        self.assertFalse(corpus.is_profanity("KISSA"))

    def test_profanity_list_is_optional(self):
        with tempfile.TemporaryDirectory() as directory:
            self._write(directory, FULL_WORDS_FILE, ["kissa", "paska"])
            self._write(directory, COMMON_WORDS_FILE, ["kissa"])
            self._write(directory, PROFANITIES_FILE, ["paska"])

            corpus = WordCorpus.from_directory(directory)

        self.assertTrue(corpus.is_profanity("paska"))

    def test_missing_full_list(self):
        with tempfile.TemporaryDirectory() as directory:
            with self.assertRaises(FileNotFoundError):
                WordCorpus.from_directory(directory)


if __name__ == '__main__':
    unittest.main()
