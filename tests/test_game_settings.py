import os
import tempfile
import unittest

from sanuli.config import get_word_statistics, load_word_list, validate_word_list_integrity
from sanuli.config.game_settings import is_word_shaped


class TestWordListLoading(unittest.TestCase):

    def _path(self, directory, content):
        path = os.path.join(directory, "words.txt")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_load_skips_blank_lines_and_uppercases(self):
        with tempfile.TemporaryDirectory() as directory:
            words = load_word_list(self._path(directory, "kissa\n\n  koira \nkäsky\n"))
        self.assertEqual(words, ["KISSA", "KOIRA", "KÄSKY"])

    def test_load_rejects_bad_lines(self):
        with tempfile.TemporaryDirectory() as directory:
            path = self._path(directory, "kissa\nkala\n")
            with self.assertRaises(ValueError):
                load_word_list(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_word_list("/nonexistent/words.txt")
        self.assertEqual(load_word_list("/nonexistent/words.txt", optional=True), [])

    def test_word_shape(self):
        self.assertTrue(is_word_shaped("LEIPÄÄ"))
        self.assertFalse(is_word_shaped("kissa"))
        self.assertFalse(is_word_shaped("KALA"))
        self.assertFalse(is_word_shaped("KISS4"))


class TestWordListIntegrity(unittest.TestCase):

    def test_valid_list(self):
        self.assertTrue(validate_word_list_integrity(["KISSA", "KAUPPA"]))

    def test_invalid_lists(self):
        for words in ([], ["kissa"], ["KALA"], ["KISS4"], ["KISSA", "KISSA"]):
            with self.assertRaises(ValueError):
                validate_word_list_integrity(words, "daily-words.txt")

    def test_statistics(self):
        stats = get_word_statistics(["KISSA", "KOIRA", "KAUPPA"])
        self.assertEqual(stats["total_words"], 3)
        self.assertEqual(stats["words_by_length"], {5: 2, 6: 1})
        self.assertEqual(stats["most_common_letters"][0], ("A", 4))
        self.assertIn("error", get_word_statistics([]))


if __name__ == '__main__':
    unittest.main()
