import unittest

from sanuli.errors import LengthMismatch
from sanuli.models.game import CharacterCount, GuessResult, LetterFeedback, TileState
from sanuli.services.evaluator import LetterKnowledge, count_from_guess, evaluate, tile_states

C = LetterFeedback.CORRECT
P = LetterFeedback.PRESENT
A = LetterFeedback.ABSENT


def result(target, guess):
    return GuessResult(word=guess, feedback=evaluate(target, guess))


class TestEvaluate(unittest.TestCase):

    def test_all_correct(self):
        self.assertEqual(evaluate("PIANO", "PIANO"), [C, C, C, C, C])

    def test_every_shared_letter_present(self):
        self.assertEqual(evaluate("KISSA", "SAIKU"), [P, P, P, P, A])

    def test_repeated_guess_letter_beyond_target_count_is_absent(self):
        # SAIKU has one S, so only the first S of KISSA is marked
        self.assertEqual(evaluate("SAIKU", "KISSA"), [P, P, P, A, P])

    def test_correct_letter_consumes_copy_before_presents(self):
        self.assertEqual(evaluate("KOIRA", "KUKKA"), [C, A, A, A, C])
        self.assertEqual(evaluate("PIANO", "AAAAA"), [A, A, C, A, A])

    def test_presents_claimed_left_to_right(self):
        self.assertEqual(evaluate("TALLI", "LLAMA"), [P, P, P, A, A])

    def test_no_letter_marked_more_often_than_in_target(self):
        for target, guess in [("KISSA", "SSSSS"), ("TALLI", "LLLLL"), ("SAIKU", "KISSA"), ("KISSA", "SAIKU")]:
            feedback = evaluate(target, guess)
            for letter in set(guess):
                marked = sum(1 for g, status in zip(guess, feedback) if g == letter and status != A)
                self.assertLessEqual(marked, target.count(letter))

    def test_finnish_letters(self):
        self.assertEqual(evaluate("KÄSKY", "KÄSKY"), [C, C, C, C, C])
        self.assertEqual(evaluate("LEIPÄÄ", "KÄSKYÄ")[1], P)

    def test_length_mismatch(self):
        with self.assertRaises(LengthMismatch):
            evaluate("KISSA", "KAUPPA")


class TestLetterKnowledge(unittest.TestCase):

    def setUp(self):
        # Target KOIRA: K found once in place, extra Ks absent
        self.knowledge = LetterKnowledge([result("KOIRA", "KUKKA")])

    def test_counts(self):
        self.assertEqual(self.knowledge.counts["K"], CharacterCount.exactly(1))
        self.assertEqual(self.knowledge.counts["A"], CharacterCount.at_least(1))
        self.assertEqual(self.knowledge.counts["U"], CharacterCount.exactly(0))
        self.assertNotIn("O", self.knowledge.counts)

    def test_keyboard_state(self):
        self.assertEqual(self.knowledge.keyboard_state("K"), TileState.CORRECT)
        self.assertEqual(self.knowledge.keyboard_state("U"), TileState.ABSENT)
        self.assertEqual(self.knowledge.keyboard_state("O"), TileState.UNKNOWN)

    def test_keyboard_present(self):
        knowledge = LetterKnowledge([result("KISSA", "SAIKU")])
        self.assertEqual(knowledge.keyboard_state("S"), TileState.PRESENT)
        self.assertEqual(knowledge.counts["S"], CharacterCount.at_least(1))

    def test_hints(self):
        self.assertEqual(self.knowledge.hint("K", 0), TileState.CORRECT)
        self.assertEqual(self.knowledge.hint("K", 2), TileState.ABSENT)
        # Every K of the target has been found
        self.assertEqual(self.knowledge.hint("K", 1), TileState.ABSENT)
        self.assertEqual(self.knowledge.hint("A", 1), TileState.PRESENT)
        self.assertEqual(self.knowledge.hint("U", 3), TileState.ABSENT)
        self.assertEqual(self.knowledge.hint("O", 1), TileState.UNKNOWN)
        self.assertEqual(self.knowledge.hints("KA"), [TileState.CORRECT, TileState.PRESENT])

    def test_exact_count_overrides_lower_bound(self):
        knowledge = LetterKnowledge([result("KISSA", "SAIKU"), result("KISSA", "SSSSS")])
        self.assertEqual(knowledge.counts["S"], CharacterCount.exactly(2))
        self.assertTrue(knowledge.is_exhausted("S"))

    def test_count_from_guess_ignores_missing_letter(self):
        self.assertIsNone(count_from_guess("Ö", result("KOIRA", "KUKKA")))

    def test_same_history_same_knowledge(self):
        history = [result("TALLI", "LLAMA"), result("TALLI", "KISSA")]
        first = LetterKnowledge(history)
        second = LetterKnowledge(list(history))
        self.assertEqual(first.counts, second.counts)
        self.assertEqual(first.correct_positions, second.correct_positions)


class TestTileStates(unittest.TestCase):

    def test_rows_follow_feedback(self):
        rows = tile_states([result("KOIRA", "KUKKA")])
        self.assertEqual(rows, [[TileState.CORRECT, TileState.ABSENT, TileState.ABSENT,
                                 TileState.ABSENT, TileState.CORRECT]])


if __name__ == '__main__':
    unittest.main()
