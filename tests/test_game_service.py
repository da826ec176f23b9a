import unittest

from sanuli.errors import GameOver, InvalidWord
from sanuli.models.game import GameMode, GameStatus, LetterFeedback
from sanuli.models.state import Settings
from sanuli.services.game_service import GameService
from tests.helpers import make_corpus


class TestSingleBoard(unittest.TestCase):

    def setUp(self):
        self.service = GameService(make_corpus())
        self.settings = Settings()
        self.board = self.service.new_board(GameMode.CLASSIC_5, "KOIRA")

    def test_new_board(self):
        self.assertEqual(self.board.status, GameStatus.IN_PROGRESS)
        self.assertEqual(self.board.max_attempts, 6)
        self.assertEqual(self.board.word_length, 5)

    def test_guess_is_normalized(self):
        self.service.make_guess(self.board, " kissa ", self.settings)
        self.assertEqual(self.board.guesses[0].word, "KISSA")

    def test_unknown_word_leaves_board_unchanged(self):
        with self.assertRaises(InvalidWord) as ctx:
            self.service.make_guess(self.board, "XXXXX", self.settings)
        self.assertEqual(ctx.exception.reason, "Word not in word list")
        self.assertEqual(self.board.attempts, 0)

    def test_wrong_length_rejected(self):
        with self.assertRaises(InvalidWord):
            self.service.make_guess(self.board, "KAUPPA", self.settings)
        self.assertEqual(self.board.attempts, 0)

    def test_non_letters_rejected(self):
        valid, error = self.service.is_valid_guess("KISS4", 5, self.settings)
        self.assertFalse(valid)
        self.assertEqual(error, "Guess must contain only letters")

    def test_target_always_accepted(self):
        board = self.service.new_board(GameMode.CLASSIC_5, "PUOLI")
        self.service.make_guess(board, "puoli", self.settings)
        self.assertEqual(board.status, GameStatus.WON)

    def test_profanity_filter(self):
        with self.assertRaises(InvalidWord):
            self.service.make_guess(self.board, "PASKA", self.settings)

        self.service.make_guess(self.board, "PASKA", Settings(profanity_filter=False))
        self.assertEqual(self.board.attempts, 1)

    def test_win(self):
        self.service.make_guess(self.board, "KISSA", self.settings)
        self.service.make_guess(self.board, "KOIRA", self.settings)

        self.assertEqual(self.board.status, GameStatus.WON)
        self.assertTrue(self.board.guesses[-1].is_correct)
        with self.assertRaises(GameOver):
            self.service.make_guess(self.board, "PIANO", self.settings)
        self.assertEqual(self.board.attempts, 2)

    def test_loss_after_max_attempts(self):
        for _ in range(6):
            self.assertEqual(self.board.status, GameStatus.IN_PROGRESS)
            self.service.make_guess(self.board, "KISSA", self.settings)

        self.assertEqual(self.board.status, GameStatus.LOST)
        with self.assertRaises(GameOver):
            self.service.make_guess(self.board, "KISSA", self.settings)

    def test_win_on_last_attempt(self):
        for _ in range(5):
            self.service.make_guess(self.board, "KISSA", self.settings)
        self.service.make_guess(self.board, "KOIRA", self.settings)
        self.assertEqual(self.board.status, GameStatus.WON)


class TestQuadRound(unittest.TestCase):

    def setUp(self):
        self.service = GameService(make_corpus())
        self.settings = Settings()
        self.round = self.service.new_round(GameMode.QUAD, ["KISSA", "KOIRA", "PIANO", "TALLI"])

    def test_new_round(self):
        self.assertEqual(len(self.round.boards), 4)
        self.assertEqual(self.round.max_attempts, 9)
        self.assertTrue(all(board.max_attempts == 9 for board in self.round.boards))

    def test_guess_broadcast_to_active_boards(self):
        receivers = self.service.submit_to_round(self.round, "KISSA", self.settings)
        self.assertEqual(len(receivers), 4)
        self.assertEqual(self.round.boards[0].status, GameStatus.WON)

        receivers = self.service.submit_to_round(self.round, "KOIRA", self.settings)
        self.assertEqual(len(receivers), 3)
        self.assertNotIn(self.round.boards[0], receivers)
        # The solved board keeps only its winning row
        self.assertEqual(self.round.boards[0].attempts, 1)
        self.assertEqual(self.round.boards[1].attempts, 2)
        self.assertEqual(self.round.attempts, 2)

    def test_each_board_evaluated_against_its_own_target(self):
        self.service.submit_to_round(self.round, "PIANO", self.settings)
        feedback = [board.guesses[0].feedback for board in self.round.boards]
        self.assertEqual(feedback[2], [LetterFeedback.CORRECT] * 5)
        self.assertNotEqual(feedback[0], feedback[2])

    def test_rejected_guess_changes_no_board(self):
        with self.assertRaises(InvalidWord):
            self.service.submit_to_round(self.round, "XXXXX", self.settings)

        self.assertEqual(self.round.attempts, 0)
        self.assertTrue(all(board.attempts == 0 for board in self.round.boards))

    def test_won_when_all_boards_solved(self):
        for word in ["KISSA", "KOIRA", "PIANO", "TALLI"]:
            self.service.submit_to_round(self.round, word, self.settings)

        self.assertTrue(self.round.is_terminal)
        self.assertTrue(self.round.won)
        with self.assertRaises(GameOver):
            self.service.submit_to_round(self.round, "KISSA", self.settings)

    def test_shared_budget_exhausted(self):
        self.service.submit_to_round(self.round, "KISSA", self.settings)
        for _ in range(8):
            self.service.submit_to_round(self.round, "KUKKA", self.settings)

        self.assertTrue(self.round.is_terminal)
        self.assertFalse(self.round.won)
        self.assertEqual(self.round.boards[0].status, GameStatus.WON)
        self.assertTrue(all(board.status == GameStatus.LOST for board in self.round.boards[1:]))
        with self.assertRaises(GameOver):
            self.service.submit_to_round(self.round, "KUKKA", self.settings)


if __name__ == '__main__':
    unittest.main()
