"""
Game Manager

Owns the player's rounds, one per game mode, together with settings and
per-mode streaks. Every operation runs to completion under a lock, and the
whole state document is written back after each change. A change whose
save fails is undone in memory as well.
"""

import copy
import logging
import random
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from ..config.game_settings import ALPHABET
from ..errors import GameInProgress, InvalidToken, InvalidWord, PersistenceCorrupt, PersistenceFailed
from ..models.game import GameMode, GameRound, GameState, SharedGame, TileState, WordListScope
from ..models.state import PersistedState, Settings, Streak
from ..utils.game_logger import game_logger
from .daily import DailyWordSelector, seconds_until_next_word
from .evaluator import LetterKnowledge, tile_states
from .game_service import GameService
from .share_codec import ShareCodec
from .state_store import StateStore
from .word_corpus import WordCorpus


class GameManager:
    """
    Coordinates modes, rounds, settings and streaks for one player.

    Rounds are kept per mode, so switching modes or changing settings never
    touches another mode's unfinished round or streak.
    """

    def __init__(self,
                 corpus: WordCorpus,
                 store: StateStore,
                 today: Optional[Callable[[], date]] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            corpus: Word lists used for targets and guess validation
            store: Backend the player state is loaded from and saved to
            today: Clock returning the current local date
            rng: Random source for non-daily targets

        Raises:
            OutOfRange: If a daily word list has no word for today
        """
        self.corpus = corpus
        self.store = store
        self.today = today or date.today
        self.rng = rng or random.Random()
        self.daily = DailyWordSelector(corpus, self.today)
        self.service = GameService(corpus)
        self.codec = ShareCodec()
        self._lock = threading.RLock()

        self.daily.verify_coverage()

        self.state = self._load_state()
        self.rounds: Dict[GameMode, GameRound] = {
            mode: record.round for mode, record in self.state.modes.items() if record.round
        }
        self._activate(self.state.current_mode, replace_finished=False)

    def _load_state(self) -> PersistedState:
        try:
            return self.store.load()
        except PersistenceCorrupt as e:
            game_logger.log_game_event('state_recovered', level=logging.WARNING, reason=str(e))
            return PersistedState()

    def _persist(self) -> None:
        for mode, game_round in self.rounds.items():
            self.state.record(mode).round = game_round
        self.store.save(self.state)

    @contextmanager
    def _transaction(self):
        """
        Run one operation under the lock. If saving fails, every change the
        operation made in memory is rolled back before the error propagates.
        """
        with self._lock:
            snapshot = copy.deepcopy((self.state, self.rounds))
            try:
                yield
            except PersistenceFailed:
                self.state, self.rounds = snapshot
                raise

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def mode(self) -> GameMode:
        return self.state.current_mode

    @property
    def settings(self) -> Settings:
        return self.state.settings

    @property
    def current_round(self) -> GameRound:
        return self.rounds[self.mode]

    @property
    def boards(self) -> List[GameState]:
        return self.current_round.boards

    def streak(self, mode: Optional[GameMode] = None) -> Streak:
        return self.state.record(mode or self.mode).streak

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def _start_round(self, mode: GameMode) -> GameRound:
        scope = self.settings.word_list_scope
        daily_index = None

        if mode.is_daily:
            daily_index = self.daily.current_index()
            targets = [self.daily.target_for(mode, daily_index)]
        else:
            # Drawn without replacement so boards never share a target
            targets = []
            for _ in range(mode.board_count):
                targets.append(self.corpus.random_target(
                    scope,
                    mode.word_length,
                    allow_profanities=not self.settings.profanity_filter,
                    exclude=targets,
                    rng=self.rng,
                ))

        game_round = self.service.new_round(mode, targets, scope, daily_index)
        self.rounds[mode] = game_round
        game_logger.log_game_event('round_started', mode.value,
                                   boards=len(targets), word_list=scope.value,
                                   daily_index=daily_index)
        return game_round

    def _activate(self, mode: GameMode, replace_finished: bool) -> GameRound:
        """
        Return the round to play in mode, starting one when needed.

        An unfinished round is always kept. A daily round is replaced only
        when the day has changed, a finished round of another mode only
        when replace_finished is set.
        """
        existing = self.rounds.get(mode)
        if existing is None:
            return self._start_round(mode)

        if mode.is_daily:
            if self.daily.has_rolled_over(existing.daily_index):
                game_logger.log_game_event('daily_rollover', mode.value,
                                           previous_index=existing.daily_index,
                                           daily_index=self.daily.current_index())
                return self._start_round(mode)
            return existing

        if existing.is_terminal and replace_finished:
            return self._start_round(mode)
        return existing

    def refresh(self) -> GameRound:
        """Re-derive the daily index and move to the new day's word if it changed."""
        with self._transaction():
            current = self.rounds.get(self.mode)
            game_round = self._activate(self.mode, replace_finished=False)
            if game_round is not current:
                self._persist()
            return game_round

    def change_mode(self, new_mode: GameMode) -> GameRound:
        """
        Switch to another mode, resuming its unfinished round if there is one.
        """
        with self._transaction():
            if new_mode == self.mode:
                return self.refresh()

            game_round = self._activate(new_mode, replace_finished=True)
            self.state.previous_mode = self.mode
            self.state.current_mode = new_mode
            self._persist()

            game_logger.log_game_event('mode_changed', new_mode.value,
                                       previous_mode=self.state.previous_mode.value,
                                       resumed=game_round.attempts > 0 and not game_round.is_terminal)
            return game_round

    def change_previous_mode(self) -> GameRound:
        return self.change_mode(self.state.previous_mode)

    def new_game(self) -> GameRound:
        """
        Start the next word of the current mode.

        A daily round stays the same for the whole day.

        Raises:
            GameInProgress: If the current round has not ended yet
        """
        with self._transaction():
            game_round = self.refresh()
            if self.mode.is_daily:
                return game_round
            if not game_round.is_terminal:
                raise GameInProgress("Finish the current word before starting a new one")

            game_round = self._start_round(self.mode)
            self._persist()
            return game_round

    def update_settings(self,
                        word_list_scope: Optional[WordListScope] = None,
                        profanity_filter: Optional[bool] = None,
                        colorblind_theme: Optional[bool] = None) -> Settings:
        """
        Change settings. Only targets picked after the change are affected;
        unfinished rounds keep the target and list they started with.
        """
        with self._transaction():
            settings = self.state.settings
            if word_list_scope is not None:
                settings.word_list_scope = word_list_scope
            if profanity_filter is not None:
                settings.profanity_filter = profanity_filter
            if colorblind_theme is not None:
                settings.colorblind_theme = colorblind_theme

            self._persist()
            game_logger.log_game_event('settings_changed', self.mode.value, **settings.to_dict())
            return settings

    def submit_guess(self, guess: str) -> List[GameState]:
        """
        Submit one guess to every unfinished board of the current round.

        Returns:
            List[GameState]: The boards that received the guess

        Raises:
            InvalidWord: Guess rejected, nothing changed
            GameOver: The round has already ended
            PersistenceFailed: The guess could not be saved and was undone
        """
        with self._transaction():
            game_round = self.refresh()
            mode = self.mode

            try:
                receivers = self.service.submit_to_round(game_round, guess, self.settings)
            except InvalidWord as e:
                game_logger.log_game_event('guess_rejected', mode.value,
                                           guess=e.word, reason=e.reason)
                raise

            record = self.state.record(mode)
            record.last_played = self.today()
            game_logger.log_game_event('guess_accepted', mode.value,
                                       attempt=game_round.attempts,
                                       boards=len(receivers))

            if game_round.is_terminal:
                self._finish_round(mode, game_round)

            self._persist()
            return receivers

    def _finish_round(self, mode: GameMode, game_round: GameRound) -> None:
        record = self.state.record(mode)
        won = game_round.won

        record.streak.record(won)
        record.total_played += 1
        if won:
            record.total_solved += 1

        game_logger.log_game_event('round_won' if won else 'round_lost', mode.value,
                                   attempts=game_round.attempts,
                                   targets=[board.target for board in game_round.boards])
        game_logger.log_game_event('streak_updated', mode.value, **record.streak.to_dict())

    # ------------------------------------------------------------------
    # Derived board information
    # ------------------------------------------------------------------

    def keyboard(self, board_index: int = 0) -> Dict[str, TileState]:
        knowledge = LetterKnowledge(self.boards[board_index].guesses)
        return {letter: knowledge.keyboard_state(letter) for letter in ALPHABET}

    def hints(self, partial_guess: str, board_index: int = 0) -> List[TileState]:
        knowledge = LetterKnowledge(self.boards[board_index].guesses)
        return knowledge.hints(self.service.normalize(partial_guess))

    # ------------------------------------------------------------------
    # Sharing
    # ------------------------------------------------------------------

    def share(self, board_index: int = 0, reveal_word: bool = False) -> str:
        return self.codec.encode(self.boards[board_index], reveal_word)

    def share_text(self, board_index: int = 0) -> str:
        return self.codec.share_text(self.boards[board_index], self.settings.colorblind_theme)

    def open_shared(self, token: str) -> SharedGame:
        """Decode a shared game. Live rounds are not touched."""
        try:
            shared = self.codec.decode(token)
        except InvalidToken as e:
            game_logger.log_game_event('shared_game_rejected', level=logging.WARNING, reason=str(e))
            raise

        game_logger.log_game_event('shared_game_opened', shared.mode.value, rows=len(shared.rows))
        return shared

    # ------------------------------------------------------------------
    # Serialization for clients
    # ------------------------------------------------------------------

    def to_dict(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Client view of the current mode. Targets only appear on finished boards."""
        game_round = self.current_round
        record = self.state.record(self.mode)
        now = now or datetime.now()

        return {
            'mode': self.mode.value,
            'previous_mode': self.state.previous_mode.value,
            'settings': self.settings.to_dict(),
            'streak': record.streak.to_dict(),
            'stats': {
                'total_played': record.total_played,
                'total_solved': record.total_solved,
            },
            'is_terminal': game_round.is_terminal,
            'won': game_round.is_terminal and game_round.won,
            'round': game_round.to_dict(reveal_targets=False),
            'tiles': [
                [[state.value for state in row] for row in tile_states(board.guesses)]
                for board in game_round.boards
            ],
            'seconds_until_next_word': seconds_until_next_word(now) if self.mode.is_daily else None,
        }


# Global manager instance
_game_manager = None


def get_game_manager() -> Optional[GameManager]:
    """Get the global game manager instance."""
    return _game_manager


def initialize_game_manager(corpus: WordCorpus, store: StateStore, **kwargs) -> GameManager:
    """Initialize the global game manager instance."""
    global _game_manager
    _game_manager = GameManager(corpus, store, **kwargs)
    return _game_manager
