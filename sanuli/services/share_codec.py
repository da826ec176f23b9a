"""
Share Codec

Turns a finished board into a short URL-safe token (or an emoji grid for
pasting into chats) and turns a received token back into a read-only
replay. The target word is only included when the player asks for it.

Token payload, before URL-safe base64 without padding:

    1|<mode>|<word length>|<max attempts>|<W or L>|<daily index>|<rows>|<target>|<words>

Rows are strings of C/P/A joined by '.', words are joined by '.'. The
last three fields may be empty.
"""

import base64
import binascii
import re
from typing import Dict, List

from ..config.game_settings import ALLOWED_WORD_LENGTHS, is_word_shaped
from ..errors import GameInProgress, InvalidToken
from ..models.game import GameMode, GameState, GameStatus, LetterFeedback, SharedGame

TOKEN_VERSION = "1"
TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_TOKEN_LENGTH = 2048

SYMBOLS: Dict[LetterFeedback, str] = {
    LetterFeedback.CORRECT: "C",
    LetterFeedback.PRESENT: "P",
    LetterFeedback.ABSENT: "A",
}
FEEDBACK_BY_SYMBOL = {symbol: status for status, symbol in SYMBOLS.items()}

STATUS_SYMBOLS = {GameStatus.WON: "W", GameStatus.LOST: "L"}
STATUS_BY_SYMBOL = {symbol: status for status, symbol in STATUS_SYMBOLS.items()}

EMOJIS = {
    LetterFeedback.CORRECT: "🟩",
    LetterFeedback.PRESENT: "🟨",
    LetterFeedback.ABSENT: "⬛",
}
COLORBLIND_EMOJIS = {
    LetterFeedback.CORRECT: "🟧",
    LetterFeedback.PRESENT: "🟦",
    LetterFeedback.ABSENT: "⬛",
}


class ShareCodec:
    """Encodes finished boards and decodes shared tokens."""

    def encode(self, state: GameState, reveal_word: bool = False) -> str:
        """
        Encode a finished board.

        Raises:
            GameInProgress: If the board has not ended yet
        """
        if not state.is_terminal:
            raise GameInProgress("Only finished games can be shared")

        rows = ".".join(
            "".join(SYMBOLS[status] for status in guess.feedback) for guess in state.guesses
        )
        fields = [
            TOKEN_VERSION,
            state.mode.value,
            str(state.word_length),
            str(state.max_attempts),
            STATUS_SYMBOLS[state.status],
            "" if state.daily_index is None else str(state.daily_index),
            rows,
            state.target if reveal_word else "",
            ".".join(guess.word for guess in state.guesses) if reveal_word else "",
        ]
        payload = "|".join(fields).encode("utf-8")
        return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")

    def decode(self, token: str) -> SharedGame:
        """
        Decode a token into a read-only replay. The feedback is trusted as-is.

        Raises:
            InvalidToken: If the token is malformed in any way
        """
        if not isinstance(token, str) or not token or len(token) > MAX_TOKEN_LENGTH:
            raise InvalidToken("Share code is empty or too long")
        if not TOKEN_RE.match(token):
            raise InvalidToken("Share code contains invalid characters")

        try:
            padded = token + "=" * (-len(token) % 4)
            payload = base64.urlsafe_b64decode(padded).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise InvalidToken(f"Share code is not valid base64: {e}") from e

        fields = payload.split("|")
        if len(fields) != 9 or fields[0] != TOKEN_VERSION:
            raise InvalidToken("Unsupported share code format")

        _, mode_id, length_str, max_str, status_str, daily_str, rows_str, target, words_str = fields

        try:
            mode = GameMode(mode_id)
            word_length = int(length_str)
            max_attempts = int(max_str)
            daily_index = int(daily_str) if daily_str else None
        except ValueError as e:
            raise InvalidToken(f"Share code header is malformed: {e}") from e

        if word_length not in ALLOWED_WORD_LENGTHS or max_attempts < 1:
            raise InvalidToken("Share code header is out of range")
        if status_str not in STATUS_BY_SYMBOL:
            raise InvalidToken(f"Unknown game status '{status_str}'")

        rows = self._decode_rows(rows_str, word_length)
        if len(rows) > max_attempts:
            raise InvalidToken("Share code has more rows than attempts")

        words = None
        if words_str:
            words = words_str.split(".")
            if len(words) != len(rows) or not all(
                    len(word) == word_length and is_word_shaped(word) for word in words):
                raise InvalidToken("Share code words do not match its rows")

        if target and (len(target) != word_length or not is_word_shaped(target)):
            raise InvalidToken("Share code target is malformed")

        return SharedGame(
            mode=mode,
            word_length=word_length,
            max_attempts=max_attempts,
            status=STATUS_BY_SYMBOL[status_str],
            rows=rows,
            target=target or None,
            words=words,
            daily_index=daily_index,
        )

    @staticmethod
    def _decode_rows(rows_str: str, word_length: int) -> List[List[LetterFeedback]]:
        if not rows_str:
            raise InvalidToken("Share code has no rows")

        rows = []
        for row in rows_str.split("."):
            if len(row) != word_length or any(symbol not in FEEDBACK_BY_SYMBOL for symbol in row):
                raise InvalidToken(f"Malformed row '{row}'")
            rows.append([FEEDBACK_BY_SYMBOL[symbol] for symbol in row])
        return rows

    def share_text(self, state: GameState, colorblind: bool = False) -> str:
        """
        Emoji grid of a finished board, e.g.

            Sanuli #12 3/6

            ⬛🟨⬛⬛⬛
            ...

        Raises:
            GameInProgress: If the board has not ended yet
        """
        if not state.is_terminal:
            raise GameInProgress("Only finished games can be shared")

        palette = COLORBLIND_EMOJIS if colorblind else EMOJIS
        score = str(state.attempts) if state.won else "X"

        if state.mode.is_daily and state.daily_index is not None:
            header = f"Sanuli #{state.daily_index + 1} {score}/{state.max_attempts}"
        elif state.mode is GameMode.QUAD:
            header = f"Neluli {score}/{state.max_attempts}"
        else:
            header = f"Sanuli {state.word_length} {score}/{state.max_attempts}"

        grid = "\n".join(
            "".join(palette[status] for status in guess.feedback) for guess in state.guesses
        )
        return f"{header}\n\n{grid}\n"
