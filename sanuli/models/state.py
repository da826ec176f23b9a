"""
Player State Models

Streaks, statistics and settings that survive restarts. Parsing is
forward-compatible: unknown fields are ignored and missing ones default.
Values of the wrong type raise ValueError or TypeError.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from .game import GameMode, GameRound, WordListScope

STATE_VERSION = 1


def _int_field(data: Dict[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TypeError(f"'{key}' must be a non-negative integer, got {value!r}")
    return value


def _bool_field(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean, got {value!r}")
    return value


@dataclass
class Streak:
    """Consecutive wins for one mode and the best run so far."""
    current: int = 0
    max: int = 0

    def record(self, won: bool) -> None:
        if won:
            self.current += 1
        else:
            self.current = 0
        self.max = max(self.max, self.current)

    def to_dict(self) -> Dict[str, int]:
        return {"current": self.current, "max": self.max}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Streak":
        current = _int_field(data, "current")
        return cls(current=current, max=max(_int_field(data, "max"), current))


@dataclass
class ModeRecord:
    """Everything persisted for one mode."""
    streak: Streak = field(default_factory=Streak)
    total_played: int = 0
    total_solved: int = 0
    last_played: Optional[date] = None
    round: Optional[GameRound] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "streak": self.streak.to_dict(),
            "total_played": self.total_played,
            "total_solved": self.total_solved,
            "last_played": self.last_played.isoformat() if self.last_played else None,
            "round": self.round.to_dict() if self.round else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModeRecord":
        last_played = data.get("last_played")
        round_data = data.get("round")
        return cls(
            streak=Streak.from_dict(data.get("streak") or {}),
            total_played=_int_field(data, "total_played"),
            total_solved=_int_field(data, "total_solved"),
            last_played=date.fromisoformat(last_played) if last_played else None,
            round=GameRound.from_dict(round_data) if round_data else None,
        )


@dataclass
class Settings:
    """Global player settings. The theme only affects presentation."""
    word_list_scope: WordListScope = WordListScope.COMMON
    profanity_filter: bool = True
    colorblind_theme: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word_list_scope": self.word_list_scope.value,
            "profanity_filter": self.profanity_filter,
            "colorblind_theme": self.colorblind_theme,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            word_list_scope=WordListScope(data.get("word_list_scope", WordListScope.COMMON.value)),
            profanity_filter=_bool_field(data, "profanity_filter", True),
            colorblind_theme=_bool_field(data, "colorblind_theme", False),
        )


@dataclass
class PersistedState:
    """The whole stored document: settings plus one record per mode."""
    current_mode: GameMode = GameMode.CLASSIC_5
    previous_mode: GameMode = GameMode.CLASSIC_5
    settings: Settings = field(default_factory=Settings)
    modes: Dict[GameMode, ModeRecord] = field(default_factory=dict)

    def record(self, mode: GameMode) -> ModeRecord:
        """Get the record for a mode, creating an empty one on first use."""
        if mode not in self.modes:
            self.modes[mode] = ModeRecord()
        return self.modes[mode]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": STATE_VERSION,
            "current_mode": self.current_mode.value,
            "previous_mode": self.previous_mode.value,
            "settings": self.settings.to_dict(),
            "modes": {mode.value: record.to_dict() for mode, record in self.modes.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersistedState":
        if not isinstance(data, dict):
            raise TypeError(f"Stored state must be an object, got {type(data).__name__}")

        known_modes = {mode.value: mode for mode in GameMode}
        modes = {}
        for key, record in (data.get("modes") or {}).items():
            # Modes from newer versions are skipped
            if key in known_modes:
                mode = known_modes[key]
                mode_record = ModeRecord.from_dict(record)
                if mode_record.round and mode_record.round.mode is not mode:
                    raise ValueError(f"Record '{key}' holds a {mode_record.round.mode.value} round")
                modes[mode] = mode_record

        return cls(
            current_mode=known_modes.get(data.get("current_mode"), GameMode.CLASSIC_5),
            previous_mode=known_modes.get(data.get("previous_mode"), GameMode.CLASSIC_5),
            settings=Settings.from_dict(data.get("settings") or {}),
            modes=modes,
        )
