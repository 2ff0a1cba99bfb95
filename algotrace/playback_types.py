"""Playback data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class PlaybackStatus(str, Enum):
    """Where a PlaybackController is in its lifecycle."""

    IDLE = "idle"
    SEEDED = "seeded"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PlaybackConfig:
    """Groups playback configuration.

    ``checkpoint_interval`` of 0 replays from the initial state on every
    backward step or seek; a positive value keeps a render-state snapshot
    every that many steps.
    """

    speed_ms: int = constants.DEFAULT_SPEED_MS
    min_speed_ms: int = constants.MIN_SPEED_MS
    max_speed_ms: int = constants.MAX_SPEED_MS
    checkpoint_interval: int = 0

    def clamp_speed(self, ms: int) -> int:
        return max(self.min_speed_ms, min(self.max_speed_ms, int(ms)))
