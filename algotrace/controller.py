"""PlaybackController — one generic play/pause/step/seek state machine over any trace."""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

from .algorithms import BaseAlgorithm, get_algorithm
from .playback_types import PlaybackConfig, PlaybackStatus
from .render import ReplayCache
from .render_types import RenderState
from .scheduler import AsyncioScheduler, Scheduler
from .trace_types import Trace

logger = logging.getLogger(__name__)

Listener = Callable[["PlaybackController"], None]

_STEPPABLE = (PlaybackStatus.SEEDED, PlaybackStatus.PAUSED, PlaybackStatus.PLAYING)


class PlaybackController:
    """Drives a Trace through Idle, Seeded, Playing, Paused and Completed.

    The controller owns the current index, status and speed; the RenderState
    for the current index is derived from the trace, never edited by hand.
    Forward moves apply one step to a copy of the current state. Backward
    moves and seeks replay from the initial state (or the nearest checkpoint
    when ``config.checkpoint_interval`` is positive).

    Listeners registered through ``on_update`` / ``add_listener`` are called
    with the controller after every observable change. RenderState objects
    handed out are never mutated afterwards.
    """

    def __init__(
        self,
        algorithm_id: str | None = None,
        scheduler: Scheduler | None = None,
        config: PlaybackConfig = PlaybackConfig(),
        on_update: Listener | None = None,
    ):
        self._algorithm_id = algorithm_id
        self._algorithm: BaseAlgorithm | None = None
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._config = config
        self._speed_ms = config.clamp_speed(config.speed_ms)
        self._listeners: list[Listener] = [on_update] if on_update else []

        self._trace: Trace | None = None
        self._cache: ReplayCache | None = None
        self._state: RenderState | None = None
        self._index = 0
        self._status = PlaybackStatus.IDLE
        self._epoch: int | None = None

    # ── accessors ────────────────────────────────────────────────

    @property
    def algorithm_id(self) -> str | None:
        return self._algorithm_id

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def total_steps(self) -> int:
        return len(self._trace) if self._trace is not None else 0

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def render_state(self) -> RenderState | None:
        return self._state

    @property
    def trace(self) -> Trace | None:
        return self._trace

    @property
    def speed_ms(self) -> int:
        return self._speed_ms

    @property
    def can_step_forward(self) -> bool:
        return self._status in _STEPPABLE

    @property
    def can_step_backward(self) -> bool:
        return self._status is not PlaybackStatus.IDLE and self._index > 0

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self._algorithm_id,
            "status": self._status.value,
            "current_index": self._index,
            "total_steps": self.total_steps,
            "speed_ms": self._speed_ms,
            "state": self._state.to_dict() if self._state is not None else None,
        }

    # ── verbs ────────────────────────────────────────────────────

    def generate(self, data: Any, algorithm_id: str | None = None) -> Trace:
        """Build a fresh trace for *data*, discarding all previous playback state."""
        self._scheduler.cancel()
        self._epoch = None
        if algorithm_id is not None:
            self._algorithm_id = algorithm_id
        if self._algorithm_id is None:
            raise ValueError("No algorithm selected")

        self._algorithm = get_algorithm(self._algorithm_id)
        self._trace = self._algorithm.generate(data)
        self._cache = ReplayCache(self._algorithm, self._trace, self._config.checkpoint_interval)
        self._index = 0
        self._state = self._cache.state_at(0)
        self._status = (
            PlaybackStatus.COMPLETED if len(self._trace) == 0 else PlaybackStatus.SEEDED
        )
        logger.info(
            "Seeded %s with %d steps (%s)",
            self._algorithm_id,
            len(self._trace),
            self._status.value,
        )
        self._notify()
        return self._trace

    def play(self) -> None:
        if self._status not in (PlaybackStatus.SEEDED, PlaybackStatus.PAUSED):
            logger.debug("play() ignored in %s", self._status.value)
            return
        # arm first: a scheduler that cannot arm leaves the status untouched
        self._epoch = self._scheduler.start(self._on_tick, lambda: self._speed_ms)
        self._status = PlaybackStatus.PLAYING
        logger.debug("Playing from index %d every %d ms", self._index, self._speed_ms)
        self._notify()

    def pause(self) -> None:
        if self._status is not PlaybackStatus.PLAYING:
            logger.debug("pause() ignored in %s", self._status.value)
            return
        self._scheduler.cancel()
        self._epoch = None
        self._status = PlaybackStatus.PAUSED
        self._notify()

    def step_forward(self) -> None:
        if self._status not in _STEPPABLE:
            logger.debug("step_forward() ignored in %s", self._status.value)
            return
        if self._status is PlaybackStatus.PLAYING:
            self.pause()
        self._advance()
        self._notify()

    def step_backward(self) -> None:
        if not self.can_step_backward:
            logger.debug("step_backward() ignored at index %d", self._index)
            return
        self._scheduler.cancel()
        self._epoch = None
        self._index -= 1
        self._state = self._cache.state_at(self._index)
        self._status = PlaybackStatus.PAUSED
        self._notify()

    def seek(self, k: int) -> None:
        if self._status is PlaybackStatus.IDLE:
            logger.debug("seek() ignored without a trace")
            return
        self._scheduler.cancel()
        self._epoch = None
        self._index = max(0, min(k, len(self._trace)))
        self._state = self._cache.state_at(self._index)
        self._status = (
            PlaybackStatus.COMPLETED
            if self._index == len(self._trace)
            else PlaybackStatus.PAUSED
        )
        self._notify()

    def reset(self, data: Any = None) -> None:
        """Re-seed at index 0 with the same input, or with *data* when given."""
        if data is None:
            if self._trace is None:
                logger.debug("reset() ignored without input")
                return
            data = self._trace.input
        self.generate(data)

    def set_speed(self, ms: int) -> int:
        """Change the tick interval; ticks armed from now on use the new value."""
        self._speed_ms = self._config.clamp_speed(ms)
        logger.debug("Speed set to %d ms", self._speed_ms)
        return self._speed_ms

    def close(self) -> None:
        if self._status is PlaybackStatus.PLAYING:
            self.pause()
        self._scheduler.cancel()
        self._listeners.clear()

    # ── internals ────────────────────────────────────────────────

    def _on_tick(self, epoch: int) -> None:
        if epoch != self._epoch or self._status is not PlaybackStatus.PLAYING:
            logger.debug("Ignoring tick from epoch %d", epoch)
            return
        try:
            self._advance()
            logger.debug("Tick %d/%d", self._index, len(self._trace))
            self._notify()
        except Exception:
            if self._status is PlaybackStatus.PLAYING:
                logger.warning("Tick at index %d failed, pausing playback", self._index)
                self._scheduler.cancel()
                self._epoch = None
                self._status = PlaybackStatus.PAUSED
            raise

    def _advance(self) -> None:
        state = copy.deepcopy(self._state)
        self._algorithm.interpret(self._trace.steps[self._index], state)
        self._state = state
        self._index += 1
        if self._index == len(self._trace):
            self._scheduler.cancel()
            self._epoch = None
            self._status = PlaybackStatus.COMPLETED
            logger.info("%s playback completed", self._algorithm_id)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)
