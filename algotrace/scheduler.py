"""Scheduler — single-slot cancellable repeating tick source with epoch guarding."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]


class Scheduler(ABC):
    """Repeating timer that holds at most one armed handle.

    Every ``start`` and ``cancel`` bumps the epoch. A tick carries the epoch
    it was armed under and ``fire`` drops it unless that epoch is still
    current, so a tick that was already queued when playback was cancelled
    never reaches the callback. The interval is read each time the next
    tick is armed.
    """

    def __init__(self):
        self._epoch = 0
        self._handle: Any = None
        self._callback: TickCallback | None = None
        self._interval: Callable[[], int] | None = None

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def live_handles(self) -> int:
        return 0 if self._handle is None else 1

    def start(self, callback: TickCallback, interval_ms: Callable[[], int] | int) -> int:
        """Cancel any armed tick, then arm a new repeating tick. Returns the new epoch."""
        self.cancel()
        self._callback = callback
        if callable(interval_ms):
            self._interval = interval_ms
        else:
            self._interval = lambda: interval_ms
        try:
            self._arm()
        except Exception:
            self.cancel()
            raise
        logger.debug("Scheduler started at epoch %d", self._epoch)
        return self._epoch

    def cancel(self) -> None:
        if self._handle is not None:
            self._disarm(self._handle)
            self._handle = None
        self._epoch += 1
        self._callback = None

    def fire(self, epoch: int) -> None:
        """Deliver a tick armed under *epoch*; stale ticks are ignored."""
        if epoch != self._epoch or self._callback is None:
            logger.debug("Dropping stale tick (epoch %d, current %d)", epoch, self._epoch)
            return
        self._handle = None
        self._callback(epoch)
        # the callback may have cancelled or restarted playback
        if epoch == self._epoch and self._handle is None:
            self._arm()

    def _arm(self) -> None:
        delay_ms = max(1, int(self._interval()))
        self._handle = self._schedule(delay_ms, self._epoch)

    @abstractmethod
    def _schedule(self, delay_ms: int, epoch: int) -> Any:
        """Arrange for ``self.fire(epoch)`` after *delay_ms*; return a handle."""
        ...

    @abstractmethod
    def _disarm(self, handle: Any) -> None: ...


class AsyncioScheduler(Scheduler):
    """Ticks delivered by an asyncio event loop via ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        super().__init__()
        self._loop = loop

    def _schedule(self, delay_ms: int, epoch: int) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, self.fire, epoch)

    def _disarm(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ManualScheduler(Scheduler):
    """Virtual clock for tests and deterministic hosts.

    Nothing fires until ``advance`` moves the clock past a tick's due time.
    """

    def __init__(self):
        super().__init__()
        self.now_ms = 0
        self._pending: list[tuple[int, int]] = []  # (due_ms, epoch)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _schedule(self, delay_ms: int, epoch: int) -> tuple[int, int]:
        entry = (self.now_ms + delay_ms, epoch)
        self._pending.append(entry)
        return entry

    def _disarm(self, handle: tuple[int, int]) -> None:
        if handle in self._pending:
            self._pending.remove(handle)

    def advance(self, ms: int) -> int:
        """Move the clock forward *ms*, firing due ticks in order. Returns ticks fired."""
        target = self.now_ms + ms
        fired = 0
        while self._pending:
            entry = min(self._pending)
            due, epoch = entry
            if due > target:
                break
            self._pending.remove(entry)
            self.now_ms = due
            self.fire(epoch)
            fired += 1
        self.now_ms = target
        return fired
