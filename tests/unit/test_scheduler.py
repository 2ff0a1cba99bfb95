"""Tests for the epoch-guarded schedulers."""

import asyncio

import pytest

from algotrace.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    def test_fires_once_per_interval(self):
        scheduler = ManualScheduler()
        ticks = []
        epoch = scheduler.start(ticks.append, 100)

        assert scheduler.advance(99) == 0
        assert scheduler.advance(1) == 1
        assert scheduler.advance(250) == 2
        assert ticks == [epoch, epoch, epoch]
        assert scheduler.now_ms == 350

    def test_start_bumps_epoch_and_replaces_handle(self):
        scheduler = ManualScheduler()
        first = scheduler.start(lambda e: None, 100)
        second = scheduler.start(lambda e: None, 100)

        assert second > first
        assert scheduler.live_handles == 1
        assert scheduler.pending == 1

    def test_cancel_is_synchronous(self):
        scheduler = ManualScheduler()
        ticks = []
        scheduler.start(ticks.append, 100)
        scheduler.cancel()

        assert scheduler.live_handles == 0
        assert scheduler.advance(1000) == 0
        assert ticks == []

    def test_stale_epoch_is_dropped(self):
        scheduler = ManualScheduler()
        ticks = []
        stale = scheduler.start(ticks.append, 100)
        scheduler.start(ticks.append, 100)

        scheduler.fire(stale)
        assert ticks == []

    def test_interval_read_when_arming(self):
        scheduler = ManualScheduler()
        interval = {"ms": 100}
        ticks = []
        scheduler.start(ticks.append, lambda: interval["ms"])

        scheduler.advance(100)
        interval["ms"] = 300
        # already armed at 100 ms
        scheduler.advance(100)
        assert len(ticks) == 2
        scheduler.advance(299)
        assert len(ticks) == 2
        scheduler.advance(1)
        assert len(ticks) == 3

    def test_callback_cancelling_stops_rearm(self):
        scheduler = ManualScheduler()
        ticks = []

        def on_tick(epoch):
            ticks.append(epoch)
            if len(ticks) == 2:
                scheduler.cancel()

        scheduler.start(on_tick, 10)
        scheduler.advance(1000)
        assert len(ticks) == 2
        assert scheduler.live_handles == 0

    def test_failed_arming_leaves_nothing_armed(self):
        class RefusingScheduler(ManualScheduler):
            def _schedule(self, delay_ms, epoch):
                raise RuntimeError("cannot arm")

        scheduler = RefusingScheduler()
        ticks = []
        with pytest.raises(RuntimeError, match="cannot arm"):
            scheduler.start(ticks.append, 100)

        assert scheduler.live_handles == 0
        scheduler.fire(scheduler.epoch)
        assert ticks == []


class TestAsyncioScheduler:
    def test_ticks_on_running_loop(self):
        async def run():
            scheduler = AsyncioScheduler()
            ticks = []
            done = asyncio.Event()

            def on_tick(epoch):
                ticks.append(epoch)
                if len(ticks) == 3:
                    scheduler.cancel()
                    done.set()

            epoch = scheduler.start(on_tick, 5)
            await asyncio.wait_for(done.wait(), timeout=2)
            await asyncio.sleep(0.03)
            return epoch, ticks, scheduler.live_handles

        epoch, ticks, live = asyncio.run(run())
        assert ticks == [epoch] * 3
        assert live == 0

    def test_cancel_before_first_tick(self):
        async def run():
            scheduler = AsyncioScheduler()
            ticks = []
            scheduler.start(ticks.append, 5)
            scheduler.cancel()
            await asyncio.sleep(0.03)
            return ticks

        assert asyncio.run(run()) == []
