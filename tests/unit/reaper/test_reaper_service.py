"""Tests for the background token sweep."""

import asyncio
from datetime import timedelta

from reelgate.core.core import Core


class TestSweep:
    def test_sweeps_both_stores(self, core, clock):
        """Test that one sweep evicts expired tokens from both stores."""
        async def scenario():
            session = await core.services.session.issue()
            await core.services.media.issue(session)
            clock.advance(timedelta(hours=25))
            return await core.services.reaper.sweep()

        assert asyncio.run(scenario()) == 2
        assert core.services.session.count() == 0
        assert core.services.media.count() == 0

    def test_failed_store_does_not_stop_sweep(self, core, clock, monkeypatch):
        """Test that a failing store is logged and the other store is still swept."""

        async def broken_sweep():
            raise RuntimeError("boom")

        monkeypatch.setattr(core.services.session, "sweep_expired", broken_sweep)

        async def scenario():
            await core.services.media.issue(await core.services.session.issue())
            clock.advance(timedelta(hours=1))
            return await core.services.reaper.sweep()

        assert asyncio.run(scenario()) == 1
        assert core.services.media.count() == 0


class TestLifecycle:
    def test_not_running_before_first_issue(self, core):
        """Test that the reaper does not start before any token is issued."""
        assert core.services.reaper.is_running is False

    def test_ensure_running_is_idempotent(self, core):
        """Test that starting the reaper twice keeps a single task."""
        async def scenario():
            core.services.reaper.ensure_running()
            task = core.services.reaper._task
            core.services.reaper.ensure_running()
            return task is core.services.reaper._task

        assert asyncio.run(scenario()) is True

    def test_periodic_sweep_and_stop(self, config, clock):
        """Test that the loop sweeps on its own and stops on shutdown."""
        core = Core(config.model_copy(update={"reaper_interval": timedelta(milliseconds=10)}), clock)

        async def scenario():
            async with core.lifespan():
                await core.services.session.issue()
                clock.advance(timedelta(days=2))
                for _ in range(100):
                    if core.services.session.count() == 0:
                        break
                    await asyncio.sleep(0.01)
                swept = core.services.session.count() == 0
                running = core.services.reaper.is_running
            return swept, running, core.services.reaper.is_running

        swept, running_inside, running_after = asyncio.run(scenario())
        assert swept is True
        assert running_inside is True
        assert running_after is False

    def test_stop_cancels_loop(self, core):
        """Test that stop cancels a running loop and tolerates repeated calls."""

        async def scenario():
            core.services.reaper.ensure_running()
            running = core.services.reaper.is_running
            await core.services.reaper.stop()
            await core.services.reaper.stop()
            return running, core.services.reaper.is_running

        assert asyncio.run(scenario()) == (True, False)
