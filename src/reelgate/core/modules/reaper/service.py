import asyncio
import contextlib

import structlog

from reelgate.core.core import Service
from reelgate.utils import Clock

logger = structlog.get_logger(__name__)


class ReaperService(Service):
    """Periodic sweep of expired tokens from both stores.

    Purely corrective: validation evicts expired entries on its own, so a late
    or failed sweep never makes an expired token valid.
    """

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def ensure_running(self) -> None:
        """Start the sweep loop unless it is already running."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Token reaper started", interval=self.core.config.reaper_interval.total_seconds())

    async def sweep(self) -> int:
        """Run one sweep over both stores and return the number of evicted tokens."""
        stores = {
            "session": self.core.services.session,
            "media": self.core.services.media,
        }
        removed = 0
        for name, store in stores.items():
            try:
                removed += await store.sweep_expired()
            except Exception:
                logger.exception("Token sweep failed", store=name)
        if removed:
            logger.info("Expired tokens swept", count=removed)
        return removed

    async def on_stop(self) -> None:
        """Stop the sweep loop on shutdown."""
        await self.stop()

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish. Safe to call when not running."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Token reaper stopped")

    async def _run(self) -> None:
        interval = self.core.config.reaper_interval.total_seconds()
        while True:
            await asyncio.sleep(interval)
            await self.sweep()
