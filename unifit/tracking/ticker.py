"""Periodic tick source for an activity session.

One Ticker belongs to one session. It can be started and stopped any number of
times while the session runs, and is closed for good when the session leaves
the timed part of its life.
"""

import asyncio
from collections.abc import Callable

from loguru import logger


class Ticker:
    """Calls a callback every interval seconds on the running event loop."""

    def __init__(self, callback: Callable[[], None], interval: float = 1.0) -> None:
        self._callback = callback
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def running(self) -> bool:
        return self._task is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Acquire the cadence. No-op when already running."""
        if self._closed:
            raise RuntimeError("Ticker is closed")
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("ticker: Started", interval=self._interval)

    def stop(self) -> None:
        """Release the cadence, keeping the ticker reusable."""
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("ticker: Stopped")

    def close(self) -> None:
        """Release the cadence permanently."""
        self.stop()
        self._closed = True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._callback()
            except Exception:
                logger.exception("ticker: Tick callback failed")
