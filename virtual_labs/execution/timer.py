"""
Elapsed-Time Counter.

Counts logical time units (one tick per TICK_INTERVAL_SECONDS) while a lab
session is running. Once frozen the count never changes again, and a
stopped ticker ignores any tick that still arrives.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class Ticker(ABC):
    def __init__(self):
        self.elapsed_ticks = 0
        self._running = False
        self._frozen = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def tick(self) -> None:
        if not self._running or self._frozen:
            return
        self.elapsed_ticks += 1

    def start(self) -> None:
        if self._frozen or self._running:
            return
        self._schedule()
        self._running = True

    def stop(self) -> None:
        """Halts the periodic callback. Safe to call more than once."""
        self._running = False
        self._cancel()

    def freeze(self) -> int:
        """Stops the ticker for good and returns the final count."""
        self.stop()
        self._frozen = True
        return self.elapsed_ticks

    @abstractmethod
    def _schedule(self) -> None:
        pass

    @abstractmethod
    def _cancel(self) -> None:
        pass


class ManualTicker(Ticker):
    """
    Ticker driven by explicit advance() calls (simulated time).
    """

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self.tick()

    def _schedule(self) -> None:
        pass

    def _cancel(self) -> None:
        pass


class AsyncioTicker(Ticker):
    """
    Ticker backed by a periodic task on the running event loop.
    """

    def __init__(self, interval_seconds: float = 1.0):
        super().__init__()
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run())

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval_seconds)
            self.tick()
            logger.debug(f"Tick {self.elapsed_ticks}")
