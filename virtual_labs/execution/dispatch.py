"""
Fire-and-Forget Dispatch.

Persistence writes and achievement checks are dispatched without the caller
waiting for them. A Dispatcher runs each job, catches whatever it raises,
and routes the failure to an ErrorReporter.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, Optional, Tuple

from ..services.error_reporting import ErrorReporter

logger = logging.getLogger(__name__)

Job = Tuple[str, Callable[..., Any], tuple]


class Dispatcher(ABC):
    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter

    @abstractmethod
    def submit(self, operation: str, func: Callable[..., Any], *args: Any) -> None:
        """
        Schedules func(*args). Returns immediately; never raises on job failure.
        func may be a plain callable or a coroutine function.
        """
        pass

    async def drain(self) -> None:
        """Waits until every submitted job has finished."""
        return None


class InlineDispatcher(Dispatcher):
    """
    Runs plain jobs immediately on the caller's thread.

    Coroutine jobs are scheduled on the running loop when there is one,
    and run to completion otherwise.
    """

    def __init__(self, reporter: ErrorReporter):
        super().__init__(reporter)
        self._pending: set = set()

    def submit(self, operation: str, func: Callable[..., Any], *args: Any) -> None:
        logger.debug(f"Dispatching '{operation}' inline")
        try:
            result = func(*args)
        except Exception as e:
            self.reporter.report(operation, e)
            return

        if not inspect.iscoroutine(result):
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            try:
                asyncio.run(result)
            except Exception as e:
                self.reporter.report(operation, e)
            return

        task = loop.create_task(result)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._on_done(operation, t))

    def _on_done(self, operation: str, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.reporter.report(operation, error)

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class AsyncioDispatcher(Dispatcher):
    """
    Queues jobs and runs them one at a time, in submission order, on a single
    worker task of the running event loop. Plain callables run in a worker
    thread so a slow store never stalls the loop.
    """

    def __init__(self, reporter: ErrorReporter):
        super().__init__(reporter)
        self._queue: Deque[Job] = deque()
        self._worker: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        return len(self._queue)

    def submit(self, operation: str, func: Callable[..., Any], *args: Any) -> None:
        self._queue.append((operation, func, args))
        logger.debug(f"Queued '{operation}' ({len(self._queue)} pending)")

        if self._worker is None or self._worker.done():
            loop = asyncio.get_running_loop()
            self._worker = loop.create_task(self._drain_queue())

    async def _drain_queue(self) -> None:
        while self._queue:
            operation, func, args = self._queue.popleft()
            await self._run_job(operation, func, args)

    async def _run_job(self, operation: str, func: Callable[..., Any], args: tuple) -> None:
        try:
            if inspect.iscoroutinefunction(func):
                await func(*args)
            else:
                result = await asyncio.to_thread(func, *args)
                if inspect.isawaitable(result):
                    await result
        except Exception as e:
            self.reporter.report(operation, e)

    async def drain(self) -> None:
        while self._worker is not None and not self._worker.done():
            await self._worker
