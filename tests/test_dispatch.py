import asyncio

import pytest

from virtual_labs.execution.dispatch import AsyncioDispatcher, InlineDispatcher


def test_inline_runs_immediately(dispatcher):
    calls = []
    dispatcher.submit("record", calls.append, "done")
    assert calls == ["done"]


def test_inline_reports_failures_instead_of_raising(dispatcher, reporter):
    def explode():
        raise RuntimeError("boom")

    dispatcher.submit("explode", explode)

    assert len(reporter.failures) == 1
    assert reporter.failures[0].operation == "explode"
    assert isinstance(reporter.failures[0].error, RuntimeError)


def test_inline_runs_coroutines_without_a_loop(dispatcher, reporter):
    calls = []

    async def job(value):
        calls.append(value)

    async def failing():
        raise ValueError("bad")

    dispatcher.submit("job", job, 1)
    dispatcher.submit("failing", failing)

    assert calls == [1]
    assert [f.operation for f in reporter.failures] == ["failing"]


@pytest.mark.asyncio
async def test_inline_schedules_coroutines_on_running_loop(reporter):
    dispatcher = InlineDispatcher(reporter)
    calls = []

    async def job():
        await asyncio.sleep(0)
        calls.append("ran")

    async def failing():
        raise ValueError("bad")

    dispatcher.submit("job", job)
    dispatcher.submit("failing", failing)
    assert calls == []

    await dispatcher.drain()

    assert calls == ["ran"]
    assert [f.operation for f in reporter.failures] == ["failing"]


@pytest.mark.asyncio
async def test_asyncio_dispatcher_keeps_submission_order(reporter):
    dispatcher = AsyncioDispatcher(reporter)
    order = []

    async def slow(value):
        await asyncio.sleep(0.02)
        order.append(value)

    dispatcher.submit("first", slow, 1)
    dispatcher.submit("second", order.append, 2)
    dispatcher.submit("third", slow, 3)
    assert order == []

    await dispatcher.drain()

    assert order == [1, 2, 3]
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_asyncio_dispatcher_failure_does_not_stop_the_queue(reporter):
    dispatcher = AsyncioDispatcher(reporter)
    done = []

    def broken():
        raise ConnectionError("store down")

    dispatcher.submit("broken", broken)
    dispatcher.submit("after", done.append, "still ran")
    await dispatcher.drain()

    assert done == ["still ran"]
    assert [f.operation for f in reporter.failures] == ["broken"]


@pytest.mark.asyncio
async def test_asyncio_dispatcher_restarts_after_idle(reporter):
    dispatcher = AsyncioDispatcher(reporter)
    seen = []

    dispatcher.submit("one", seen.append, 1)
    await dispatcher.drain()
    dispatcher.submit("two", seen.append, 2)
    await dispatcher.drain()

    assert seen == [1, 2]
