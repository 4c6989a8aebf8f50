import asyncio

import pytest

from virtual_labs.execution.timer import AsyncioTicker, ManualTicker


def test_ticks_count_only_while_running():
    ticker = ManualTicker()

    ticker.advance(3)
    assert ticker.elapsed_ticks == 0

    ticker.start()
    ticker.advance(3)
    assert ticker.elapsed_ticks == 3

    ticker.stop()
    ticker.advance(5)
    assert ticker.elapsed_ticks == 3


def test_freeze_is_final():
    ticker = ManualTicker()
    ticker.start()
    ticker.advance(42)

    assert ticker.freeze() == 42

    ticker.start()
    ticker.advance(10)
    assert ticker.elapsed_ticks == 42
    assert ticker.is_frozen
    assert not ticker.is_running


def test_stop_twice_is_harmless():
    ticker = ManualTicker()
    ticker.start()
    ticker.stop()
    ticker.stop()
    assert not ticker.is_running


@pytest.mark.asyncio
async def test_asyncio_ticker_counts_and_stops():
    ticker = AsyncioTicker(interval_seconds=0.01)
    ticker.start()

    await asyncio.sleep(0.1)
    ticker.stop()
    counted = ticker.elapsed_ticks
    assert counted > 0

    await asyncio.sleep(0.05)
    assert ticker.elapsed_ticks == counted


@pytest.mark.asyncio
async def test_asyncio_ticker_freeze_cancels_task():
    ticker = AsyncioTicker(interval_seconds=0.01)
    ticker.start()
    await asyncio.sleep(0.05)

    frozen = ticker.freeze()
    await asyncio.sleep(0.05)

    assert ticker.elapsed_ticks == frozen
    ticker.tick()
    assert ticker.elapsed_ticks == frozen


def test_asyncio_ticker_needs_a_running_loop():
    ticker = AsyncioTicker()
    with pytest.raises(RuntimeError):
        ticker.start()
