import asyncio

import pytest

from recipebox.services.deduplicator import RequestDeduplicator


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_producer_run():
    dedup = RequestDeduplicator()
    calls = 0

    async def producer():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return {"idMeal": "42"}

    results = await asyncio.gather(
        *(dedup.dedupe("lookup:42", producer) for _ in range(10))
    )

    assert calls == 1
    assert all(result == {"idMeal": "42"} for result in results)
    assert dedup.get_in_flight_count() == 0
    assert dedup.get_stats().deduplicated == 9


@pytest.mark.asyncio
async def test_concurrent_callers_see_the_same_failure():
    dedup = RequestDeduplicator()
    calls = 0

    async def producer():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        raise ValueError("upstream broke")

    results = await asyncio.gather(
        *(dedup.dedupe("categories", producer) for _ in range(4)),
        return_exceptions=True,
    )

    assert calls == 1
    assert all(isinstance(result, ValueError) for result in results)
    assert len({id(result) for result in results}) == 1
    assert dedup.get_in_flight_count() == 0


@pytest.mark.asyncio
async def test_sequential_calls_run_producer_again():
    dedup = RequestDeduplicator()
    calls = 0

    async def producer():
        nonlocal calls
        calls += 1
        return calls

    assert await dedup.dedupe("k", producer) == 1
    assert await dedup.dedupe("k", producer) == 2


@pytest.mark.asyncio
async def test_stale_entry_is_not_joined():
    clock = FakeClock()
    dedup = RequestDeduplicator(window=5.0, clock=clock)
    release_first = asyncio.Event()
    release_second = asyncio.Event()
    events = iter([release_first, release_second])
    calls = 0

    async def producer():
        nonlocal calls
        calls += 1
        run = calls
        await next(events).wait()
        return run

    first = asyncio.create_task(dedup.dedupe("k", producer))
    await asyncio.sleep(0.01)

    clock.now += 6.0
    second = asyncio.create_task(dedup.dedupe("k", producer))
    await asyncio.sleep(0.01)
    assert calls == 2

    # The older request settling must not evict the newer registration
    release_first.set()
    assert await first == 1
    assert dedup.get_in_flight_keys() == ["k"]

    release_second.set()
    assert await second == 2
    assert dedup.get_in_flight_count() == 0


@pytest.mark.asyncio
async def test_call_inside_window_joins_running_request():
    clock = FakeClock()
    dedup = RequestDeduplicator(window=5.0, clock=clock)
    release = asyncio.Event()
    calls = 0

    async def producer():
        nonlocal calls
        calls += 1
        await release.wait()
        return "done"

    first = asyncio.create_task(dedup.dedupe("k", producer))
    await asyncio.sleep(0.01)
    clock.now += 4.5
    second = asyncio.create_task(dedup.dedupe("k", producer))
    await asyncio.sleep(0.01)

    release.set()
    assert await asyncio.gather(first, second) == ["done", "done"]
    assert calls == 1
