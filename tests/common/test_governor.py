from __future__ import annotations

import asyncio

import pytest

from rusbooru.common.governor import RequestGovernor


def test_governor_caps_concurrent_holders() -> None:
    peak = 0

    async def scenario() -> RequestGovernor:
        governor = RequestGovernor(7)

        async def work() -> None:
            nonlocal peak
            async with governor:
                peak = max(peak, governor.active)
                await asyncio.sleep(0.01)

        await asyncio.gather(*(work() for _ in range(20)))
        return governor

    governor = asyncio.run(scenario())

    assert peak == 7
    assert governor.active == 0
    assert governor.waiting == 0


def test_governor_admits_waiters_in_arrival_order() -> None:
    admitted: list[int] = []

    async def scenario() -> None:
        governor = RequestGovernor(1)
        await governor.acquire()

        async def waiter(index: int) -> None:
            async with governor:
                admitted.append(index)

        tasks = [asyncio.create_task(waiter(index)) for index in range(5)]
        await asyncio.sleep(0)
        assert governor.waiting == 5
        governor.release()
        await asyncio.gather(*tasks)

    asyncio.run(scenario())

    assert admitted == [0, 1, 2, 3, 4]


def test_governor_releases_slot_on_error() -> None:
    async def scenario() -> RequestGovernor:
        governor = RequestGovernor(1)
        with pytest.raises(RuntimeError, match="boom"):
            async with governor:
                raise RuntimeError("boom")
        async with governor:
            assert governor.active == 1
        return governor

    governor = asyncio.run(scenario())

    assert governor.active == 0


def test_governor_rejects_invalid_capacity() -> None:
    with pytest.raises(ValueError, match="at least 1"):
        RequestGovernor(0)


def test_governor_detects_unbalanced_release() -> None:
    async def scenario() -> None:
        RequestGovernor(2).release()

    with pytest.raises(RuntimeError, match="released more times"):
        asyncio.run(scenario())
