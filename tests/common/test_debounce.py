from __future__ import annotations

import asyncio

import pytest

from rusbooru.common.debounce import DebouncedCall


def test_schedule_without_loop_runs_immediately() -> None:
    calls: list[str] = []
    debounced = DebouncedCall(lambda: calls.append("flush"), delay=10.0)

    debounced.schedule()

    assert calls == ["flush"]
    assert not debounced.pending


def test_repeated_schedules_collapse_into_one_call() -> None:
    calls: list[str] = []

    async def scenario() -> None:
        debounced = DebouncedCall(lambda: calls.append("flush"), delay=0.01)
        for _ in range(5):
            debounced.schedule()
        assert debounced.pending
        await asyncio.sleep(0.05)
        assert not debounced.pending

    asyncio.run(scenario())

    assert calls == ["flush"]


def test_flush_runs_pending_call_now() -> None:
    calls: list[str] = []

    async def scenario() -> tuple[bool, bool]:
        debounced = DebouncedCall(lambda: calls.append("flush"), delay=60.0)
        debounced.schedule()
        first = debounced.flush()
        second = debounced.flush()
        return first, second

    first, second = asyncio.run(scenario())

    assert (first, second) == (True, False)
    assert calls == ["flush"]


def test_cancel_drops_pending_call() -> None:
    calls: list[str] = []

    async def scenario() -> None:
        debounced = DebouncedCall(lambda: calls.append("flush"), delay=0.01)
        debounced.schedule()
        debounced.cancel()
        await asyncio.sleep(0.03)

    asyncio.run(scenario())

    assert calls == []


def test_failing_callback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def explode() -> None:
        raise OSError("disk full")

    async def scenario() -> None:
        debounced = DebouncedCall(explode, delay=0)
        debounced.schedule()
        await asyncio.sleep(0.01)

    with caplog.at_level("ERROR"):
        asyncio.run(scenario())

    assert "Deferred call failed" in caplog.text


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        DebouncedCall(lambda: None, delay=-1)
