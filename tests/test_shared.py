"""Tests for the exclusive-access guard."""

from __future__ import annotations

import asyncio

from ncm_tui.shared import Shared


def test_lock_yields_value() -> None:
    shared = Shared([1, 2])

    async def scenario() -> None:
        assert shared.locked() is False
        async with shared.lock() as value:
            assert shared.locked() is True
            value.append(3)
        assert shared.locked() is False

    asyncio.run(scenario())

    async def read() -> list[int]:
        async with shared.lock() as value:
            return list(value)

    assert asyncio.run(read()) == [1, 2, 3]


def test_lock_serializes_holders() -> None:
    shared = Shared([])
    order: list[str] = []

    async def holder(name: str) -> None:
        async with shared.lock() as value:
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            value.append(name)
            order.append(f"{name}-out")

    async def scenario() -> None:
        await asyncio.gather(holder("a"), holder("b"))

    asyncio.run(scenario())
    assert order == ["a-in", "a-out", "b-in", "b-out"]


def test_lock_released_on_error() -> None:
    shared = Shared(0)

    async def scenario() -> bool:
        try:
            async with shared.lock():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        return shared.locked()

    assert asyncio.run(scenario()) is False
