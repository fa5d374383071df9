import asyncio
from typing import List

import pytest
from spa_booking.infrastructure.slot_locks import SlotLocks


@pytest.mark.asyncio
async def test_same_slot_is_serialized() -> None:
    locks = SlotLocks()
    events: List[str] = []

    async def worker(tag: str) -> None:
        async with locks.hold("2024-07-01", "14:00"):
            events.append(f"{tag}-in")
            await asyncio.sleep(0.01)
            events.append(f"{tag}-out")

    await asyncio.gather(worker("a"), worker("b"), worker("c"))
    # Each critical section closes before the next one opens.
    for i in range(0, len(events), 2):
        assert events[i].endswith("-in")
        assert events[i + 1] == events[i].replace("-in", "-out")


@pytest.mark.asyncio
async def test_different_slots_run_concurrently() -> None:
    locks = SlotLocks()
    inside = 0
    peak = 0

    async def worker(time: str) -> None:
        nonlocal inside, peak
        async with locks.hold("2024-07-01", time):
            inside += 1
            peak = max(peak, inside)
            await asyncio.sleep(0.01)
            inside -= 1

    await asyncio.gather(worker("10:00"), worker("11:00"))
    assert peak == 2


@pytest.mark.asyncio
async def test_locks_are_released_after_use() -> None:
    locks = SlotLocks()
    async with locks.hold("2024-07-01", "14:00"):
        assert len(locks) == 1
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_lock_released_when_body_raises() -> None:
    locks = SlotLocks()
    with pytest.raises(RuntimeError):
        async with locks.hold("2024-07-01", "14:00"):
            raise RuntimeError("boom")
    assert len(locks) == 0
    async with locks.hold("2024-07-01", "14:00"):
        pass
