from __future__ import annotations

from typing import Protocol

from ..models import Booking


class BookingRepository(Protocol):
    async def sum_people_for_update(self, date: str, time: str) -> int: ...

    async def create(
        self,
        *,
        name: str,
        email: str,
        date: str,
        time: str,
        people: int,
    ) -> Booking: ...

    async def occupancy_by_time(self, date: str) -> dict[str, int]: ...

    async def list_all(self) -> list[Booking]: ...

    async def delete(self, booking_id: int) -> bool: ...
