from __future__ import annotations

from typing import Any, List, Tuple

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.repositories import BookingRepository
from ..models import Booking

MAX_BOOKING_ID = 2**63 - 1


class SqlAlchemyBookingRepository(BookingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def sum_people_for_update(self, date: str, time: str) -> int:
        # Aggregates cannot carry FOR UPDATE, so lock the rows and sum here.
        stmt = select(Booking.people).where(Booking.date == date, Booking.time == time).with_for_update()
        rows = await self.session.scalars(stmt)
        return sum(int(people) for people in rows)

    async def create(
        self,
        *,
        name: str,
        email: str,
        date: str,
        time: str,
        people: int,
    ) -> Booking:
        booking = Booking(name=name, email=email, date=date, time=time, people=people)
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def occupancy_by_time(self, date: str) -> dict[str, int]:
        stmt: Select[Tuple[str, Any]] = (
            select(Booking.time, func.coalesce(func.sum(Booking.people), 0).label("total"))
            .where(Booking.date == date)
            .group_by(Booking.time)
        )
        rows = await self.session.execute(stmt)
        return {time: int(total) for time, total in rows.all()}

    async def list_all(self) -> List[Booking]:
        stmt = select(Booking).order_by(Booking.date.desc(), Booking.time.asc(), Booking.id.asc())
        rows = await self.session.scalars(stmt)
        return list(rows.all())

    async def delete(self, booking_id: int) -> bool:
        # Ids outside the INTEGER range cannot exist and would fail to bind.
        if not 1 <= booking_id <= MAX_BOOKING_ID:
            return False
        result = await self.session.execute(delete(Booking).where(Booking.id == booking_id))
        await self.session.flush()
        return (result.rowcount or 0) > 0
