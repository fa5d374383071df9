import logging
from typing import Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_mailer, get_session, get_slot_locks
from ..domain.errors import CapacityExceeded, StorageError, ValidationError
from ..infrastructure.mailer import Mailer
from ..infrastructure.repositories import SqlAlchemyBookingRepository
from ..infrastructure.slot_locks import SlotLocks
from ..schemas import BookingCreate, BookingCreated, BookingRead
from ..usecases import bookings as booking_usecase
from ..usecases.notifications import send_booking_confirmation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_session),
    slot_locks: SlotLocks = Depends(get_slot_locks),
    mailer: Mailer = Depends(get_mailer),
) -> BookingCreated:
    repo = SqlAlchemyBookingRepository(session)
    try:
        # Lock is released only after commit so the next admission sees this row.
        async with slot_locks.hold(payload.date, payload.time):
            async with session.begin():
                booking = await booking_usecase.admit_booking(
                    repo,
                    name=payload.name,
                    email=payload.email,
                    date=payload.date,
                    time=payload.time,
                    party_size=payload.people,
                )
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")
    except CapacityExceeded:
        logger.info("Slot %s %s is full, rejected party of %d", payload.date, payload.time, payload.people)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slot is full")
    except (StorageError, SQLAlchemyError):
        logger.exception("Failed to book %s %s", payload.date, payload.time)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to book")

    result = BookingRead.from_db(booking)
    background_tasks.add_task(
        send_booking_confirmation,
        mailer,
        to_email=result.email,
        name=result.name,
        date=result.date,
        time=result.time,
        people=result.people,
        booking_id=result.id,
    )
    return BookingCreated(booking=result)


@router.get("/availability", response_model=Dict[str, int])
async def get_availability(
    date: Optional[str] = Query(default=None, description="Date key, e.g. 2024-07-01"),
    session: AsyncSession = Depends(get_session),
) -> dict[str, int]:
    if date is None or not date.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Date is required")
    repo = SqlAlchemyBookingRepository(session)
    try:
        return await booking_usecase.get_availability(repo, date=date.strip())
    except StorageError:
        logger.exception("Failed to read availability for %s", date)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
