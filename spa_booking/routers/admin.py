import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, require_admin_key
from ..domain.errors import NotFound, StorageError
from ..infrastructure.repositories import SqlAlchemyBookingRepository
from ..schemas import BookingRead, MessageResponse
from ..usecases import admin as admin_usecase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.get("/bookings", response_model=List[BookingRead])
async def list_bookings(session: AsyncSession = Depends(get_session)) -> list[BookingRead]:
    repo = SqlAlchemyBookingRepository(session)
    try:
        rows = await admin_usecase.list_bookings(repo)
    except StorageError:
        logger.exception("Failed to list bookings")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return [BookingRead.from_db(booking) for booking in rows]


@router.delete("/bookings/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: str = Path(...),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    try:
        parsed_id = int(booking_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    repo = SqlAlchemyBookingRepository(session)
    try:
        async with session.begin():
            await admin_usecase.delete_booking(repo, booking_id=parsed_id)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    except (StorageError, SQLAlchemyError):
        logger.exception("Failed to delete booking %s", booking_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return MessageResponse(message="Booking deleted successfully")
