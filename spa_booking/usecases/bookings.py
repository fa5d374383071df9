import logging

from sqlalchemy.exc import SQLAlchemyError

from ..domain.errors import StorageError
from ..domain.repositories import BookingRepository
from ..domain.services import SLOT_CAPACITY, BookingRequest, SlotSnapshot, check_admission, validate_request
from ..models import Booking

logger = logging.getLogger(__name__)


async def admit_booking(
    repo: BookingRepository,
    *,
    name: str,
    email: str,
    date: str,
    time: str,
    party_size: int,
    capacity: int = SLOT_CAPACITY,
) -> Booking:
    """
    Read the slot's occupancy and insert the booking if the party fits.

    The caller owns the transaction and must hold the slot lock until commit,
    otherwise two concurrent admissions can both see room in the same slot.
    """
    request = validate_request(
        BookingRequest(name=name, email=email, date=date, time=time, party_size=party_size)
    )

    try:
        occupied = await repo.sum_people_for_update(request.date, request.time)
    except SQLAlchemyError as exc:
        raise StorageError("failed to read slot occupancy") from exc

    remaining = check_admission(SlotSnapshot(capacity=capacity, occupied=occupied), party_size=request.party_size)

    try:
        booking = await repo.create(
            name=request.name,
            email=request.email,
            date=request.date,
            time=request.time,
            people=request.party_size,
        )
    except SQLAlchemyError as exc:
        raise StorageError("failed to insert booking") from exc

    logger.info(
        "Booking %s admitted for %s %s (party=%d, remaining=%d)",
        booking.id,
        request.date,
        request.time,
        request.party_size,
        remaining,
    )
    return booking


async def get_availability(repo: BookingRepository, *, date: str) -> dict[str, int]:
    try:
        return await repo.occupancy_by_time(date)
    except SQLAlchemyError as exc:
        raise StorageError("failed to read availability") from exc
