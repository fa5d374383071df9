import logging
import secrets

from sqlalchemy.exc import SQLAlchemyError

from ..domain.errors import NotFound, StorageError, Unauthorized
from ..domain.repositories import BookingRepository
from ..models import Booking

logger = logging.getLogger(__name__)


def authorize_admin(provided_key: str | None, admin_key: str | None) -> None:
    """Raise Unauthorized unless both keys are set and equal."""
    if not admin_key or not provided_key:
        raise Unauthorized("admin key missing")
    if not secrets.compare_digest(provided_key.encode("utf-8"), admin_key.encode("utf-8")):
        raise Unauthorized("admin key mismatch")


async def list_bookings(repo: BookingRepository) -> list[Booking]:
    try:
        return await repo.list_all()
    except SQLAlchemyError as exc:
        raise StorageError("failed to list bookings") from exc


async def delete_booking(repo: BookingRepository, *, booking_id: int) -> None:
    try:
        deleted = await repo.delete(booking_id)
    except SQLAlchemyError as exc:
        raise StorageError("failed to delete booking") from exc
    if not deleted:
        raise NotFound(f"booking {booking_id} not found")
    logger.info("Booking %s deleted by admin", booking_id)
