from dataclasses import dataclass

from .errors import CapacityExceeded, ValidationError

SLOT_CAPACITY = 5


@dataclass(frozen=True)
class SlotSnapshot:
    capacity: int
    occupied: int


@dataclass(frozen=True)
class BookingRequest:
    name: str
    email: str
    date: str
    time: str
    party_size: int


def validate_request(request: BookingRequest) -> BookingRequest:
    """Reject blank fields and non-positive party sizes. Returns the request with text fields stripped."""
    fields = {
        "name": request.name,
        "email": request.email,
        "date": request.date,
        "time": request.time,
    }
    cleaned = {key: (value or "").strip() for key, value in fields.items()}
    missing = [key for key, value in cleaned.items() if not value]
    if missing:
        raise ValidationError(f"missing required fields: {', '.join(missing)}")
    if request.party_size <= 0:
        raise ValidationError("party_size must be positive")
    return BookingRequest(party_size=request.party_size, **cleaned)


def check_admission(snapshot: SlotSnapshot, *, party_size: int) -> int:
    """
    Pure admission check: the slot must have room for the whole party.
    Returns remaining capacity after booking if OK. Raises CapacityExceeded otherwise.
    """
    if party_size <= 0:
        raise ValidationError("party_size must be positive")

    if snapshot.occupied + party_size > snapshot.capacity:
        raise CapacityExceeded("slot is full")
    return snapshot.capacity - snapshot.occupied - party_size
