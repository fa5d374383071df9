import pytest
from spa_booking.domain.errors import CapacityExceeded, ValidationError
from spa_booking.domain.services import (
    SLOT_CAPACITY,
    BookingRequest,
    SlotSnapshot,
    check_admission,
    validate_request,
)


def test_capacity_is_five() -> None:
    assert SLOT_CAPACITY == 5


def test_accepts_empty_slot() -> None:
    snap = SlotSnapshot(capacity=5, occupied=0)
    assert check_admission(snap, party_size=2) == 3


def test_accepts_exactly_at_capacity() -> None:
    snap = SlotSnapshot(capacity=5, occupied=3)
    assert check_admission(snap, party_size=2) == 0


def test_rejects_when_party_exceeds_remaining() -> None:
    snap = SlotSnapshot(capacity=5, occupied=5)
    with pytest.raises(CapacityExceeded):
        check_admission(snap, party_size=1)


def test_rejects_single_party_larger_than_capacity() -> None:
    snap = SlotSnapshot(capacity=5, occupied=0)
    with pytest.raises(CapacityExceeded):
        check_admission(snap, party_size=6)


def test_non_positive_party_is_validation_error_not_capacity() -> None:
    snap = SlotSnapshot(capacity=5, occupied=0)
    with pytest.raises(ValidationError):
        check_admission(snap, party_size=0)


def test_validate_request_strips_text_fields() -> None:
    req = validate_request(
        BookingRequest(name=" Ana ", email="ana@example.com ", date=" 2024-07-01", time="14:00", party_size=2)
    )
    assert req.name == "Ana"
    assert req.email == "ana@example.com"
    assert req.date == "2024-07-01"
    assert req.party_size == 2


@pytest.mark.parametrize("field", ["name", "email", "date", "time"])
def test_validate_request_rejects_blank_field(field: str) -> None:
    values = {"name": "Ana", "email": "ana@example.com", "date": "2024-07-01", "time": "14:00"}
    values[field] = "   "
    with pytest.raises(ValidationError):
        validate_request(BookingRequest(party_size=1, **values))


@pytest.mark.parametrize("party_size", [0, -3])
def test_validate_request_rejects_non_positive_party(party_size: int) -> None:
    with pytest.raises(ValidationError):
        validate_request(
            BookingRequest(name="Ana", email="ana@example.com", date="2024-07-01", time="14:00", party_size=party_size)
        )
