from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .models import Booking


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; lax mode would store `true` as a party of one.
    if isinstance(value, bool):
        raise ValueError("people must be a number")
    return value


PartySize = Annotated[int, BeforeValidator(_reject_bool), Field(ge=1)]


class BookingCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    people: PartySize


class BookingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    date: str
    time: str
    people: int

    @classmethod
    def from_db(cls, booking: Booking) -> "BookingRead":
        return cls.model_validate(booking)


class BookingCreated(BaseModel):
    message: str = "Booking confirmed"
    booking: BookingRead


class MessageResponse(BaseModel):
    message: str
