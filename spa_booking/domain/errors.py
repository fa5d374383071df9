class BookingError(Exception):
    """Base class for errors raised by the booking domain."""


class ValidationError(BookingError):
    pass


class CapacityExceeded(BookingError):
    pass


class Unauthorized(BookingError):
    pass


class NotFound(BookingError):
    pass


class StorageError(BookingError):
    pass
