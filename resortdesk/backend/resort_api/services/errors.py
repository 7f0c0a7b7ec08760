from fastapi import status


class BookingError(Exception):
    """Base class for rejected booking operations.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(BookingError):
    pass


class NotFoundError(BookingError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BookingError):
    pass


class CapacityError(ConflictError):
    def __init__(self, message: str, remaining: int = 0) -> None:
        super().__init__(message)
        self.remaining = remaining


__all__ = [
    "BookingError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "CapacityError",
]
