from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from fastapi import HTTPException, status


class BookingError(Exception):
    """Base class for booking business-rule failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(BookingError):
    """No matching booking or room."""


class CannotBookingError(BookingError):
    """The user is not allowed to take (or move to) the room."""


@dataclass(frozen=True)
class ApiError:
    code: str
    message: str
    http_status: int

    def to_http_exception(self, *, message: Optional[str] = None) -> HTTPException:
        """
        Convert this error to FastAPI's HTTPException.
        A message given here overrides the default one.
        """
        detail = {"code": self.code, "message": message or self.message}
        return HTTPException(status_code=self.http_status, detail=detail)


# ----------------------------
# Booking errors
# ----------------------------

NOT_FOUND = ApiError(
    code="NOT_FOUND",
    message="No result for this search.",
    http_status=status.HTTP_404_NOT_FOUND,
)

CANNOT_BOOK = ApiError(
    code="CANNOT_BOOK",
    message="Booking is not allowed.",
    http_status=status.HTTP_403_FORBIDDEN,
)

UNAUTHORIZED = ApiError(
    code="UNAUTHORIZED",
    message="You must be signed in to continue.",
    http_status=status.HTTP_401_UNAUTHORIZED,
)


def to_http_exception(err: Exception) -> HTTPException:
    """CannotBookingError answers 403; every other failure answers 404."""
    if isinstance(err, CannotBookingError):
        return CANNOT_BOOK.to_http_exception(message=err.message)
    if isinstance(err, NotFoundError):
        return NOT_FOUND.to_http_exception(message=err.message)
    return NOT_FOUND.to_http_exception()
