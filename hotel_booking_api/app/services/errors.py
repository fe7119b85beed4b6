"""
Exceptions raised by the service layer.

Endpoints translate these into HTTP responses; services never build
HTTP errors themselves.
"""

from typing import List

from ..schemas.hotel import FieldError


class HotelValidationError(ValueError):
    """Input was rejected before any relay or store call."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class HotelNotFoundError(LookupError):
    """No hotel with this id is owned by the caller.

    Raised both for ids that do not exist and for ids owned by someone
    else, so callers cannot probe for other owners' records.
    """

    def __init__(self, hotel_id: str):
        self.hotel_id = hotel_id
        super().__init__(f"Hotel {hotel_id} not found")


class RelayError(RuntimeError):
    """An image could not be uploaded to the media host."""


class RelayTimeoutError(RelayError):
    """The media host did not answer before the relay deadline."""
