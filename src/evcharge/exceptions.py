"""Exceptions raised by evcharge."""

from typing import Optional


class EVChargeError(Exception):
    """Base class for all evcharge errors."""


class InvalidRangeError(EVChargeError, ValueError):
    """Charging estimate requested with an impossible range, power or capacity."""


class InvalidInputError(EVChargeError, ValueError):
    """Connector counts or backend records that break a station invariant."""


class StationNotFoundError(EVChargeError, LookupError):
    """The backend has no station with the requested id."""


class BackendError(EVChargeError):
    """The station backend could not be reached or returned an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
