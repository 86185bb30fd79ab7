"""Exception hierarchy for :mod:`trip_carbon`."""

from __future__ import annotations

__all__ = [
    "TripCarbonError",
    "ConfigurationError",
    "NotFoundError",
    "TripInputError",
]


class TripCarbonError(RuntimeError):
    """Base class for all errors raised by trip_carbon."""


class ConfigurationError(TripCarbonError):
    """Raised when factor, credit or catalog configuration is invalid."""


class NotFoundError(TripCarbonError):
    """Raised when no catalog route connects two locations."""

    def __init__(self, location_a: str, location_b: str) -> None:
        super().__init__(
            f"No known distance between {location_a!r} and {location_b!r}"
        )
        self.location_a = location_a
        self.location_b = location_b


class TripInputError(TripCarbonError, ValueError):
    """Raised when trip input (origin, destination, distance) is unusable."""
