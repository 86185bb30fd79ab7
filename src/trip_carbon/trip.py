"""End-to-end trip calculation combining route lookup and emission figures."""

from __future__ import annotations

import asyncio
import logging
import math

from trip_carbon.config_loader import TripCarbonConfig, load_config
from trip_carbon.engine import EmissionEngine
from trip_carbon.errors import NotFoundError, TripInputError
from trip_carbon.models import DistanceSource, TripEstimate
from trip_carbon.modes import TransportMode
from trip_carbon.routes import (
    RouteResolver,
    load_catalog_file,
    load_default_catalog,
)

LOGGER = logging.getLogger(__name__)

__all__ = ["TripCalculator"]


def _validated_distance(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TripInputError(f"Distance must be a number, got {value!r}")
    distance = float(value)
    if not math.isfinite(distance) or distance <= 0:
        raise TripInputError(f"Distance must be greater than 0, got {value!r}")
    return distance


class TripCalculator:
    """Validate a trip request and compute every figure shown for it.

    Unlike :class:`EmissionEngine`, which silently coerces bad numbers, this
    boundary rejects missing locations and non-positive distances.
    """

    def __init__(self, resolver: RouteResolver, engine: EmissionEngine) -> None:
        self.resolver = resolver
        self.engine = engine

    @classmethod
    def from_config(cls, config: TripCarbonConfig | None = None) -> TripCalculator:
        """Build a calculator from a loaded configuration.

        Uses ``config.routes_file`` when set, otherwise the packaged catalog.
        """

        config = config or load_config()
        if config.routes_file:
            catalog = load_catalog_file(config.routes_file)
        else:
            catalog = load_default_catalog()
        return cls(RouteResolver(catalog), EmissionEngine(config.emission_factors, config.credits))

    def calculate(
        self,
        origin: str,
        destination: str,
        mode: str | TransportMode = TransportMode.CAR,
        distance_km: float | None = None,
    ) -> TripEstimate:
        """Compute the estimate for a trip.

        Args:
            origin: Origin location name.
            destination: Destination location name.
            mode: Chosen transport mode.
            distance_km: Manually entered distance. When ``None`` the distance
                is looked up in the route catalog.

        Returns:
            The full :class:`TripEstimate`.

        Raises:
            TripInputError: If a location or the mode is blank, or the
                distance is not a positive number.
            NotFoundError: If no manual distance is given and the catalog has
                no route between the locations.
        """

        origin = (origin or "").strip()
        destination = (destination or "").strip()
        if not origin:
            raise TripInputError("Origin is required")
        if not destination:
            raise TripInputError("Destination is required")
        if isinstance(mode, TransportMode):
            mode_key = mode.value
        else:
            mode_key = "" if mode is None else str(mode).strip()
        if not mode_key:
            raise TripInputError("Transport mode is required")

        source: DistanceSource
        if distance_km is None:
            found = self.resolver.find_distance(origin, destination)
            if found is None:
                raise NotFoundError(origin, destination)
            distance, source = _validated_distance(found), "catalog"
        else:
            distance, source = _validated_distance(distance_km), "manual"

        engine = self.engine
        emission = engine.calculate_emission(distance, mode_key)
        baseline = engine.calculate_emission(distance, engine.baseline_mode)

        LOGGER.info(
            "Trip %s -> %s: %.2f km by %s emits %.2f kg CO2",
            origin,
            destination,
            distance,
            mode_key,
            emission,
        )
        return TripEstimate(
            origin=origin,
            destination=destination,
            distance_km=distance,
            distance_source=source,
            mode=mode_key,
            emission_kg=emission,
            baseline_emission_kg=baseline,
            savings=engine.calculate_saving(emission, baseline),
            comparison=tuple(engine.calculate_all_modes(distance)),
            credits=engine.estimate_credits(emission),
        )

    async def calculate_async(
        self,
        origin: str,
        destination: str,
        mode: str | TransportMode = TransportMode.CAR,
        distance_km: float | None = None,
        *,
        delay_seconds: float = 0.0,
    ) -> TripEstimate:
        """Wait ``delay_seconds`` (cancellable), then run :meth:`calculate`."""

        if delay_seconds > 0:
            await asyncio.sleep(delay_seconds)
        return self.calculate(origin, destination, mode, distance_km)
