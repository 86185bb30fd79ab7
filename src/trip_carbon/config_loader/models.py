"""Typed configuration dataclasses for :mod:`trip_carbon.config_loader`."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from trip_carbon.errors import ConfigurationError

DEFAULT_EMISSION_FACTORS: Final[dict[str, float]] = {
    "bicycle": 0.0,
    "car": 0.12,
    "bus": 0.0089,
    "truck": 0.96,
}


def _finite_number(value: object, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{what} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ConfigurationError(f"{what} must be finite, got {value!r}")
    return number


@dataclass(frozen=True, slots=True, eq=False)
class EmissionFactorTable(Mapping[str, float]):
    """Read-only mapping of transport mode to kg CO2 per km.

    Iteration follows the insertion order of ``factors``; the emission ranking
    relies on it to break ties.
    """

    factors: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_EMISSION_FACTORS)
    )

    def __post_init__(self) -> None:
        if self.factors is None or not isinstance(self.factors, Mapping):
            raise ConfigurationError("Emission factor table is missing")
        if not self.factors:
            raise ConfigurationError("Emission factor table is empty")
        frozen: dict[str, float] = {}
        for mode, raw in self.factors.items():
            if not isinstance(mode, str) or not mode.strip():
                raise ConfigurationError(f"Invalid transport mode key {mode!r}")
            factor = _finite_number(raw, f"Emission factor for {mode!r}")
            if factor < 0:
                raise ConfigurationError(
                    f"Emission factor for {mode!r} must be non-negative, got {factor}"
                )
            frozen[mode] = factor
        object.__setattr__(self, "factors", MappingProxyType(frozen))

    def __getitem__(self, mode: str) -> float:
        return self.factors[mode]

    def __iter__(self) -> Iterator[str]:
        return iter(self.factors)

    def __len__(self) -> int:
        return len(self.factors)

    def factor_for(self, mode: str) -> float | None:
        """Return the factor for ``mode`` or ``None`` when it is not configured."""

        return self.factors.get(mode)


@dataclass(frozen=True, slots=True)
class CarbonCreditConfig:
    """Conversion from emitted mass to carbon credits and their price.

    Attributes:
        kg_per_credit: Kilograms of CO2 offset by one credit. Must be > 0.
        price_min_per_credit: Lowest market price of one credit.
        price_max_per_credit: Highest market price of one credit.
        currency: ISO currency code of the prices.
    """

    kg_per_credit: float = 1000.0
    price_min_per_credit: float = 50.0
    price_max_per_credit: float = 150.0
    currency: str = "BRL"

    def __post_init__(self) -> None:
        kg = _finite_number(self.kg_per_credit, "kg_per_credit")
        if kg <= 0:
            raise ConfigurationError(f"kg_per_credit must be positive, got {kg}")
        price_min = _finite_number(self.price_min_per_credit, "price_min_per_credit")
        price_max = _finite_number(self.price_max_per_credit, "price_max_per_credit")
        if price_min < 0 or price_max < 0:
            raise ConfigurationError("Credit prices must be non-negative")
        if price_min > price_max:
            raise ConfigurationError(
                f"price_min_per_credit ({price_min}) exceeds "
                f"price_max_per_credit ({price_max})"
            )
        object.__setattr__(self, "kg_per_credit", kg)
        object.__setattr__(self, "price_min_per_credit", price_min)
        object.__setattr__(self, "price_max_per_credit", price_max)


@dataclass(frozen=True, slots=True)
class TripCarbonConfig:
    """Strongly typed configuration container for trip calculations."""

    emission_factors: EmissionFactorTable = field(default_factory=EmissionFactorTable)
    credits: CarbonCreditConfig = field(default_factory=CarbonCreditConfig)
    routes_file: str | None = None
