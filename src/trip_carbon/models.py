"""Value objects produced and consumed by the trip emission pipeline.

Everything here is derived data: instances are recomputed on every query and
never persisted. Use ``to_dict()`` for JSON-ready output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypedDict

from trip_carbon.modes import MODE_INFO, TransportMode

DistanceSource = Literal["catalog", "manual"]


class ModeEmissionDict(TypedDict):
    mode: str
    emission_kg: float
    percentage_vs_baseline: float | None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """Undirected route between two named locations."""

    location_a: str
    location_b: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class ModeEmission:
    """Emission of one mode for a given distance, relative to the baseline."""

    mode: str
    emission_kg: float
    percentage_vs_baseline: float | None

    def to_dict(self) -> ModeEmissionDict:
        return {
            "mode": self.mode,
            "emission_kg": self.emission_kg,
            "percentage_vs_baseline": self.percentage_vs_baseline,
        }


@dataclass(frozen=True, slots=True)
class SavingsResult:
    """Kilograms saved versus the baseline; negative when the mode emits more."""

    saved_kg: float
    percentage: float | None

    def to_dict(self) -> dict[str, float | None]:
        return {"saved_kg": self.saved_kg, "percentage": self.percentage}


@dataclass(frozen=True, slots=True)
class CreditPrice:
    """Price range for a number of carbon credits."""

    min: float
    max: float
    average: float

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max, "average": self.average}


@dataclass(frozen=True, slots=True)
class CreditEstimate:
    """Carbon credits needed to offset an emission, with their price range."""

    credits: float
    price_min: float
    price_max: float
    price_average: float

    @classmethod
    def from_price(cls, credits: float, price: CreditPrice) -> CreditEstimate:
        return cls(
            credits=credits,
            price_min=price.min,
            price_max=price.max,
            price_average=price.average,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "credits": self.credits,
            "price_min": self.price_min,
            "price_max": self.price_max,
            "price_average": self.price_average,
        }


@dataclass(frozen=True, slots=True)
class TripEstimate:
    """Complete result of a trip calculation.

    Attributes:
        origin: Origin as entered by the caller (trimmed).
        destination: Destination as entered by the caller (trimmed).
        distance_km: Distance used for every figure below.
        distance_source: ``"catalog"`` when resolved from the route catalog,
            ``"manual"`` when supplied by the caller.
        mode: Chosen transport mode identifier.
        emission_kg: Emission of the chosen mode.
        baseline_emission_kg: Emission of the baseline mode (car).
        savings: Savings of the chosen mode versus the baseline.
        comparison: Every configured mode ranked by emission.
        credits: Credits and price range offsetting ``emission_kg``.
    """

    origin: str
    destination: str
    distance_km: float
    distance_source: DistanceSource
    mode: str
    emission_kg: float
    baseline_emission_kg: float
    savings: SavingsResult
    comparison: tuple[ModeEmission, ...]
    credits: CreditEstimate

    @property
    def mode_label(self) -> str:
        info = MODE_INFO.get(TransportMode.parse(self.mode))
        return info.label if info is not None else self.mode

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-ready mapping of the estimate."""

        return {
            "origin": self.origin,
            "destination": self.destination,
            "distance_km": self.distance_km,
            "distance_source": self.distance_source,
            "mode": self.mode,
            "mode_label": self.mode_label,
            "emission_kg": self.emission_kg,
            "baseline_emission_kg": self.baseline_emission_kg,
            "savings": self.savings.to_dict(),
            "comparison": [entry.to_dict() for entry in self.comparison],
            "credits": self.credits.to_dict(),
        }
