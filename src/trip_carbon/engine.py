"""Emission, comparison and carbon-credit calculations for a trip distance."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from trip_carbon.config_loader.models import CarbonCreditConfig, EmissionFactorTable
from trip_carbon.errors import ConfigurationError
from trip_carbon.models import CreditEstimate, CreditPrice, ModeEmission, SavingsResult
from trip_carbon.modes import BASELINE_MODE, TransportMode
from trip_carbon.rounding import round_half_up
from trip_carbon.validation import coerce_distance, coerce_number

_LOGGER = logging.getLogger("trip_carbon.engine")

__all__ = ["EmissionEngine"]

KG_DECIMALS = 2
PERCENT_DECIMALS = 2
CREDIT_DECIMALS = 4
PRICE_DECIMALS = 2


def _percentage(numerator: float, denominator: float) -> float | None:
    if denominator == 0:
        return None
    return round_half_up((numerator / denominator) * 100, PERCENT_DECIMALS)


class EmissionEngine:
    """Stateless calculator over an emission factor table and credit settings.

    Args:
        factors: Mode to kg CO2/km mapping. Plain mappings are validated into
            an :class:`EmissionFactorTable`.
        credit_config: Credit conversion settings; defaults to
            :class:`CarbonCreditConfig` defaults.
        baseline_mode: Mode used as the 100 % reference in comparisons.

    Raises:
        ConfigurationError: If the factor table is missing, empty or invalid.
    """

    def __init__(
        self,
        factors: EmissionFactorTable | Mapping[str, float] | None,
        credit_config: CarbonCreditConfig | None = None,
        *,
        baseline_mode: str | TransportMode = BASELINE_MODE,
    ) -> None:
        if factors is None:
            raise ConfigurationError("Emission factor table is missing")
        if not isinstance(factors, EmissionFactorTable):
            factors = EmissionFactorTable(factors=factors)
        if credit_config is not None and not isinstance(
            credit_config, CarbonCreditConfig
        ):
            raise ConfigurationError(
                f"credit_config must be a CarbonCreditConfig, got {type(credit_config).__name__}"
            )
        self._factors = factors
        self._credits = credit_config or CarbonCreditConfig()
        self._baseline_mode = (
            baseline_mode.value
            if isinstance(baseline_mode, TransportMode)
            else str(baseline_mode)
        )

    @property
    def factors(self) -> EmissionFactorTable:
        return self._factors

    @property
    def credit_config(self) -> CarbonCreditConfig:
        return self._credits

    @property
    def baseline_mode(self) -> str:
        return self._baseline_mode

    def calculate_emission(self, distance_km: object, mode: str | TransportMode) -> float:
        """Return the emission in kg CO2 of travelling ``distance_km`` by ``mode``.

        Unknown modes use a factor of zero. Negative or non-numeric distances
        are treated as zero.

        Returns:
            Emission rounded half-up to two decimals.
        """

        mode_key = mode.value if isinstance(mode, TransportMode) else str(mode)
        factor = self._factors.factor_for(mode_key)
        if factor is None:
            _LOGGER.debug("Unknown transport mode %r; using factor 0", mode_key)
            factor = 0.0
        distance = coerce_distance(distance_km)
        return round_half_up(distance * factor, KG_DECIMALS)

    def calculate_all_modes(self, distance_km: object) -> list[ModeEmission]:
        """Return the emission of every configured mode, lowest first.

        Each entry carries its emission as a percentage of the baseline mode's
        emission, or ``None`` when the baseline emits nothing. Equal emissions
        keep the factor table order.
        """

        baseline = self.calculate_emission(distance_km, self._baseline_mode)
        results: list[ModeEmission] = []
        for mode in self._factors:
            emission = self.calculate_emission(distance_km, mode)
            results.append(
                ModeEmission(
                    mode=mode,
                    emission_kg=emission,
                    percentage_vs_baseline=_percentage(emission, baseline),
                )
            )
        # list.sort is stable: ties keep factor table order
        results.sort(key=lambda entry: entry.emission_kg)
        return results

    def calculate_saving(self, emission: object, baseline_emission: object) -> SavingsResult:
        """Compare ``emission`` against ``baseline_emission``.

        A negative ``saved_kg`` means the chosen mode emits more than the
        baseline. ``percentage`` is ``None`` when the baseline is zero.
        """

        e = coerce_number(emission)
        b = coerce_number(baseline_emission)
        saved = round_half_up(b - e, KG_DECIMALS)
        return SavingsResult(saved_kg=saved, percentage=_percentage(saved, b))

    def calculate_carbon_credits(self, emission_kg: object) -> float:
        """Return the credits needed to offset ``emission_kg``, to four decimals."""

        kg = coerce_number(emission_kg)
        return round_half_up(kg / self._credits.kg_per_credit, CREDIT_DECIMALS)

    def estimate_credit_price(self, credits: object) -> CreditPrice:
        """Return the minimum, maximum and average price of ``credits``."""

        c = coerce_number(credits)
        low = c * self._credits.price_min_per_credit
        high = c * self._credits.price_max_per_credit
        average = (low + high) / 2
        return CreditPrice(
            min=round_half_up(low, PRICE_DECIMALS),
            max=round_half_up(high, PRICE_DECIMALS),
            average=round_half_up(average, PRICE_DECIMALS),
        )

    def estimate_credits(self, emission_kg: object) -> CreditEstimate:
        """Convert ``emission_kg`` into credits and price them."""

        credits = self.calculate_carbon_credits(emission_kg)
        return CreditEstimate.from_price(credits, self.estimate_credit_price(credits))
