"""Public entry points for the :mod:`trip_carbon` configuration loader."""

from __future__ import annotations

from trip_carbon.config_loader.models import (
    DEFAULT_EMISSION_FACTORS,
    CarbonCreditConfig,
    EmissionFactorTable,
    TripCarbonConfig,
)
from trip_carbon.config_loader.parsing import (
    apply_credit_overrides,
    apply_environment_overrides,
    apply_structured_overrides,
    environment_credit_overrides,
    structured_credit_overrides,
)
from trip_carbon.config_loader.sources import load_structured_config
from trip_carbon.settings import TripCarbonSettings, get_settings

__all__ = [
    "DEFAULT_EMISSION_FACTORS",
    "CarbonCreditConfig",
    "EmissionFactorTable",
    "TripCarbonConfig",
    "load_config",
]


def load_config(
    path: str | None = None, *, settings: TripCarbonSettings | None = None
) -> TripCarbonConfig:
    """Load configuration from defaults, environment and an optional file.

    Layers are applied in that order, so file values win over environment
    values. Carbon-credit fields from every layer are merged before the
    credit configuration is validated.

    Args:
        path: Optional explicit path to a configuration file. When omitted the
            loader inspects ``TRIP_CARBON_CONFIG_PATH`` and the default search
            locations.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`trip_carbon.settings.get_settings` is used.

    Returns:
        Fully populated :class:`TripCarbonConfig` instance.
    """

    env_settings = settings or get_settings()
    structured = load_structured_config(path, env_settings) or {}
    config = apply_environment_overrides(TripCarbonConfig(), env_settings)
    config = apply_structured_overrides(config, structured)
    return apply_credit_overrides(
        config,
        environment_credit_overrides(env_settings),
        structured_credit_overrides(structured),
    )
