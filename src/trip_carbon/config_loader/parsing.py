"""Parsing and transformation helpers for :mod:`trip_carbon.config_loader`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import cast

from trip_carbon.config_loader.models import (
    CarbonCreditConfig,
    EmissionFactorTable,
    TripCarbonConfig,
)
from trip_carbon.errors import ConfigurationError
from trip_carbon.settings import TripCarbonSettings

_CREDIT_KEYS: tuple[str, ...] = (
    "kg_per_credit",
    "price_min_per_credit",
    "price_max_per_credit",
)


def environment_credit_overrides(settings: TripCarbonSettings) -> dict[str, object]:
    """Collect the carbon-credit fields set through the environment."""

    overrides: dict[str, object] = {}
    for key in _CREDIT_KEYS:
        value = getattr(settings, key)
        if value is not None:
            overrides[key] = value
    return overrides


def structured_credit_overrides(data: Mapping[str, object]) -> dict[str, object]:
    """Collect the carbon-credit fields of a parsed configuration file.

    Raises:
        ConfigurationError: If the ``carbon_credit`` section is not a mapping
            or its currency is not a non-empty string.
    """

    if "carbon_credit" not in data:
        return {}
    section = _expect_mapping(data["carbon_credit"], "carbon_credit")
    overrides: dict[str, object] = {}
    for key in _CREDIT_KEYS:
        if key in section:
            overrides[key] = section[key]
    currency = section.get("currency")
    if currency is not None:
        if not isinstance(currency, str) or not currency.strip():
            raise ConfigurationError("carbon_credit.currency must be a string")
        overrides["currency"] = currency.strip().upper()
    return overrides


def apply_credit_overrides(
    config: TripCarbonConfig, *layers: Mapping[str, object]
) -> TripCarbonConfig:
    """Merge credit override layers, later layers winning, and validate once.

    The merged fields are validated together, so a price minimum raised in
    one layer may rely on a price maximum raised in another.

    Raises:
        ConfigurationError: If the merged credit configuration is invalid.
    """

    merged: dict[str, object] = {}
    for layer in layers:
        merged.update(layer)
    if not merged:
        return config
    credits: CarbonCreditConfig = replace(config.credits, **merged)
    return replace(config, credits=credits)


def apply_environment_overrides(
    config: TripCarbonConfig, settings: TripCarbonSettings
) -> TripCarbonConfig:
    """Apply the non-credit environment overrides to the configuration.

    Credit fields are merged separately through :func:`apply_credit_overrides`.

    Args:
        config: Base configuration instance.
        settings: Environment-derived settings.

    Returns:
        Configuration with environment overrides applied.
    """

    if settings.routes_file:
        return replace(config, routes_file=settings.routes_file)
    return config


def apply_structured_overrides(
    config: TripCarbonConfig, data: Mapping[str, object]
) -> TripCarbonConfig:
    """Apply the non-credit overrides sourced from structured configuration data.

    Recognised sections are ``emission_factors`` (replaces the whole table)
    and the scalar ``routes_file``. The ``carbon_credit`` section is read by
    :func:`structured_credit_overrides`.

    Args:
        config: Base configuration instance.
        data: Mapping parsed from configuration file.

    Returns:
        Configuration updated according to the provided mapping.

    Raises:
        ConfigurationError: If a section has the wrong shape or invalid values.
    """

    updated = config

    if "emission_factors" in data:
        factors_section = _expect_mapping(data["emission_factors"], "emission_factors")
        updated = replace(
            updated,
            emission_factors=EmissionFactorTable(
                factors={str(key): value for key, value in factors_section.items()}
            ),
        )

    routes_file = data.get("routes_file")
    if routes_file is not None:
        if not isinstance(routes_file, str) or not routes_file.strip():
            raise ConfigurationError("routes_file must be a non-empty string")
        updated = replace(updated, routes_file=routes_file)

    return updated


def _expect_mapping(value: object, section: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Section {section!r} must be a mapping")
    return cast(Mapping[str, object], value)
