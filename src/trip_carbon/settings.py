"""Environment-backed settings primitives for :mod:`trip_carbon`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["TripCarbonSettings", "get_settings"]


class TripCarbonSettings(BaseSettings):
    """Expose environment-derived configuration knobs for trip_carbon.

    All environment access goes through this class. Every attribute maps to a
    documented environment variable and defaults to ``None`` (or an inline
    default) when the variable is absent.

    Attributes:
        config_path: Explicit path to the JSON/YAML configuration file.
        routes_file: JSON file replacing the packaged route catalog.
        kg_per_credit: Kilograms of CO2 represented by one carbon credit.
        price_min_per_credit: Lower bound of the price of one credit.
        price_max_per_credit: Upper bound of the price of one credit.
        log_level: Logging level name used by the command-line interface.
    """

    config_path: str | None = Field(default=None, alias="TRIP_CARBON_CONFIG_PATH")
    routes_file: str | None = Field(default=None, alias="TRIP_CARBON_ROUTES_FILE")
    kg_per_credit: float | None = Field(
        default=None, alias="TRIP_CARBON_KG_PER_CREDIT"
    )
    price_min_per_credit: float | None = Field(
        default=None, alias="TRIP_CARBON_PRICE_MIN"
    )
    price_max_per_credit: float | None = Field(
        default=None, alias="TRIP_CARBON_PRICE_MAX"
    )
    log_level: str = Field(default="WARNING", alias="TRIP_CARBON_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator(
        "kg_per_credit",
        "price_min_per_credit",
        "price_max_per_credit",
        mode="before",
    )
    @classmethod
    def _parse_optional_float(cls, value: object) -> float | None:
        """Parse optional float fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed float when conversion succeeds, otherwise ``None``.
        """

        if value is None:
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return None
        return None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return "WARNING"
        return value.strip().upper()


def get_settings() -> TripCarbonSettings:
    """Return a :class:`TripCarbonSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return TripCarbonSettings()
