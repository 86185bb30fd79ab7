"""Pydantic models describing the public trip estimate schema."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from trip_carbon.models import TripEstimate

SchemaVersionLiteral = Literal["0.1.0"]
CURRENT_SCHEMA_VERSION: SchemaVersionLiteral = "0.1.0"


class ModeEmissionRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: str = Field(..., min_length=1)
    emission_kg: float = Field(..., ge=0.0)
    percentage_vs_baseline: float | None = Field(default=None, ge=0.0)


class SavingsRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    saved_kg: float = Field(
        ..., description="Negative when the chosen mode emits more than the baseline."
    )
    percentage: float | None = None


class CreditRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    credits: float = Field(..., ge=0.0)
    price_min: float = Field(..., ge=0.0)
    price_max: float = Field(..., ge=0.0)
    price_average: float = Field(..., ge=0.0)
    currency: str = Field(default="BRL", min_length=3, max_length=3)


class TripEstimateRecord(BaseModel):
    """Immutable, versioned schema for a serialised trip estimate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["trip_carbon"] = Field(
        default="trip_carbon",
        description="Canonical namespace for trip estimate records.",
    )
    schema_version: SchemaVersionLiteral = Field(default=CURRENT_SCHEMA_VERSION)

    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    distance_km: float = Field(..., gt=0.0)
    distance_source: Literal["catalog", "manual"]
    mode: str = Field(..., min_length=1)
    mode_label: str
    emission_kg: float = Field(..., ge=0.0)
    baseline_emission_kg: float = Field(..., ge=0.0)
    savings: SavingsRecord
    comparison: list[ModeEmissionRecord]
    credits: CreditRecord

    @classmethod
    def from_estimate(
        cls, estimate: TripEstimate, *, currency: str = "BRL"
    ) -> TripEstimateRecord:
        payload = estimate.to_dict()
        payload["credits"] = {**estimate.credits.to_dict(), "currency": currency}
        return cls.model_validate(payload)

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return a JSON-serialisable payload."""

        return self.model_dump(mode="json")
