"""Tests for the serialised trip estimate schema."""

import pytest
from pydantic import ValidationError

from trip_carbon.schemas import CURRENT_SCHEMA_VERSION, TripEstimateRecord


def test_record_from_estimate(calculator):
    """Records carry the schema version and the credit currency."""
    estimate = calculator.calculate("São Paulo, SP", "Campinas, SP", "truck")
    record = TripEstimateRecord.from_estimate(estimate, currency="EUR")

    data = record.model_dump_json_ready()
    assert data["schema_version"] == CURRENT_SCHEMA_VERSION
    assert data["emission_kg"] == 91.2
    assert data["savings"]["saved_kg"] == -79.8
    assert data["credits"]["currency"] == "EUR"
    assert len(data["comparison"]) == 4


def test_record_is_frozen(calculator):
    """Records are immutable."""
    record = TripEstimateRecord.from_estimate(
        calculator.calculate("São Paulo, SP", "Campinas, SP", "car")
    )
    with pytest.raises(ValidationError):
        record.emission_kg = 1.0  # type: ignore[misc]


def test_record_rejects_invalid_payload(calculator):
    """Extra fields and non-positive distances fail validation."""
    payload = calculator.calculate("São Paulo, SP", "Campinas, SP", "car").to_dict()

    with pytest.raises(ValidationError):
        TripEstimateRecord.model_validate({**payload, "unexpected": True})
    with pytest.raises(ValidationError):
        TripEstimateRecord.model_validate({**payload, "distance_km": 0})
