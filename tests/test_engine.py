"""Tests for EmissionEngine calculations."""

from decimal import Decimal
from fractions import Fraction

import pytest

from trip_carbon.config_loader import CarbonCreditConfig, EmissionFactorTable
from trip_carbon.engine import EmissionEngine
from trip_carbon.errors import ConfigurationError
from trip_carbon.models import CreditEstimate, CreditPrice, ModeEmission, SavingsResult
from trip_carbon.modes import TransportMode


def test_calculate_emission_car_100km(engine):
    """100 km by car at 0.12 kg/km emits 12 kg."""
    assert engine.calculate_emission(100, "car") == 12.0
    assert engine.calculate_emission(100, TransportMode.CAR) == 12.0


def test_calculate_emission_rounds_to_two_decimals(engine):
    """Results are rounded half-up at the second decimal."""
    assert engine.calculate_emission(430, "bus") == 3.83
    assert engine.calculate_emission(0.5, "bus") == 0.0
    assert engine.calculate_emission(12.5, "car") == 1.5


def test_calculate_emission_zero_distance(engine, factors):
    """Zero distance emits nothing in every mode."""
    for mode in factors:
        assert engine.calculate_emission(0, mode) == 0.0


def test_calculate_emission_unknown_mode_is_zero(engine):
    """Modes missing from the factor table use a zero factor."""
    assert engine.calculate_emission(100, "rocket") == 0.0
    assert engine.calculate_emission(100, TransportMode.UNKNOWN) == 0.0


@pytest.mark.parametrize("distance", [-100, "not a number", None, float("nan")])
def test_calculate_emission_coerces_bad_distance(engine, distance):
    """Negative and non-numeric distances are treated as zero."""
    assert engine.calculate_emission(distance, "truck") == 0.0


def test_calculate_emission_accepts_numeric_string(engine):
    """Numeric strings are parsed like numbers."""
    assert engine.calculate_emission("100", "truck") == 96.0


@pytest.mark.parametrize("distance", [Decimal("100"), Decimal("100.00"), Fraction(100)])
def test_calculate_emission_accepts_real_numbers(engine, distance):
    """Decimal and Fraction distances are used, not coerced to zero."""
    assert engine.calculate_emission(distance, "car") == 12.0


def test_calculate_emission_huge_distance(engine):
    """Distances past the default decimal precision still produce a result."""
    assert engine.calculate_emission(1e27, "car") == pytest.approx(1.2e26)
    assert engine.calculate_emission(1e30, "car") == pytest.approx(1.2e29)
    results = engine.calculate_all_modes(1e30)
    assert [entry.mode for entry in results] == ["bicycle", "bus", "car", "truck"]
    assert results[2].percentage_vs_baseline == 100.0


def test_credits_for_huge_emission(engine):
    """Credit conversion and pricing handle very large emissions."""
    assert engine.calculate_carbon_credits(1e31) == pytest.approx(1e28)
    price = engine.estimate_credit_price(1e28)
    assert price.min == pytest.approx(5e29)
    assert price.max == pytest.approx(1.5e30)
    assert price.average == pytest.approx(1e30)


def test_calculate_all_modes_ranking(engine):
    """All modes are ranked by emission with car as the 100 % baseline."""
    results = engine.calculate_all_modes(100)
    assert results == [
        ModeEmission("bicycle", 0.0, 0.0),
        ModeEmission("bus", 0.89, 7.42),
        ModeEmission("car", 12.0, 100.0),
        ModeEmission("truck", 96.0, 800.0),
    ]


def test_calculate_all_modes_zero_baseline(engine, factors):
    """Percentages are None when the baseline emits nothing."""
    results = engine.calculate_all_modes(0)
    assert len(results) == len(factors)
    assert all(entry.percentage_vs_baseline is None for entry in results)
    assert all(entry.emission_kg == 0.0 for entry in results)


def test_calculate_all_modes_ties_keep_table_order():
    """Modes with equal emissions stay in factor table order."""
    engine = EmissionEngine({"walk": 0.0, "car": 0.1, "bicycle": 0.0, "scooter": 0.1})
    modes = [entry.mode for entry in engine.calculate_all_modes(10)]
    assert modes == ["walk", "bicycle", "car", "scooter"]


def test_calculate_all_modes_without_car():
    """A table without the baseline mode yields no percentages."""
    engine = EmissionEngine({"bus": 0.05, "train": 0.03})
    results = engine.calculate_all_modes(100)
    assert [entry.mode for entry in results] == ["train", "bus"]
    assert all(entry.percentage_vs_baseline is None for entry in results)


def test_custom_baseline_mode():
    """The baseline mode can be changed at construction."""
    engine = EmissionEngine({"bus": 0.05, "train": 0.025}, baseline_mode="bus")
    results = {entry.mode: entry for entry in engine.calculate_all_modes(100)}
    assert results["bus"].percentage_vs_baseline == 100.0
    assert results["train"].percentage_vs_baseline == 50.0


@pytest.mark.parametrize(
    ("emission", "baseline", "expected"),
    [
        (0.89, 12.0, SavingsResult(11.11, 92.58)),
        (2, 12, SavingsResult(10.0, 83.33)),
        (12.0, 12.0, SavingsResult(0.0, 0.0)),
        (96.0, 12.0, SavingsResult(-84.0, -700.0)),
        (5.0, 0, SavingsResult(-5.0, None)),
        (0, 0, SavingsResult(0.0, None)),
    ],
)
def test_calculate_saving(engine, emission, baseline, expected):
    """Savings are baseline minus emission; negative means more emissions."""
    assert engine.calculate_saving(emission, baseline) == expected


def test_calculate_carbon_credits(engine):
    """12 kg at 1000 kg per credit is 0.012 credits."""
    assert engine.calculate_carbon_credits(12.0) == 0.012
    assert engine.calculate_carbon_credits(0) == 0.0
    assert engine.calculate_carbon_credits(0.06) == 0.0001
    assert engine.calculate_carbon_credits(1234.56789) == 1.2346


def test_estimate_credit_price(engine):
    """Prices scale with the configured per-credit range."""
    assert engine.estimate_credit_price(0.012) == CreditPrice(0.6, 1.8, 1.2)
    assert engine.estimate_credit_price(0) == CreditPrice(0.0, 0.0, 0.0)


def test_estimate_credits_composes_credit_and_price(engine):
    """estimate_credits chains credit conversion and pricing."""
    assert engine.estimate_credits(12.0) == CreditEstimate(0.012, 0.6, 1.8, 1.2)


def test_engine_rejects_missing_factor_table():
    """A missing or empty factor table is a configuration error."""
    with pytest.raises(ConfigurationError):
        EmissionEngine(None)
    with pytest.raises(ConfigurationError):
        EmissionEngine({})


@pytest.mark.parametrize("bad", [{"car": -0.1}, {"car": "0.12"}, {"car": float("inf")}])
def test_engine_rejects_invalid_factors(bad):
    """Negative, non-numeric and non-finite factors are rejected."""
    with pytest.raises(ConfigurationError):
        EmissionEngine(bad)


def test_engine_rejects_foreign_credit_config():
    """Credit configuration must be a CarbonCreditConfig."""
    with pytest.raises(ConfigurationError):
        EmissionEngine({"car": 0.12}, {"kg_per_credit": 1000})  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kg_per_credit": 0},
        {"kg_per_credit": -1000},
        {"price_min_per_credit": -1},
        {"price_min_per_credit": 200, "price_max_per_credit": 100},
    ],
)
def test_credit_config_validation(kwargs):
    """Zero or negative kg_per_credit and inverted prices fail fast."""
    with pytest.raises(ConfigurationError):
        CarbonCreditConfig(**kwargs)


def test_factor_table_is_read_only(factors):
    """The engine's factor table cannot be mutated after construction."""
    engine = EmissionEngine(EmissionFactorTable(factors))
    with pytest.raises(TypeError):
        engine.factors.factors["car"] = 1.0  # type: ignore[index]
    factors["car"] = 1.0
    assert engine.calculate_emission(100, "car") == 12.0


def test_engine_is_stateless(engine):
    """Repeated calls return identical results."""
    first = engine.calculate_all_modes(250)
    engine.calculate_emission(999, "truck")
    assert engine.calculate_all_modes(250) == first
