"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import inspect
import os
import sys
from typing import Any

import pytest

# Ensure src/ is on sys.path so tests run against the src layout without install
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from trip_carbon.config_loader import CarbonCreditConfig  # noqa: E402
from trip_carbon.engine import EmissionEngine  # noqa: E402
from trip_carbon.models import RouteEntry  # noqa: E402
from trip_carbon.routes import RouteCatalog, RouteResolver  # noqa: E402
from trip_carbon.trip import TripCalculator  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "asyncio: mark test as requiring an event loop")


def pytest_pyfunc_call(pyfuncitem: Any) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames  # type: ignore[attr-defined]
        }

        event_loop = asyncio.new_event_loop()
        try:
            event_loop.run_until_complete(pyfuncitem.obj(**call_kwargs))
        finally:
            event_loop.close()
        return True
    return None


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host TRIP_CARBON_* variables from leaking into tests."""

    for key in list(os.environ):
        if key.startswith("TRIP_CARBON_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def factors() -> dict[str, float]:
    return {"car": 0.12, "bus": 0.0089, "bicycle": 0.0, "truck": 0.96}


@pytest.fixture
def engine(factors: dict[str, float]) -> EmissionEngine:
    return EmissionEngine(
        factors,
        CarbonCreditConfig(
            kg_per_credit=1000, price_min_per_credit=50, price_max_per_credit=150
        ),
    )


@pytest.fixture
def catalog() -> RouteCatalog:
    return RouteCatalog(
        (
            RouteEntry("São Paulo, SP", "Rio de Janeiro, RJ", 430.0),
            RouteEntry("São Paulo, SP", "Campinas, SP", 95.0),
            RouteEntry("Belo Horizonte, MG", "São Paulo, SP", 586.0),
            RouteEntry("Belém, PA", "Ananindeua, PA", 20.0),
        )
    )


@pytest.fixture
def resolver(catalog: RouteCatalog) -> RouteResolver:
    return RouteResolver(catalog)


@pytest.fixture
def calculator(resolver: RouteResolver, engine: EmissionEngine) -> TripCalculator:
    return TripCalculator(resolver, engine)
