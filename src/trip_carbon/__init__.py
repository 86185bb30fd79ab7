"""Trip Carbon - CO2 emission, mode comparison and carbon-credit estimates for trips."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "EmissionEngine",
    "RouteResolver",
    "RouteCatalog",
    "TripCalculator",
    "TransportMode",
    "ConfigurationError",
    "NotFoundError",
    "load_config",
]

if TYPE_CHECKING:
    from .config_loader import load_config
    from .engine import EmissionEngine
    from .errors import ConfigurationError, NotFoundError
    from .modes import TransportMode
    from .routes import RouteCatalog, RouteResolver
    from .trip import TripCalculator


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``import trip_carbon`` stays cheap."""

    module_map = {
        "EmissionEngine": "engine",
        "RouteResolver": "routes",
        "RouteCatalog": "routes",
        "TripCalculator": "trip",
        "TransportMode": "modes",
        "ConfigurationError": "errors",
        "NotFoundError": "errors",
        "load_config": "config_loader",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
