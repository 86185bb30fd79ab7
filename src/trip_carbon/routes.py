"""Route catalog and bidirectional distance lookup.

The catalog is an ordered, immutable sequence of :class:`RouteEntry`. The
resolver compares location names after trimming and case-folding and treats
every entry as undirected.
"""

from __future__ import annotations

import json
import logging
import math
import pathlib
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from trip_carbon.collation import sort_locations
from trip_carbon.errors import ConfigurationError, NotFoundError
from trip_carbon.models import RouteEntry

LOGGER = logging.getLogger(__name__)

__all__ = [
    "RouteCatalog",
    "RouteResolver",
    "load_catalog_file",
    "load_default_catalog",
    "normalize_location",
]

_FALLBACK_ROUTES: Final[tuple[RouteEntry, ...]] = (
    RouteEntry("São Paulo, SP", "Rio de Janeiro, RJ", 430.0),
    RouteEntry("São Paulo, SP", "Brasília, DF", 1015.0),
    RouteEntry("Rio de Janeiro, RJ", "Brasília, DF", 1148.0),
)

_KEY_ALIASES: Final[tuple[tuple[str, str, str], ...]] = (
    ("location_a", "location_b", "distance_km"),
    ("origin", "destination", "DistanceKm"),
)


def normalize_location(name: object) -> str:
    """Return the comparison form of a location name (trimmed, case-folded)."""

    if name is None:
        return ""
    return str(name).strip().casefold()


def _entry_from_record(index: int, record: Mapping[str, object]) -> RouteEntry:
    for key_a, key_b, key_distance in _KEY_ALIASES:
        if key_a in record and key_b in record and key_distance in record:
            break
    else:
        raise ConfigurationError(f"Route #{index} is missing location or distance keys")

    location_a = record[key_a]
    location_b = record[key_b]
    if not isinstance(location_a, str) or not isinstance(location_b, str):
        raise ConfigurationError(f"Route #{index} locations must be strings")

    raw_distance = record[key_distance]
    if isinstance(raw_distance, bool) or not isinstance(raw_distance, (int, float)):
        raise ConfigurationError(f"Route #{index} distance must be a number")
    distance = float(raw_distance)
    if not math.isfinite(distance) or distance < 0:
        raise ConfigurationError(
            f"Route #{index} distance must be a non-negative number, got {raw_distance!r}"
        )
    return RouteEntry(location_a, location_b, distance)


@dataclass(frozen=True, slots=True)
class RouteCatalog(Sequence[RouteEntry]):
    """Immutable, insertion-ordered collection of known routes."""

    entries: tuple[RouteEntry, ...] = ()

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]]) -> RouteCatalog:
        """Build a catalog from plain mappings.

        Each record uses either ``location_a``/``location_b``/``distance_km``
        or ``origin``/``destination``/``DistanceKm`` keys.

        Raises:
            ConfigurationError: If a record is malformed.
        """

        entries = []
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise ConfigurationError(f"Route #{index} must be a mapping")
            entries.append(_entry_from_record(index, record))
        return cls(tuple(entries))

    def __getitem__(self, index):  # type: ignore[override]
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.entries)


def load_catalog_file(path: str | pathlib.Path) -> RouteCatalog:
    """Load a route catalog from a JSON array of route records.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or does not
            contain a list of route records.
    """

    file_path = pathlib.Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Routes file not found: {file_path}")
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Failed to parse routes file {file_path}") from exc
    if not isinstance(data, list):
        raise ConfigurationError(f"Routes file {file_path} must contain a JSON array")
    return RouteCatalog.from_records(data)


def load_default_catalog() -> RouteCatalog:
    """Return the route catalog packaged with trip_carbon."""

    try:
        import importlib.resources as resources

        data_text = (
            resources.files("trip_carbon.data")
            .joinpath("routes.json")
            .read_text(encoding="utf-8")
        )
    except (OSError, ModuleNotFoundError) as exc:  # pragma: no cover - broken install
        LOGGER.error("Failed to load packaged route catalog: %s", exc)
        return RouteCatalog(_FALLBACK_ROUTES)
    return RouteCatalog.from_records(json.loads(data_text))


class RouteResolver:
    """Look up distances between named locations in a :class:`RouteCatalog`."""

    def __init__(self, catalog: RouteCatalog | Iterable[RouteEntry]) -> None:
        if not isinstance(catalog, RouteCatalog):
            catalog = RouteCatalog(tuple(catalog))
        self._catalog = catalog

    @property
    def catalog(self) -> RouteCatalog:
        return self._catalog

    def find_distance(self, location_a: object, location_b: object) -> float | None:
        """Return the distance between two locations in either direction.

        Args:
            location_a: First location name.
            location_b: Second location name.

        Returns:
            Distance in kilometres of the first matching entry, or ``None``
            when either name is blank or no entry connects them.
        """

        a = normalize_location(location_a)
        b = normalize_location(location_b)
        if not a or not b:
            return None

        for entry in self._catalog:
            entry_a = normalize_location(entry.location_a)
            entry_b = normalize_location(entry.location_b)
            if (entry_a == a and entry_b == b) or (entry_a == b and entry_b == a):
                return entry.distance_km

        LOGGER.debug("No route between %r and %r", location_a, location_b)
        return None

    def require_distance(self, location_a: str, location_b: str) -> float:
        """Like :meth:`find_distance` but raise :class:`NotFoundError` on a miss."""

        distance = self.find_distance(location_a, location_b)
        if distance is None:
            raise NotFoundError(location_a, location_b)
        return distance

    def list_all_locations(self) -> list[str]:
        """Return every distinct endpoint, sorted ignoring case and accents."""

        seen: dict[str, None] = {}
        for entry in self._catalog:
            for name in (entry.location_a, entry.location_b):
                trimmed = name.strip()
                if trimmed:
                    seen.setdefault(trimmed, None)
        return sort_locations(seen)
