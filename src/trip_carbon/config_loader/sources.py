"""Configuration source utilities for :mod:`trip_carbon.config_loader`."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, TextIO, cast

from trip_carbon.errors import ConfigurationError
from trip_carbon.settings import TripCarbonSettings

_DEFAULT_CANDIDATES: tuple[Path, ...] = (
    Path("config/trip_carbon.yml"),
    Path("config/trip_carbon.yaml"),
    Path("config/trip_carbon.json"),
)


class YamlModule(Protocol):
    """Protocol describing the subset of PyYAML used by the loader."""

    YAMLError: type[Exception]

    def safe_load(self, stream: TextIO | str) -> object:
        """Parse YAML content from a text stream or string."""


def load_structured_config(
    path: str | None, settings: TripCarbonSettings
) -> dict[str, object] | None:
    """Load configuration data from disk.

    An explicit ``path`` (argument or ``TRIP_CARBON_CONFIG_PATH``) must exist
    and parse; the default candidates are only probed.

    Args:
        path: Explicit configuration path provided by the caller.
        settings: Environment-derived settings used for fallback discovery.

    Returns:
        A dictionary representation of the configuration file when discovered,
        otherwise ``None``.

    Raises:
        ConfigurationError: If an explicitly requested file is missing or
            cannot be parsed into a mapping.
    """

    explicit = path or settings.config_path
    if explicit:
        candidate = Path(explicit)
        if not candidate.exists():
            raise ConfigurationError(f"Configuration file not found: {candidate}")
        data = _load_config_file(candidate)
        if data is None:
            raise ConfigurationError(f"Unreadable configuration file: {candidate}")
        return data

    candidates: Iterable[Path] = _DEFAULT_CANDIDATES
    for candidate in candidates:
        if not candidate.exists():
            continue
        data = _load_config_file(candidate)
        if data is not None:
            return data
    return None


def _load_config_file(path: Path) -> dict[str, object] | None:
    """Load a configuration file based on suffix heuristics."""

    suffix = path.suffix.lower()
    if suffix == ".json":
        return _load_json(path)
    if suffix in {".yml", ".yaml"}:
        return _load_yaml(path)
    return None


def _load_json(path: Path) -> dict[str, object] | None:
    """Load JSON configuration from ``path``.

    Args:
        path: JSON file path.

    Returns:
        Parsed mapping when the file is valid JSON, otherwise ``None``.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return _normalize_mapping(data)


def _load_yaml(path: Path) -> dict[str, object] | None:
    """Load YAML configuration from ``path`` when PyYAML is available."""

    module = _import_yaml_module()
    if module is None:
        raise ConfigurationError(
            f"PyYAML is required to read {path}; install trip-carbon[yaml]"
        )
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = module.safe_load(handle)
    except (OSError, UnicodeDecodeError):
        return None
    except module.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    return _normalize_mapping(data)


def _import_yaml_module() -> YamlModule | None:
    """Import PyYAML lazily to avoid a hard dependency.

    Returns:
        The imported PyYAML module when available, otherwise ``None``.
    """

    try:
        import yaml
    except ModuleNotFoundError:
        return None
    return cast(YamlModule, yaml)


def _normalize_mapping(value: object) -> dict[str, object] | None:
    """Normalize potential mapping values to ``dict[str, object]``."""

    if not isinstance(value, dict):
        return None
    value_dict = cast(dict[object, object], value)
    normalized: dict[str, object] = {}
    for key_obj, item in value_dict.items():
        if not isinstance(key_obj, str):
            continue
        normalized[key_obj] = item
    return normalized
