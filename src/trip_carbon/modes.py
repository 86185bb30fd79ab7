"""Transport modes known to the calculator and their display metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

__all__ = ["TransportMode", "ModeInfo", "MODE_INFO", "BASELINE_MODE"]


class TransportMode(str, Enum):
    """Closed set of transport modes with an explicit unknown member."""

    BICYCLE = "bicycle"
    CAR = "car"
    BUS = "bus"
    TRUCK = "truck"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | TransportMode) -> TransportMode:
        """Return the member for ``value``; unrecognised identifiers map to ``UNKNOWN``."""

        if isinstance(value, TransportMode):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized and member is not cls.UNKNOWN:
                return member
        return cls.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self is not TransportMode.UNKNOWN


BASELINE_MODE: Final[TransportMode] = TransportMode.CAR


@dataclass(frozen=True, slots=True)
class ModeInfo:
    """Human-facing description of a transport mode."""

    label: str
    icon: str
    color: str


MODE_INFO: Final[dict[TransportMode, ModeInfo]] = {
    TransportMode.BICYCLE: ModeInfo("Bicicleta", "🚲", "#10b681"),
    TransportMode.CAR: ModeInfo("Carro", "🚗", "#059669"),
    TransportMode.BUS: ModeInfo("Ônibus", "🚌", "#34d399"),
    TransportMode.TRUCK: ModeInfo("Caminhão", "🚛", "#0ea5a4"),
}
