from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from .errors import ConfigurationError


class ConditionCategory(str, Enum):
    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    MIST = "Mist"
    SMOKE = "Smoke"
    HAZE = "Haze"
    DUST = "Dust"
    FOG = "Fog"
    SAND = "Sand"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"
    CLEAR = "Clear"
    CLOUDS = "Clouds"

    @property
    def is_precipitation(self) -> bool:
        return self in PRECIPITATION


PRECIPITATION = frozenset({
    ConditionCategory.RAIN,
    ConditionCategory.SNOW,
    ConditionCategory.DRIZZLE,
    ConditionCategory.THUNDERSTORM,
})


class TemperatureUnits(str, Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"
    STANDARD = "standard"

    @classmethod
    def from_string(cls, s: str) -> TemperatureUnits:
        try:
            return cls(s.lower())
        except ValueError:
            raise ConfigurationError(f"Unrecognized temperature units: {s}") from None

    def as_char(self) -> str:
        return {"imperial": "F", "metric": "C", "standard": "K"}[self.value]


@dataclass(frozen=True)
class WeatherEntry:
    timestamp: datetime
    temperature: float
    condition: ConditionCategory


@dataclass(frozen=True)
class WeatherSnapshot:
    current: WeatherEntry
    hourly: tuple[WeatherEntry, ...]  # ascending by timestamp
    fetched_at: datetime
    units: TemperatureUnits = TemperatureUnits.IMPERIAL


# --- Precipitation lookahead ---

@dataclass(frozen=True)
class Start:
    at: datetime
    kind: ConditionCategory


@dataclass(frozen=True)
class Stop:
    at: datetime
    kind: ConditionCategory


@dataclass(frozen=True)
class NoChange:
    current: Optional[ConditionCategory]


PrecipitationChange = Union[Start, Stop, NoChange]


@dataclass(frozen=True)
class TemperatureAt:
    at: datetime
    temperature: float


@dataclass(frozen=True)
class HighLow:
    high: TemperatureAt
    low: TemperatureAt


# --- Weather freshness ---

@dataclass(frozen=True)
class Fresh:
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class Stale:
    last_success: datetime


@dataclass(frozen=True)
class NeverFetched:
    pass


Staleness = Union[Fresh, Stale, NeverFetched]
