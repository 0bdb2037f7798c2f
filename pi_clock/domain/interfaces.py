from __future__ import annotations
from datetime import datetime
from typing import Protocol, runtime_checkable
from .models import Staleness, WeatherSnapshot


@runtime_checkable
class WeatherFetcher(Protocol):
    def fetch(self) -> WeatherSnapshot:
        """Raise FetchError on transport, HTTP status or decode failure."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class LightSensor(Protocol):
    sensor_id: str

    def read_normalized(self) -> float:
        """Return brightness in [0, 1]. Raise SensorError on failure."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Display(Protocol):
    name: str

    def render(
        self,
        now: datetime,
        page_index: int,
        weather: Staleness,
        brightness: float,
    ) -> None:
        """Raise RenderError on failure."""
        ...

    def close(self) -> None:
        ...
