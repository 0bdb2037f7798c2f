from __future__ import annotations

from datetime import datetime
from typing import Callable

from .base import LightSensor
from ..core.timeutil import now_local
from ..domain.brightness import BrightnessCurveConfig, brightness_for_time


class TimeLightSensor(LightSensor):
    """Synthetic sensor: brightness follows the day/night curve of the local clock."""

    def __init__(
        self,
        curve: BrightnessCurveConfig,
        clock: Callable[[], datetime] = now_local,
        sensor_id: str = "light_time",
    ):
        self._curve = curve
        self._clock = clock
        self._sensor_id = sensor_id

    @property
    def sensor_id(self) -> str:
        return self._sensor_id

    def read_normalized(self) -> float:
        return brightness_for_time(self._clock().time(), self._curve)
