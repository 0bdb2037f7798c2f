from __future__ import annotations

import random
from threading import Lock
from typing import Optional

from .base import LightSensor
from ..domain.brightness import normalize_lux


class RandomLightSensor(LightSensor):
    """Development sensor returning uniformly random lux between the configured bounds."""

    def __init__(
        self,
        min_lux: float,
        max_lux: float,
        rng: Optional[random.Random] = None,
        sensor_id: str = "light_random",
    ):
        self._min_lux = min_lux
        self._max_lux = max_lux
        self._rng = rng or random.Random()
        self._lock = Lock()
        self._sensor_id = sensor_id

    @property
    def sensor_id(self) -> str:
        return self._sensor_id

    def read_normalized(self) -> float:
        with self._lock:
            lux = self._rng.uniform(self._min_lux, self._max_lux)
        return normalize_lux(lux, self._min_lux, self._max_lux)
