from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class LightSensorType(str, Enum):
    TIME = "time"
    RANDOM = "random"
    RS485 = "rs485"


class LightSensor(ABC):
    """Domain-facing light sensor abstraction.

    Every implementation reports brightness normalized to [0, 1], so displays
    never see raw lux.
    """

    @property
    @abstractmethod
    def sensor_id(self) -> str:
        ...

    @abstractmethod
    def read_normalized(self) -> float:
        """Return brightness in [0, 1]. Raise SensorError on failure."""
        ...

    def close(self) -> None:
        pass
