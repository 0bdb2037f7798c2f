from __future__ import annotations

from dataclasses import dataclass
import logging

from .base import LightSensor
from ..domain.brightness import normalize_lux
from ..domain.errors import SensorError
from ..drivers.rs485_modbus import RS485ModbusRTU

logger = logging.getLogger(__name__)


@dataclass
class LuxRegisterSpec:
    functioncode: int = 3  # 3=holding, 4=input
    address: int = 2
    count: int = 2
    scale: float = 0.001   # raw = (hi<<16)|lo, lux = raw/1000


class RS485LuxSensor(LightSensor):
    def __init__(
        self,
        driver: RS485ModbusRTU,
        min_lux: float,
        max_lux: float,
        spec: LuxRegisterSpec = LuxRegisterSpec(),
        sensor_id: str = "lux_rs485",
    ):
        self._driver = driver
        self._min_lux = min_lux
        self._max_lux = max_lux
        self._spec = spec
        self._sensor_id = sensor_id

    @property
    def sensor_id(self) -> str:
        return self._sensor_id

    def read_lux(self) -> float:
        try:
            regs = self._driver.read_registers(self._spec.functioncode, self._spec.address, self._spec.count)
        except Exception as e:
            raise SensorError(f"{self._sensor_id}: register read failed: {e}") from e

        if not regs:
            raise SensorError(f"{self._sensor_id}: no registers returned")

        # Combine registers into a single value (big-endian, hi word first)
        raw = 0
        for r in regs:
            raw = (raw << 16) | r

        lux = float(raw) * float(self._spec.scale)
        logger.debug("RS485 lux: regs=%s raw=%d scale=%s lux=%.3f", regs, raw, self._spec.scale, lux)
        return lux

    def read_normalized(self) -> float:
        return normalize_lux(self.read_lux(), self._min_lux, self._max_lux)

    def close(self) -> None:
        self._driver.close()
