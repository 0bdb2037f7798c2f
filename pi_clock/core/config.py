from __future__ import annotations

from datetime import time, timedelta
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.brightness import BrightnessCurveConfig
from ..domain.models import TemperatureUnits


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Pi Clock"
    timezone: str = "America/Los_Angeles"

    # OpenWeather
    open_weather_api_key: str = ""
    lat: float = 0.0
    lon: float = 0.0
    units: str = "imperial"
    # Full request URI; overrides key/lat/lon/units when set
    weather_uri: Optional[str] = None

    # Weather polling
    poll_interval_seconds: float = Field(default=60.0, gt=0)
    fetch_timeout_seconds: float = Field(default=0.5, gt=0)
    staleness_multiplier: float = Field(default=3.0, ge=1)

    # Render loop
    tick_seconds: float = Field(default=1.0, gt=0)
    page_duration_seconds: int = Field(default=3, ge=1)
    page_count: int = Field(default=3, ge=1, le=3)

    # Output: one or more of "console16x2", "console20x4"
    displays: list[str] = ["console16x2"]

    # Light sensor: "time", "random" or "rs485"
    light_sensor: Literal["time", "random", "rs485"] = "time"

    # Brightness curve (local time); min window crosses midnight
    max_lux_start_time: time = time(8, 0)
    max_lux_end_time: time = time(19, 0)
    min_lux_start_time: time = time(23, 0)
    min_lux_end_time: time = time(7, 0)
    min_lux: float = 1.0
    max_lux: float = 50.0

    # RS485 / Modbus RTU
    rs485_port: str = "/dev/ttyUSB0"
    rs485_baudrate: int = 9600
    rs485_slave_id: int = 1

    # Lux register definition
    lux_functioncode: int = 3             # 3=holding, 4=input
    lux_register_address: int = 2
    lux_register_count: int = 2
    lux_scale: float = 0.001              # raw = (hi<<16)|lo, lux = raw/1000

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "pi_clock.log"

    @property
    def tick_interval(self) -> timedelta:
        return timedelta(seconds=self.tick_seconds)

    @property
    def poll_interval(self) -> timedelta:
        return timedelta(seconds=self.poll_interval_seconds)

    @property
    def stale_after(self) -> timedelta:
        return self.poll_interval * self.staleness_multiplier

    @property
    def temperature_units(self) -> TemperatureUnits:
        return TemperatureUnits.from_string(self.units)

    def brightness_curve(self) -> BrightnessCurveConfig:
        return BrightnessCurveConfig(
            max_start=self.max_lux_start_time,
            max_end=self.max_lux_end_time,
            min_start=self.min_lux_start_time,
            min_end=self.min_lux_end_time,
            min_lux=self.min_lux,
            max_lux=self.max_lux,
        )


settings = Settings()
