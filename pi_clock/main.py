from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Optional, Sequence, TextIO

from .core.config import Settings, settings
from .core.log import configure_logging
from .displays.base import Display, DisplayType
from .displays.composite import CompositeDisplay
from .displays.console import Console16x2Display, Console20x4Display
from .domain.errors import ConfigurationError, PiClockError
from .domain.rotation import RotationSchedule
from .drivers.openweather import OpenWeatherClient
from .drivers.rs485_modbus import ModbusRtuConfig, RS485ModbusRTU
from .sensors.base import LightSensor, LightSensorType
from .sensors.random_light_sensor import RandomLightSensor
from .sensors.rs485_lux_sensor import LuxRegisterSpec, RS485LuxSensor
from .sensors.time_light_sensor import TimeLightSensor
from .services.clock_loop import ClockRunLoop, LoopTiming

logger = logging.getLogger(__name__)


def build_light_sensor(cfg: Settings) -> LightSensor:
    kind = LightSensorType(cfg.light_sensor)

    if kind is LightSensorType.TIME:
        return TimeLightSensor(curve=cfg.brightness_curve())

    if kind is LightSensorType.RANDOM:
        return RandomLightSensor(min_lux=cfg.min_lux, max_lux=cfg.max_lux)

    if kind is LightSensorType.RS485:
        driver = RS485ModbusRTU(
            ModbusRtuConfig(
                port=cfg.rs485_port,
                baudrate=cfg.rs485_baudrate,
                slave_id=cfg.rs485_slave_id,
            )
        )
        spec = LuxRegisterSpec(
            functioncode=cfg.lux_functioncode,
            address=cfg.lux_register_address,
            count=cfg.lux_register_count,
            scale=cfg.lux_scale,
        )
        return RS485LuxSensor(driver=driver, min_lux=cfg.min_lux, max_lux=cfg.max_lux, spec=spec)

    raise ConfigurationError(f"Unsupported light sensor: {cfg.light_sensor}")


def build_display(names: Sequence[str], stream: Optional[TextIO] = None) -> Display:
    displays: list[Display] = []
    for name in names:
        try:
            kind = DisplayType(name.lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown display {name!r}; expected one of {[d.value for d in DisplayType]}"
            ) from None

        if kind is DisplayType.CONSOLE_16X2:
            displays.append(Console16x2Display(stream))
        elif kind is DisplayType.CONSOLE_20X4:
            displays.append(Console20x4Display(stream))

    if not displays:
        raise ConfigurationError("At least one display must be configured")
    if len(displays) == 1:
        return displays[0]
    return CompositeDisplay(displays)


def build_fetcher(cfg: Settings) -> OpenWeatherClient:
    if not cfg.weather_uri and not cfg.open_weather_api_key:
        raise ConfigurationError("Must provide OPEN_WEATHER_API_KEY (or WEATHER_URI)")
    return OpenWeatherClient(
        api_key=cfg.open_weather_api_key,
        lat=cfg.lat,
        lon=cfg.lon,
        units=cfg.temperature_units,
        timeout=cfg.fetch_timeout_seconds,
        uri=cfg.weather_uri,
    )


def build_loop(cfg: Settings, stream: Optional[TextIO] = None) -> ClockRunLoop:
    sensor = build_light_sensor(cfg)
    display = build_display(cfg.displays, stream)
    rotation = RotationSchedule(
        page_count=cfg.page_count,
        page_duration_secs=cfg.page_duration_seconds,
    )
    # The HTTP client is opened last so a configuration error leaks nothing
    return ClockRunLoop(
        fetcher=build_fetcher(cfg),
        sensor=sensor,
        display=display,
        rotation=rotation,
        timing=LoopTiming(
            tick=cfg.tick_interval,
            poll_interval=cfg.poll_interval,
            stale_after=cfg.stale_after,
        ),
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Raspberry Pi weather clock")
    p.add_argument(
        "--display", action="append", dest="displays",
        choices=[d.value for d in DisplayType],
        help="Display to render to; repeat for several (default from DISPLAYS)",
    )
    p.add_argument(
        "--light-sensor", choices=[s.value for s in LightSensorType],
        help="Light sensor (default from LIGHT_SENSOR)",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    overrides = {}
    if args.displays:
        overrides["displays"] = args.displays
    if args.light_sensor:
        overrides["light_sensor"] = args.light_sensor
    cfg = settings.model_copy(update=overrides)

    configure_logging("DEBUG" if args.verbose else cfg.log_level, cfg.log_file)
    logger.info("Starting %s (displays=%s light_sensor=%s)", cfg.app_name, cfg.displays, cfg.light_sensor)

    try:
        loop = build_loop(cfg)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    def _request_stop(signum, _frame) -> None:
        logger.info("Received signal %d, shutting down", signum)
        loop.stop()

    signal.signal(signal.SIGTERM, _request_stop)
    signal.signal(signal.SIGINT, _request_stop)

    try:
        loop.run()
    except PiClockError:
        return 1
    finally:
        loop.close()
        logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
