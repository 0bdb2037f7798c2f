from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.timeutil import now_local
from ..domain.errors import PiClockError, RenderError, SensorError
from ..domain.interfaces import Display, LightSensor, WeatherFetcher
from ..domain.models import Fresh, NeverFetched, Stale, Staleness
from ..domain.rotation import RotationSchedule
from .weather_cache import WeatherCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopTiming:
    tick: timedelta = timedelta(seconds=1)
    poll_interval: timedelta = timedelta(seconds=60)
    stale_after: timedelta = timedelta(seconds=180)


@dataclass
class LiveState:
    ticks: int = 0
    weather_status: str = "never_fetched"   # "fresh" | "stale" | "never_fetched"
    last_weather_success: Optional[datetime] = None
    brightness: Optional[float] = None
    page_index: Optional[int] = None


def _status(weather: Staleness) -> str:
    if isinstance(weather, Fresh):
        return "fresh"
    if isinstance(weather, Stale):
        return "stale"
    return "never_fetched"


class ClockRunLoop:
    def __init__(
        self,
        fetcher: WeatherFetcher,
        sensor: LightSensor,
        display: Display,
        rotation: RotationSchedule,
        timing: LoopTiming = LoopTiming(),
        cache: Optional[WeatherCache] = None,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self._fetcher = fetcher
        self._sensor = sensor
        self._display = display
        self._rotation = rotation
        self._timing = timing
        self._clock = clock
        self.cache = cache or WeatherCache()

        self._stop = threading.Event()
        self.live = LiveState()

    def stop(self) -> None:
        self._stop.set()

    def close(self) -> None:
        self._fetcher.close()
        self._sensor.close()
        self._display.close()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def tick(self, now: Optional[datetime] = None) -> LiveState:
        now = now or self._clock()

        # 1) Refresh weather if due (blocking, bounded by the client timeout)
        self.cache.maybe_refresh(now, self._timing.poll_interval, self._fetcher.fetch)

        # 2) Decide what weather may be shown
        weather = self.cache.current_or_stale(now, self._timing.stale_after)
        if isinstance(weather, Stale) and self.live.weather_status != "stale":
            logger.warning(
                "No successful weather in over %ds. Displaying empty weather",
                self._timing.stale_after.total_seconds(),
            )
        elif isinstance(weather, NeverFetched):
            logger.debug("No weather fetched yet")

        # 3) Brightness and page
        brightness = self._sensor.read_normalized()
        page_index = self._rotation.page_index(now)
        logger.debug("tick: brightness=%.3f page=%d weather=%s", brightness, page_index, _status(weather))

        # 4) Render
        self._display.render(now, page_index, weather, brightness)

        self.live.ticks += 1
        self.live.weather_status = _status(weather)
        self.live.last_weather_success = self.cache.state.last_success
        self.live.brightness = brightness
        self.live.page_index = page_index
        return self.live

    def run(self) -> None:
        logger.info(
            "Clock loop started (tick=%ss poll=%ss stale_after=%ss pages=%d x %ds)",
            self._timing.tick.total_seconds(),
            self._timing.poll_interval.total_seconds(),
            self._timing.stale_after.total_seconds(),
            self._rotation.page_count,
            self._rotation.page_duration_secs,
        )

        while not self._stop.is_set():
            try:
                self.tick()
            except SensorError:
                logger.exception("Light sensor %s failed; stopping", self._sensor.sensor_id)
                raise
            except RenderError as e:
                logger.exception("Display %s failed during %s; stopping", e.display, e.operation)
                raise
            except PiClockError:
                logger.exception("Invariant violated; stopping")
                raise

            # sleep with cancellation awareness
            self._stop.wait(self._timing.tick.total_seconds())

        logger.info("Clock loop stopped")
