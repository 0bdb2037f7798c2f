"""Day/night brightness curve.

Four breakpoints split the 24h clock into five zones: full bright, a linear
ramp down, full dark (which crosses midnight) and a linear ramp back up.
Brightness is normalized to [0, 1] so every light sensor, synthetic or
real, feeds the displays the same way.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from .errors import BrightnessCurveError, ConfigurationError

MIDNIGHT = time(0, 0)
MIN_RAMP_SECONDS = 60
_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class BrightnessCurveConfig:
    max_start: time = time(8, 0)
    max_end: time = time(19, 0)
    min_start: time = time(23, 0)   # must be before midnight
    min_end: time = time(7, 0)      # must be after midnight
    min_lux: float = 1.0
    max_lux: float = 50.0

    def __post_init__(self) -> None:
        if not (self.min_end < self.max_start < self.max_end < self.min_start):
            raise ConfigurationError(
                "Brightness breakpoints must satisfy min_end < max_start < max_end < min_start "
                f"(got min_end={self.min_end}, max_start={self.max_start}, "
                f"max_end={self.max_end}, min_start={self.min_start})"
            )
        for start, end in ((self.max_end, self.min_start), (self.min_end, self.max_start)):
            if _whole_seconds(start, end) < MIN_RAMP_SECONDS:
                raise ConfigurationError(
                    f"Brightness ramp {start}-{end} must last at least {MIN_RAMP_SECONDS}s"
                )
        if self.min_lux >= self.max_lux:
            raise ConfigurationError(
                f"min_lux ({self.min_lux}) must be below max_lux ({self.max_lux})"
            )


@dataclass(frozen=True)
class _Zone:
    start: time
    end: time

    def contains(self, t: time) -> bool:
        return self.start <= t < self.end


def _whole_seconds(a: time, b: time) -> int:
    """Whole seconds from a to b (same day), truncated toward zero."""
    delta = datetime.combine(date.min, b) - datetime.combine(date.min, a)
    seconds = abs(delta) // _ONE_SECOND
    return seconds if delta >= timedelta(0) else -seconds


def _progress(elapsed: int, total: int, t: time) -> float:
    if total <= 0:
        raise BrightnessCurveError(f"Brightness ramp containing {t} is shorter than one second")
    return elapsed / total


def brightness_for_time(t: time, curve: BrightnessCurveConfig) -> float:
    full_bright = _Zone(curve.max_start, curve.max_end)
    bright_to_dark = _Zone(curve.max_end, curve.min_start)
    full_dark_evening = _Zone(curve.min_start, time.max)
    full_dark_morning = _Zone(MIDNIGHT, curve.min_end)
    dark_to_bright = _Zone(curve.min_end, curve.max_start)

    # Half-open ranges cannot include the last instant of the day
    if t == time.max:
        return 0.0

    if full_bright.contains(t):
        return 1.0

    if full_dark_evening.contains(t) or full_dark_morning.contains(t):
        return 0.0

    if bright_to_dark.contains(t):
        since_full_bright = _whole_seconds(curve.max_end, t)
        until_full_dark = _whole_seconds(t, curve.min_start)
        return _progress(until_full_dark, since_full_bright + until_full_dark, t)

    if dark_to_bright.contains(t):
        since_full_dark = _whole_seconds(curve.min_end, t)
        until_full_bright = _whole_seconds(t, curve.max_start)
        return _progress(since_full_dark, since_full_dark + until_full_bright, t)

    raise BrightnessCurveError(f"{t} is outside every brightness zone of {curve}")


def normalize_lux(lux: float, min_lux: float, max_lux: float) -> float:
    """Clamp lux into [min_lux, max_lux] and rescale to [0, 1]."""
    if min_lux >= max_lux:
        raise ConfigurationError(f"min_lux ({min_lux}) must be below max_lux ({max_lux})")
    truncated = min(max(lux, min_lux), max_lux)
    return (truncated - min_lux) / (max_lux - min_lux)
