"""Lookahead over the hourly forecast.

Both functions only consider entries in the next 24 hours and assume
``snapshot.hourly`` is sorted ascending by timestamp.
"""
from __future__ import annotations
from datetime import datetime, timedelta
from typing import Optional

from .errors import ForecastError
from .models import HighLow, NoChange, PrecipitationChange, Start, Stop, TemperatureAt, WeatherSnapshot
from ..core.timeutil import now_utc

HORIZON = timedelta(hours=24)


def next_precipitation_change(
    snapshot: WeatherSnapshot,
    now: Optional[datetime] = None,
) -> PrecipitationChange:
    """Return the first start or stop of precipitation within the horizon.

    While precipitating, a change of type (rain to snow, say) is not a
    transition; a Stop reports the kind that was falling at ``current``.
    """
    now = now or now_utc()
    horizon_end = now + HORIZON

    current = snapshot.current.condition
    currently = current if current.is_precipitation else None

    for entry in snapshot.hourly:
        if entry.timestamp < now:
            continue
        if entry.timestamp > horizon_end:
            break

        if currently is not None and not entry.condition.is_precipitation:
            return Stop(at=entry.timestamp, kind=currently)

        if currently is None and entry.condition.is_precipitation:
            return Start(at=entry.timestamp, kind=entry.condition)

    return NoChange(current=currently)


def high_low_temp(
    snapshot: WeatherSnapshot,
    now: Optional[datetime] = None,
) -> HighLow:
    """Highest and lowest hourly temperature in [now, now + 24h).

    Ties keep the earliest entry.
    """
    now = now or now_utc()
    horizon_end = now + HORIZON

    window = [e for e in snapshot.hourly if now <= e.timestamp < horizon_end]
    if not window:
        raise ForecastError(f"No hourly forecast between {now.isoformat()} and {horizon_end.isoformat()}")

    high = low = window[0]
    for entry in window[1:]:
        if entry.temperature > high.temperature:
            high = entry
        if entry.temperature < low.temperature:
            low = entry

    return HighLow(
        high=TemperatureAt(at=high.timestamp, temperature=high.temperature),
        low=TemperatureAt(at=low.timestamp, temperature=low.temperature),
    )
