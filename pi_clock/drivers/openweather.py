from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from ..core.timeutil import from_unix, now_utc
from ..domain.errors import FetchError, FetchErrorKind
from ..domain.models import ConditionCategory, TemperatureUnits, WeatherEntry, WeatherSnapshot

logger = logging.getLogger(__name__)

ONE_CALL_URL = "https://api.openweathermap.org/data/3.0/onecall"


# --- One Call payload (only the fields the clock uses) ---

class Description(BaseModel):
    id: int = 0
    main: ConditionCategory
    description: str = ""
    icon: str = ""


class Conditions(BaseModel):
    dt: int
    temp: float
    weather: list[Description] = Field(min_length=1)

    def to_entry(self) -> WeatherEntry:
        return WeatherEntry(
            timestamp=from_unix(self.dt),
            temperature=self.temp,
            condition=self.weather[0].main,
        )


class OneCallResponse(BaseModel):
    lat: float = 0.0
    lon: float = 0.0
    timezone: str = ""
    current: Conditions
    hourly: list[Conditions] = []


class OpenWeatherClient:
    """Blocking One Call client; the timeout bounds how long a render tick can stall."""

    def __init__(
        self,
        api_key: str = "",
        lat: float = 0.0,
        lon: float = 0.0,
        units: TemperatureUnits = TemperatureUnits.IMPERIAL,
        timeout: float = 0.5,
        uri: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._units = units
        self._uri = uri
        self._params = None if uri else {
            "lat": lat,
            "lon": lon,
            "appid": api_key,
            "units": units.value,
            "exclude": "minutely,daily,alerts",
        }
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def fetch(self) -> WeatherSnapshot:
        try:
            resp = self._client.get(self._uri or ONE_CALL_URL, params=self._params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                FetchErrorKind.HTTP_STATUS,
                f"OpenWeather returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(FetchErrorKind.TRANSPORT, f"OpenWeather request failed: {e!r}") from e

        try:
            payload = OneCallResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise FetchError(
                FetchErrorKind.DECODE,
                f"OpenWeather payload invalid ({e.error_count()} errors)",
            ) from e

        # dt outside the platform timestamp range
        try:
            current = payload.current.to_entry()
            hourly = sorted((h.to_entry() for h in payload.hourly), key=lambda e: e.timestamp)
        except (ValueError, OverflowError, OSError) as e:
            raise FetchError(FetchErrorKind.DECODE, f"OpenWeather timestamp invalid: {e}") from e

        snapshot = WeatherSnapshot(
            current=current,
            hourly=tuple(hourly),
            fetched_at=now_utc(),
            units=self._units,
        )
        logger.debug(
            "OpenWeather: current=%s %.1f%s hourly=%d",
            snapshot.current.condition.value, snapshot.current.temperature,
            self._units.as_char(), len(hourly),
        )
        return snapshot
