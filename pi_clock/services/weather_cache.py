from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..domain.errors import FetchError
from ..domain.models import Fresh, NeverFetched, Stale, Staleness, WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass
class WeatherCacheState:
    last_known: Optional[WeatherSnapshot] = None
    last_attempt: Optional[datetime] = None
    last_success: Optional[datetime] = None


class WeatherCache:
    """
    Last-known-good weather, refreshed on a poll interval.

    A failed fetch keeps the previous snapshot; it is only withheld from the
    displays once the last success is older than the staleness bound.
    """

    def __init__(self) -> None:
        self.state = WeatherCacheState()

    def is_due(self, now: datetime, poll_interval: timedelta) -> bool:
        if self.state.last_attempt is None:
            return True
        return now - self.state.last_attempt >= poll_interval

    def maybe_refresh(
        self,
        now: datetime,
        poll_interval: timedelta,
        fetch: Callable[[], WeatherSnapshot],
    ) -> bool:
        """Fetch if the poll interval has elapsed. Returns True if a fetch was attempted."""
        if not self.is_due(now, poll_interval):
            return False

        self.state.last_attempt = now
        logger.info("Getting updated weather (poll_interval=%ss)", poll_interval.total_seconds())

        try:
            snapshot = fetch()
        except FetchError as e:
            if self.state.last_success is None:
                logger.warning("Error getting weather: %s. No weather yet", e)
            else:
                logger.warning(
                    "Error updating weather: %s. Using previous weather. %ds since last success",
                    e, (now - self.state.last_success).total_seconds(),
                )
            return True

        self.state.last_known = snapshot
        self.state.last_success = now
        logger.info("Successfully updated weather (%d hourly entries)", len(snapshot.hourly))
        return True

    def current_or_stale(self, now: datetime, stale_after: timedelta) -> Staleness:
        if self.state.last_known is None or self.state.last_success is None:
            return NeverFetched()
        if now - self.state.last_success > stale_after:
            return Stale(last_success=self.state.last_success)
        return Fresh(snapshot=self.state.last_known)
