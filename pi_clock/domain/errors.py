"""Exception hierarchy for the clock.

Fetch errors are recoverable and handled by the weather cache. Sensor and
render errors indicate a hardware fault and end the run loop. The remaining
errors are invariant violations (bad configuration or bad input data).
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class PiClockError(Exception):
    """Base exception for all clock errors."""


class FetchErrorKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


class FetchError(PiClockError):
    """Weather request failed; the previous snapshot stays in use."""

    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.kind.value}: {super().__str__()}"


class SensorError(PiClockError):
    """Light sensor could not produce a reading."""


class RenderError(PiClockError):
    """A display failed to render."""

    def __init__(self, display: str, operation: str, message: str) -> None:
        super().__init__(message)
        self.display = display
        self.operation = operation

    def __str__(self) -> str:
        return f"{self.display} {self.operation} failed: {super().__str__()}"


class ConfigurationError(PiClockError, ValueError):
    """Invalid configuration value."""


class ForecastError(PiClockError):
    """Forecast data does not satisfy the analyzer's preconditions."""


class BrightnessCurveError(PiClockError):
    """A time of day fell outside every brightness zone."""


class RotationError(PiClockError):
    """Computed rotation page is outside the configured range."""
