from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from .base import Display
from ..domain.errors import RenderError
from ..domain.models import Staleness

logger = logging.getLogger(__name__)


class CompositeDisplay(Display):
    """Fans each frame out to several displays; stops at the first failure."""

    name = "composite"

    def __init__(self, displays: Sequence[Display]) -> None:
        if not displays:
            raise ValueError("CompositeDisplay needs at least one display")
        self._displays = list(displays)

    @property
    def displays(self) -> list[Display]:
        return list(self._displays)

    def render(self, now: datetime, page_index: int, weather: Staleness, brightness: float) -> None:
        for i, d in enumerate(self._displays):
            try:
                d.render(now, page_index, weather, brightness)
            except RenderError:
                logger.error("Display %d/%d (%s) failed to render", i + 1, len(self._displays), d.name)
                raise

    def close(self) -> None:
        for d in self._displays:
            d.close()
