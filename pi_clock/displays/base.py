from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum

from ..domain.errors import RenderError
from ..domain.models import Staleness
from ..domain.rotation import Page


class DisplayType(str, Enum):
    CONSOLE_16X2 = "console16x2"
    CONSOLE_20X4 = "console20x4"


class Display(ABC):
    name: str = "display"

    @abstractmethod
    def render(
        self,
        now: datetime,
        page_index: int,
        weather: Staleness,
        brightness: float,
    ) -> None:
        """Draw one frame. Raise RenderError on failure."""
        ...

    def close(self) -> None:
        pass

    def _page(self, page_index: int) -> Page:
        try:
            return Page(page_index)
        except ValueError:
            raise RenderError(self.name, "select page", f"no page for index {page_index}") from None
