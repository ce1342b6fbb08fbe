"""Layout cursor state for one render call"""

from dataclasses import dataclass
from typing import Optional, Tuple

from reportlab.lib.pagesizes import letter

PAGE_WIDTH, PAGE_HEIGHT = letter
MARGIN = 36
FOOTER_RESERVE = 30


@dataclass
class LayoutContext:
    """
    Mutable layout state, created per render and passed to every operation

    cursor is the distance from the top edge of the page in points.
    """

    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin_left: float = MARGIN
    margin_right: float = MARGIN
    margin_top: float = MARGIN
    margin_bottom: float = MARGIN + FOOTER_RESERVE
    cursor: float = MARGIN
    page_number: int = 1
    section: Optional[str] = None
    pending_pair: Optional[Tuple[str, str]] = None

    @property
    def left(self) -> float:
        return self.margin_left

    @property
    def right(self) -> float:
        return self.page_width - self.margin_right

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def middle(self) -> float:
        return self.left + self.content_width / 2

    @property
    def bottom_limit(self) -> float:
        """Lowest cursor position content may reach"""
        return self.page_height - self.margin_bottom

    def fits(self, height: float) -> bool:
        return self.cursor + height <= self.bottom_limit

    def baseline(self, offset: float = 0) -> float:
        """Cursor converted to PDF coordinates (origin bottom-left)"""
        return self.page_height - (self.cursor + offset)

    def advance(self, height: float) -> None:
        self.cursor += height

    def reset_to_top(self) -> None:
        self.cursor = self.margin_top
