"""Page arithmetic for browsing a list one window at a time."""

import math
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    BACK = "back"
    FORWARD = "forward"


@dataclass(frozen=True)
class ControlState:
    """Which navigation controls can be pressed."""

    back_enabled: bool
    forward_enabled: bool


@dataclass(frozen=True)
class PageState:
    """Tracks which page of a list is shown (immutable).

    page_index is 0-based and always lies within the page range.
    """

    page_index: int = 0
    page_size: int = 5
    total_items: int = 0

    def __post_init__(self):
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.total_items < 0:
            raise ValueError(f"total_items must not be negative, got {self.total_items}")
        index = PaginationEngine.clamp(self.page_index, self.page_count())
        object.__setattr__(self, "page_index", index)

    def page_count(self) -> int:
        """Get total number of pages (at least 1)."""
        return PaginationEngine.compute_page_count(self.total_items, self.page_size)

    def is_empty(self) -> bool:
        """Check if there is nothing to page through."""
        return self.total_items == 0

    def has_previous(self) -> bool:
        return self.page_index > 0

    def has_next(self) -> bool:
        """Check if there is a next page."""
        return self.page_index < self.page_count() - 1

    def with_total(self, total_items: int) -> "PageState":
        """Return new state for a resized list, keeping the index in range."""
        return PageState(
            page_index=self.page_index,
            page_size=self.page_size,
            total_items=total_items,
        )


class PaginationEngine:
    """Pure page navigation rules."""

    @staticmethod
    def compute_page_count(total_items: int, page_size: int) -> int:
        """
        Compute how many pages a list occupies.

        An empty list still has one (empty) page.
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        if total_items == 0:
            return 1
        return math.ceil(total_items / page_size)

    @staticmethod
    def clamp(page_index: int, page_count: int) -> int:
        """Clamp a page index to [0, page_count - 1]."""
        return max(0, min(page_index, page_count - 1))

    @staticmethod
    def navigate(state: PageState, direction: Direction) -> PageState:
        """
        Move one page back or forward.

        Moving past either end leaves the state unchanged.

        Args:
            state: The current page state.
            direction: Which way to move.

        Returns:
            The new page state (the same object at a boundary).
        """
        step = -1 if direction is Direction.BACK else 1
        index = PaginationEngine.clamp(state.page_index + step, state.page_count())
        if index == state.page_index:
            return state
        return PageState(
            page_index=index,
            page_size=state.page_size,
            total_items=state.total_items,
        )

    @staticmethod
    def control_state(state: PageState) -> ControlState:
        return ControlState(
            back_enabled=state.has_previous(),
            forward_enabled=state.has_next(),
        )

    @staticmethod
    def window_for(state: PageState) -> tuple[int, int]:
        """Get the (offset, limit) slice for the current page."""
        return state.page_index * state.page_size, state.page_size
