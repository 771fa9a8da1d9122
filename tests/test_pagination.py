"""Tests for the pagination module."""

import math

import pytest
from linkbot.core.pagination import Direction, PageState, PaginationEngine


class TestComputePageCount:
    """Tests for PaginationEngine.compute_page_count."""

    @pytest.mark.parametrize(
        "total, size, expected",
        [(0, 5, 1), (1, 5, 1), (5, 5, 1), (6, 5, 2), (12, 5, 3), (100, 7, 15)],
    )
    def test_known_counts(self, total, size, expected):
        """Page count for common sizes."""
        assert PaginationEngine.compute_page_count(total, size) == expected

    def test_matches_ceiling_division(self):
        """Page count is ceil(total / size) for every non-empty list."""
        for size in range(1, 10):
            for total in range(1, 60):
                assert PaginationEngine.compute_page_count(total, size) == math.ceil(total / size)

    def test_empty_list_has_one_page(self):
        """An empty list still has a single page."""
        assert PaginationEngine.compute_page_count(0, 3) == 1

    def test_non_positive_page_size_rejected(self):
        """Page size must be positive."""
        with pytest.raises(ValueError):
            PaginationEngine.compute_page_count(10, 0)


class TestClamp:
    """Tests for PaginationEngine.clamp."""

    def test_within_range(self):
        assert PaginationEngine.clamp(1, 3) == 1

    def test_below_range(self):
        assert PaginationEngine.clamp(-4, 3) == 0

    def test_above_range(self):
        assert PaginationEngine.clamp(7, 3) == 2


class TestNavigate:
    """Tests for PaginationEngine.navigate."""

    def test_forward(self):
        """Forward moves to the next page."""
        state = PageState(page_index=0, page_size=5, total_items=12)
        assert PaginationEngine.navigate(state, Direction.FORWARD).page_index == 1

    def test_back(self):
        """Back moves to the previous page."""
        state = PageState(page_index=2, page_size=5, total_items=12)
        assert PaginationEngine.navigate(state, Direction.BACK).page_index == 1

    def test_forward_on_last_page_is_noop(self):
        """Forward from the last page leaves the index unchanged."""
        state = PageState(page_index=2, page_size=5, total_items=12)
        new_state = PaginationEngine.navigate(state, Direction.FORWARD)
        assert new_state.page_index == 2
        assert PaginationEngine.control_state(new_state).forward_enabled is False

    def test_back_on_first_page_is_noop(self):
        """Back from page 0 leaves the index unchanged."""
        state = PageState(page_index=0, page_size=5, total_items=12)
        new_state = PaginationEngine.navigate(state, Direction.BACK)
        assert new_state.page_index == 0
        assert PaginationEngine.control_state(new_state).back_enabled is False

    def test_original_unchanged(self):
        """navigate returns a new state."""
        state = PageState(page_index=0, page_size=5, total_items=12)
        PaginationEngine.navigate(state, Direction.FORWARD)
        assert state.page_index == 0

    def test_never_wraps(self):
        """Repeated forward presses stop at the last page."""
        state = PageState(page_index=0, page_size=5, total_items=12)
        for _ in range(10):
            state = PaginationEngine.navigate(state, Direction.FORWARD)
        assert state.page_index == 2


class TestControlState:
    """Tests for PaginationEngine.control_state."""

    def test_first_page(self):
        controls = PaginationEngine.control_state(PageState(0, 5, 12))
        assert controls.back_enabled is False
        assert controls.forward_enabled is True

    def test_middle_page(self):
        controls = PaginationEngine.control_state(PageState(1, 5, 12))
        assert controls.back_enabled is True
        assert controls.forward_enabled is True

    def test_last_page(self):
        controls = PaginationEngine.control_state(PageState(2, 5, 12))
        assert controls.back_enabled is True
        assert controls.forward_enabled is False

    def test_empty_list_disables_both(self):
        """Both controls are disabled when there is nothing to browse."""
        state = PageState(page_index=0, page_size=5, total_items=0)
        controls = PaginationEngine.control_state(state)
        assert state.page_index == 0
        assert controls.back_enabled is False
        assert controls.forward_enabled is False


class TestWindowFor:
    """Tests for PaginationEngine.window_for."""

    def test_first_page(self):
        assert PaginationEngine.window_for(PageState(0, 5, 12)) == (0, 5)

    def test_last_page(self):
        assert PaginationEngine.window_for(PageState(2, 5, 12)) == (10, 5)


class TestPageState:
    """Tests for PageState."""

    def test_defaults(self):
        state = PageState()
        assert state.page_index == 0
        assert state.page_size == 5
        assert state.total_items == 0
        assert state.is_empty() is True

    def test_out_of_range_index_is_clamped(self):
        """The index is kept within the page range."""
        assert PageState(page_index=9, page_size=5, total_items=12).page_index == 2
        assert PageState(page_index=-1, page_size=5, total_items=12).page_index == 0

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            PageState(page_index=0, page_size=0, total_items=3)

    def test_negative_total(self):
        with pytest.raises(ValueError):
            PageState(page_index=0, page_size=5, total_items=-1)

    def test_with_total_reclamps(self):
        """Shrinking the list pulls the index back into range."""
        state = PageState(page_index=2, page_size=5, total_items=12)
        assert state.with_total(6).page_index == 1


class TestTwelveItemScenario:
    """Twelve links at five per page."""

    async def test_pages(self, provider):
        """Three pages; first shows 1-5, last shows 11-12."""
        state = PageState(page_index=0, page_size=5, total_items=await provider.count())
        assert state.page_count() == 3

        offset, limit = PaginationEngine.window_for(state)
        first = await provider.list(offset, limit)
        assert [link.name for link in first] == [f"Link {n}" for n in range(1, 6)]

        state = PaginationEngine.navigate(state, Direction.FORWARD)
        state = PaginationEngine.navigate(state, Direction.FORWARD)
        offset, limit = PaginationEngine.window_for(state)
        last = await provider.list(offset, limit)
        assert [link.name for link in last] == ["Link 11", "Link 12"]
        assert PaginationEngine.control_state(state).forward_enabled is False
