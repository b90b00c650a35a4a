"""Unit tests for pagination primitives."""

import pytest

from shared_kernel.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Page,
    PageRequest,
    calculate_page_metadata,
    clamp_page_number,
    clamp_page_size,
)


class TestClamping:
    """Tests for page size and number normalization."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0, DEFAULT_PAGE_SIZE), (-5, DEFAULT_PAGE_SIZE), (1, 1), (50, 50), (51, MAX_PAGE_SIZE), (1000, 50)],
    )
    def test_clamp_page_size(self, requested, expected):
        assert clamp_page_size(requested) == expected

    @pytest.mark.parametrize(("requested", "expected"), [(-3, 1), (0, 1), (1, 1), (7, 7)])
    def test_clamp_page_number(self, requested, expected):
        assert clamp_page_number(requested) == expected

    def test_page_request_is_clamped_on_construction(self):
        """A PageRequest should never hold out-of-range values."""
        request = PageRequest(page_number=0, page_size=500)
        assert request.page_number == 1
        assert request.page_size == MAX_PAGE_SIZE

    def test_page_request_offset_and_limit(self):
        request = PageRequest(page_number=3, page_size=10)
        assert request.offset == 20
        assert request.limit == 10


class TestCalculatePageMetadata:
    """Tests for derived pagination metadata."""

    def test_total_pages_rounds_up(self):
        metadata = calculate_page_metadata(total_count=23, page_number=1, page_size=10)
        assert metadata.total_pages == 3

    def test_exact_multiple(self):
        metadata = calculate_page_metadata(total_count=20, page_number=2, page_size=10)
        assert metadata.total_pages == 2
        assert metadata.has_next_page is False
        assert metadata.has_previous_page is True

    def test_first_page_has_no_previous(self):
        metadata = calculate_page_metadata(total_count=23, page_number=1, page_size=10)
        assert metadata.has_previous_page is False
        assert metadata.has_next_page is True

    def test_empty_collection(self):
        """No records means zero pages and no neighbours."""
        metadata = calculate_page_metadata(total_count=0, page_number=1, page_size=10)
        assert metadata.total_pages == 0
        assert metadata.has_next_page is False
        assert metadata.has_previous_page is False

    def test_inputs_are_clamped(self):
        metadata = calculate_page_metadata(total_count=100, page_number=-1, page_size=0)
        assert metadata.page_number == 1
        assert metadata.page_size == DEFAULT_PAGE_SIZE
        assert metadata.total_pages == 10

    def test_oversized_page_is_capped(self):
        metadata = calculate_page_metadata(total_count=120, page_number=1, page_size=80)
        assert metadata.page_size == MAX_PAGE_SIZE
        assert metadata.total_pages == 3

    def test_negative_count_treated_as_zero(self):
        metadata = calculate_page_metadata(total_count=-4, page_number=1, page_size=10)
        assert metadata.total_count == 0
        assert metadata.total_pages == 0

    def test_page_past_the_end_has_previous(self):
        metadata = calculate_page_metadata(total_count=5, page_number=4, page_size=10)
        assert metadata.has_next_page is False
        assert metadata.has_previous_page is True


class TestPage:
    """Tests for slicing loaded sequences into pages."""

    def test_from_sequence_returns_requested_window(self):
        page = Page.from_sequence(list(range(25)), PageRequest(page_number=3, page_size=10))

        assert page.items == [20, 21, 22, 23, 24]
        assert page.metadata.total_count == 25
        assert page.metadata.total_pages == 3

    def test_from_sequence_past_the_end_is_empty(self):
        page = Page.from_sequence([1, 2, 3], PageRequest(page_number=5, page_size=10))
        assert page.items == []
        assert page.metadata.total_count == 3
