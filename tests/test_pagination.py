import math

import pytest

from portfolio.utils.pagination import ELLIPSIS, page_range, page_window, total_pages


class TestTotalPages:
    @pytest.mark.parametrize("page_size", [1, 7, 40, 100])
    def test_matches_ceiling_division(self, page_size):
        for total in range(0, 250):
            assert total_pages(total, page_size) == math.ceil(total / page_size)

    def test_zero_items_is_zero_pages(self):
        assert total_pages(0, 40) == 0

    def test_partial_last_page(self):
        assert total_pages(45, 40) == 2
        assert total_pages(40, 40) == 1
        assert total_pages(41, 40) == 2

    def test_invalid(self):
        with pytest.raises(ValueError):
            total_pages(10, 0)
        with pytest.raises(ValueError):
            total_pages(-1, 10)


class TestPageRange:
    def test_bounds(self):
        assert page_range(1, 40) == (0, 39)
        assert page_range(2, 40) == (40, 79)
        assert page_range(3, 25) == (50, 74)

    def test_span_equals_page_size(self):
        for page in range(1, 20):
            start, end = page_range(page, 12)
            assert end - start + 1 == 12

    def test_consecutive_pages_neither_overlap_nor_skip(self):
        for page in range(1, 20):
            _, end = page_range(page, 9)
            next_start, _ = page_range(page + 1, 9)
            assert next_start == end + 1

    def test_invalid(self):
        with pytest.raises(ValueError):
            page_range(0, 10)
        with pytest.raises(ValueError):
            page_range(1, 0)


class TestPageWindow:
    @pytest.mark.parametrize("pages", range(2, 8))
    def test_small_totals_list_every_page(self, pages):
        for current in range(1, pages + 1):
            assert page_window(current, pages) == list(range(1, pages + 1))

    @pytest.mark.parametrize("pages", [0, 1])
    def test_single_page_has_no_controls(self, pages):
        assert page_window(1, pages) == []

    def test_middle_page(self):
        assert page_window(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]

    def test_first_page(self):
        assert page_window(1, 10) == [1, 2, ELLIPSIS, 10]

    def test_near_start_has_no_leading_ellipsis(self):
        assert page_window(3, 10) == [1, 2, 3, 4, ELLIPSIS, 10]

    def test_first_leading_ellipsis(self):
        assert page_window(4, 10) == [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]

    def test_near_end_has_no_trailing_ellipsis(self):
        assert page_window(8, 10) == [1, ELLIPSIS, 7, 8, 9, 10]

    def test_last_page(self):
        assert page_window(10, 10) == [1, ELLIPSIS, 9, 10]

    def test_bounded_width_and_endpoints(self):
        for pages in range(8, 60):
            for current in range(1, pages + 1):
                window = page_window(current, pages)
                assert len(window) <= 7
                assert window[0] == 1
                assert window[-1] == pages
                assert current in window
                numbers = [p for p in window if p != ELLIPSIS]
                assert numbers == sorted(set(numbers))

    def test_deterministic(self):
        assert page_window(12, 30) == page_window(12, 30)
