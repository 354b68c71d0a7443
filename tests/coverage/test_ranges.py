"""Tests for coverage/ranges.py module."""

import pytest

from covbadge.coverage.ranges import RANGE_SEPARATOR, compress_ranges


class TestCompressRanges:
    """Tests for compress_ranges function."""

    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            ([], ""),
            ([4], "4"),
            ([1, 2, 3, 5, 7, 8], "1-3</br>5</br>7-8"),
            ([3, 4, 7], "3-4</br>7"),
            ([1, 3, 5], "1</br>3</br>5"),
            ([10, 11, 12, 13], "10-13"),
        ],
    )
    def test_runs(self, values: list[int], expected: str) -> None:
        assert compress_ranges(values) == expected

    def test_adjacent_duplicates_continue_run(self) -> None:
        """A repeated value neither breaks nor extends the current run."""
        assert compress_ranges([3, 3, 4]) == "3-4"
        assert compress_ranges([5, 5]) == "5"
        assert compress_ranges([1, 2, 2, 3, 6, 6]) == "1-3</br>6"

    def test_decreasing_step_starts_new_run(self) -> None:
        """Input is not re-sorted."""
        assert compress_ranges([5, 6, 2, 3]) == "5-6</br>2-3"

    def test_custom_separator(self) -> None:
        assert compress_ranges([1, 2, 4], separator=", ") == "1-2, 4"

    def test_accepts_iterables(self) -> None:
        assert compress_ranges(iter([1, 2])) == "1-2"

    def test_default_separator_is_html_break(self) -> None:
        assert RANGE_SEPARATOR == "</br>"
