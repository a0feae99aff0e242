"""
Tests for the input parsing and display helpers.
"""

import pytest

from strategies import Strategy
from utils import ALGORITHM_INFO, FREE_COLOR, explain, get_color, parse_int, parse_sizes


class TestParsing:

    @pytest.mark.parametrize("text, expected", [
        ("42", 42),
        (" 7 ", 7),
        ("12kb", 12),
        ("-3", -3),
        ("abc", None),
        ("", None),
        (None, None),
    ])
    def test_parse_int(self, text, expected):
        assert parse_int(text) == expected

    def test_parse_sizes_filters_entries(self):
        assert parse_sizes("20, 30,abc, -5, 0, 50kb,") == [20, 30, 50]

    def test_parse_sizes_empty(self):
        assert parse_sizes("") == []
        assert parse_sizes(None) == []


class TestDisplay:

    def test_free_color(self):
        assert get_color(False) == FREE_COLOR

    def test_allocated_color_stable_per_process(self):
        assert get_color(True, "P1") == get_color(True, "P1")
        assert get_color(True, "P1").startswith("hsl(")

    def test_every_strategy_explained(self):
        assert set(ALGORITHM_INFO) == set(Strategy)
        text = explain("next-fit")
        assert text.startswith("### Next Fit Algorithm")
        assert "**Time Complexity:** O(n)" in text
