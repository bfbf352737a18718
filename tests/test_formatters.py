"""
Tests for display formatting: thousands separators, dates and case badges.
"""

from datetime import timezone

import pytest

from covid_map.config.constants import PLACEHOLDER
from covid_map.formatters import abbreviate_cases, commafy, friendly_date


class TestCommafy:
    """Test cases for thousands-separator formatting."""

    def test_zero(self):
        assert commafy(0) == "0"

    def test_none_is_placeholder(self):
        assert commafy(None) == "-"
        assert commafy(None) == PLACEHOLDER

    def test_groups_by_three(self):
        assert commafy(1234567) == "1,234,567"
        assert commafy(999) == "999"
        assert commafy(1000) == "1,000"

    def test_large_values(self):
        assert commafy(10**20) == "100,000,000,000,000,000,000"

    def test_negative_and_float_values(self):
        assert commafy(-1234) == "-1,234"
        assert commafy(2500.0) == "2,500"
        assert commafy(4023.5) == "4,023.5"

    def test_numeric_string(self):
        assert commafy("31000000") == "31,000,000"

    def test_non_numeric_is_placeholder(self):
        assert commafy("abc") == PLACEHOLDER
        assert commafy(float("nan")) == PLACEHOLDER
        assert commafy(True) == PLACEHOLDER

    def test_custom_separator(self):
        assert commafy(1234567, separator=".") == "1.234.567"


class TestFriendlyDate:
    """Test cases for epoch-millisecond date formatting."""

    def test_none_is_placeholder(self):
        assert friendly_date(None) == "-"

    def test_valid_timestamp(self):
        assert friendly_date(1609459200000, tz=timezone.utc) == "Jan 01, 2021, 12:00 AM"

    def test_local_time_is_non_empty(self):
        formatted = friendly_date(1609459200000)
        assert formatted
        assert formatted != PLACEHOLDER

    def test_custom_format(self):
        assert friendly_date(1609459200000, fmt="%Y-%m-%d", tz=timezone.utc) == "2021-01-01"

    def test_unconvertible_input_is_placeholder(self):
        assert friendly_date("yesterday") == PLACEHOLDER
        assert friendly_date(10**30) == PLACEHOLDER


class TestAbbreviateCases:
    """Test cases for the truncating badge abbreviation."""

    @pytest.mark.parametrize(
        "cases, expected",
        [
            (0, "0"),
            (500, "500"),
            (1000, "1000"),
            (1001, "1k+"),
            (1500, "1k+"),
            (2500, "2k+"),
            (999999, "999k+"),
            (1000000, "1000k+"),
            (1000001, "1m+"),
            (1500000, "1m+"),
            (1234567, "1m+"),
            (12345678, "12m+"),
            (111820082, "111m+"),
        ],
    )
    def test_truncation(self, cases, expected):
        assert abbreviate_cases(cases) == expected

    def test_integral_float(self):
        assert abbreviate_cases(2500.0) == "2k+"

    def test_fractional_count_sliced_as_written(self):
        assert abbreviate_cases(1500.7) == "150k+"

    def test_missing_cases(self):
        assert abbreviate_cases(None) == PLACEHOLDER
