"""Tests for ABHA date helpers."""

from datetime import date

import pytest

from abha_sdk.utils.dates import calculate_age, parse_abha_date, to_abha_date


class TestParseABHADate:
    """Tests for DD-MM-YYYY parsing."""

    def test_valid(self):
        assert parse_abha_date("26-11-1989") == date(1989, 11, 26)

    def test_leap_day(self):
        assert parse_abha_date("29-02-2024") == date(2024, 2, 29)

    @pytest.mark.parametrize(
        "value",
        ["13-13-2020", "31-02-2020", "29-02-2023", "00-01-2020", "1989-11-26", "26/11/1989", "", None],
    )
    def test_rejected(self, value):
        assert parse_abha_date(value) is None

    @pytest.mark.parametrize("value", [20200101, 1.5, b"01-01-2020", ["01-01-2020"], "٠١-٠١-٢٠٢٠"])
    def test_non_string_or_non_ascii(self, value):
        assert parse_abha_date(value) is None

    @pytest.mark.parametrize(
        "value", [date(1, 1, 1), date(1989, 11, 26), date(2024, 2, 29), date(9999, 12, 31)]
    )
    def test_round_trip(self, value):
        assert parse_abha_date(to_abha_date(value)) == value

    def test_year_is_zero_padded(self):
        assert to_abha_date(date(5, 3, 7)) == "07-03-0005"


class TestCalculateAge:
    """Tests for age calculation."""

    def test_age(self):
        assert calculate_age("26-11-1989", today=date(2026, 2, 10)) == 36

    def test_on_birthday(self):
        assert calculate_age("10-02-2000", today=date(2026, 2, 10)) == 26

    def test_day_before_birthday(self):
        assert calculate_age("11-02-2000", today=date(2026, 2, 10)) == 25

    def test_invalid_date(self):
        assert calculate_age("31-02-2020", today=date(2026, 2, 10)) is None
