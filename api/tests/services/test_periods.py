"""
Unit tests for period arithmetic — pure functions, no I/O.

Run with:
    python -m pytest api/tests/services/test_periods.py -v
"""
from datetime import date

import pytest

from rentledger.core.errors import InvalidPeriodFormat, ValidationError
from rentledger.services.periods import (
    add_months,
    fiscal_year_window,
    iter_periods,
    month_end,
    parse_period,
    payment_month_for_rental_period,
    period_bounds,
    period_of,
    rental_period_for_target_month,
)


# ── rental_period_for_target_month ───────────────────────────────────────────

class TestRentalPeriodForTargetMonth:
    def test_mid_year(self):
        assert rental_period_for_target_month("2025-05") == "2025-04"

    def test_january_rolls_back_to_december(self):
        assert rental_period_for_target_month("2025-01") == "2024-12"

    def test_december(self):
        assert rental_period_for_target_month("2025-12") == "2025-11"

    def test_round_trip_every_month(self):
        for month in range(1, 13):
            target = f"2024-{month:02d}"
            assert add_months(rental_period_for_target_month(target), 1) == target

    @pytest.mark.parametrize(
        "bad",
        ["2025-13", "2025-00", "2025-5", "25-05", "2025/05", "May 2025", "", "2025-05\n", "２０２５-05", "0000-05"],
    )
    def test_malformed_token_raises(self, bad):
        with pytest.raises(InvalidPeriodFormat):
            rental_period_for_target_month(bad)

    def test_invalid_format_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            rental_period_for_target_month("2025-13")


# ── token helpers ────────────────────────────────────────────────────────────

class TestPeriodHelpers:
    def test_parse_period(self):
        assert parse_period("2025-03") == (2025, 3)

    def test_add_months_forward_across_year(self):
        assert add_months("2024-11", 3) == "2025-02"

    def test_add_months_backward_across_years(self):
        assert add_months("2025-02", -14) == "2023-12"

    def test_payment_month_follows_rental_period(self):
        assert payment_month_for_rental_period("2024-12") == "2025-01"

    def test_period_bounds_leap_february(self):
        assert period_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))

    def test_month_end(self):
        assert month_end("2025-04") == date(2025, 4, 30)

    def test_period_of(self):
        assert period_of(date(2025, 7, 31)) == "2025-07"

    def test_iter_periods_inclusive_across_year(self):
        assert list(iter_periods("2024-11", "2025-02")) == ["2024-11", "2024-12", "2025-01", "2025-02"]

    def test_iter_periods_empty_when_start_after_end(self):
        assert list(iter_periods("2025-05", "2025-04")) == []

    def test_iter_periods_stops_at_last_representable_month(self):
        assert list(iter_periods("9999-11", "9999-12")) == ["9999-11", "9999-12"]


# ── year range 0001-9999 ─────────────────────────────────────────────────────

class TestYearRange:
    def test_year_zero_rejected(self):
        with pytest.raises(InvalidPeriodFormat, match="0001-9999"):
            parse_period("0000-05")

    def test_earliest_period_parses(self):
        assert parse_period("0001-01") == (1, 1)

    def test_rental_period_before_year_one_raises(self):
        with pytest.raises(InvalidPeriodFormat):
            rental_period_for_target_month("0001-01")

    def test_shift_past_year_9999_raises(self):
        with pytest.raises(InvalidPeriodFormat):
            add_months("9999-12", 1)

    def test_shift_to_range_edges(self):
        assert add_months("0001-02", -1) == "0001-01"
        assert add_months("9999-11", 1) == "9999-12"


# ── fiscal_year_window ───────────────────────────────────────────────────────

class TestFiscalYearWindow:
    def test_after_april_starts_same_year(self):
        window = fiscal_year_window("2025-05")
        assert window.start == date(2025, 4, 1)
        assert window.end == date(2025, 5, 31)

    def test_before_april_starts_previous_year(self):
        window = fiscal_year_window("2025-02")
        assert window.start == date(2024, 4, 1)
        assert window.end == date(2025, 2, 28)

    def test_april_itself_opens_new_year(self):
        window = fiscal_year_window("2025-04")
        assert window.start == date(2025, 4, 1)
        assert window.end == date(2025, 4, 30)

    def test_march_closes_previous_year(self):
        assert fiscal_year_window("2025-03").start == date(2024, 4, 1)

    def test_window_is_not_empty(self):
        assert not fiscal_year_window("2025-01").is_empty

    def test_custom_start_month(self):
        assert fiscal_year_window("2025-06", start_month=7).start == date(2024, 7, 1)

    def test_contains_is_inclusive(self):
        window = fiscal_year_window("2025-05")
        assert window.contains(date(2025, 4, 1))
        assert window.contains(date(2025, 5, 31))
        assert not window.contains(date(2025, 3, 31))
        assert not window.contains(date(2025, 6, 1))

    def test_malformed_target_raises(self):
        with pytest.raises(InvalidPeriodFormat):
            fiscal_year_window("2025-99")

    @pytest.mark.parametrize("target", ["0000-02", "0001-02"])
    def test_window_before_year_one_raises(self, target):
        with pytest.raises(InvalidPeriodFormat):
            fiscal_year_window(target)

    def test_window_in_year_one_after_start_month(self):
        assert fiscal_year_window("0001-05").start == date(1, 4, 1)
