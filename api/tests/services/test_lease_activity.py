from datetime import date
from decimal import Decimal

from rentledger.schemas.analytics import Lease
from rentledger.services.lease_activity import is_active_at_month_end, is_active_during_rental_period


def _lease(start: date | None, end: date | None) -> Lease:
    return Lease(
        id="L1",
        unit_id="U1",
        tenant_name="Asha Rao",
        lease_start_date=start,
        lease_end_date=end,
        rent_amount=Decimal("1000"),
    )


class TestIsActiveDuringRentalPeriod:
    def test_lease_covering_whole_period(self):
        assert is_active_during_rental_period(_lease(date(2025, 1, 1), date(2025, 12, 31)), "2025-06")

    def test_lease_starting_mid_period(self):
        assert is_active_during_rental_period(_lease(date(2025, 6, 20), date(2026, 6, 19)), "2025-06")

    def test_lease_ending_on_first_day(self):
        assert is_active_during_rental_period(_lease(date(2025, 1, 1), date(2025, 6, 1)), "2025-06")

    def test_lease_starting_on_last_day(self):
        assert is_active_during_rental_period(_lease(date(2025, 6, 30), date(2025, 12, 31)), "2025-06")

    def test_lease_entirely_before_period(self):
        assert not is_active_during_rental_period(_lease(date(2025, 1, 1), date(2025, 5, 31)), "2025-06")

    def test_lease_entirely_after_period(self):
        assert not is_active_during_rental_period(_lease(date(2025, 7, 1), date(2025, 12, 31)), "2025-06")

    def test_missing_start_date(self):
        assert not is_active_during_rental_period(_lease(None, date(2025, 12, 31)), "2025-06")

    def test_missing_end_date(self):
        assert not is_active_during_rental_period(_lease(date(2025, 1, 1), None), "2025-06")


class TestIsActiveAtMonthEnd:
    def test_active_through_month_end(self):
        assert is_active_at_month_end(_lease(date(2025, 1, 1), date(2025, 12, 31)), "2025-06")

    def test_ending_on_month_end(self):
        assert is_active_at_month_end(_lease(date(2025, 1, 1), date(2025, 6, 30)), "2025-06")

    def test_ending_before_month_end(self):
        # Overlaps the month but has moved out by its last day
        lease = _lease(date(2025, 1, 1), date(2025, 6, 15))
        assert not is_active_at_month_end(lease, "2025-06")
        assert is_active_during_rental_period(lease, "2025-06")

    def test_starting_on_month_end(self):
        assert is_active_at_month_end(_lease(date(2025, 6, 30), date(2026, 6, 29)), "2025-06")

    def test_starting_after_month_end(self):
        assert not is_active_at_month_end(_lease(date(2025, 7, 1), date(2026, 6, 30)), "2025-06")

    def test_missing_dates(self):
        assert not is_active_at_month_end(_lease(None, None), "2025-06")
