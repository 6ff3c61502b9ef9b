from rentledger.schemas.analytics import Lease
from rentledger.services.periods import month_end, period_bounds


def is_active_at_month_end(lease: Lease, target_month_year: str) -> bool:
    """Point-in-time occupancy: the lease covers the last day of the month."""
    if not lease.lease_start_date or not lease.lease_end_date:
        return False
    end = month_end(target_month_year)
    return lease.lease_start_date <= end and lease.lease_end_date >= end


def is_active_during_rental_period(lease: Lease, rental_period: str) -> bool:
    """True when the lease overlaps any day of the rental period."""
    if not lease.lease_start_date or not lease.lease_end_date:
        return False
    period_start, period_end = period_bounds(rental_period)
    return lease.lease_start_date <= period_end and lease.lease_end_date >= period_start
