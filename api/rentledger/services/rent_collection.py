"""
Rent collected aggregates.

YTD sums by *payment date*: a payment recorded in April for March's rent
counts toward the fiscal year that contains April.
"""
import logging
from collections.abc import Collection, Iterable
from datetime import date
from decimal import Decimal

from rentledger.schemas.analytics import RentPayment
from rentledger.services.payment_filter import is_rent_payment, payments_for_period, sum_paid
from rentledger.services.periods import fiscal_year_window, period_bounds, rental_period_for_target_month

logger = logging.getLogger(__name__)


def rent_collected_between(
    all_payments: Iterable[RentPayment],
    start: date,
    end: date,
    lease_ids: Collection[str] | None = None,
) -> Decimal:
    """Rent paid with a payment date in [start, end]. ``lease_ids=None`` means every lease."""
    if end < start:
        return Decimal(0)
    ids = set(lease_ids) if lease_ids is not None else None
    return sum_paid(
        p for p in all_payments
        if (ids is None or p.lease_id in ids)
        and is_rent_payment(p)
        and start <= p.payment_date <= end
    )


def ytd_rent_collected(
    all_payments: Iterable[RentPayment],
    lease_ids: Collection[str],
    target_month_year: str,
) -> Decimal:
    """Fiscal-year-to-date rent collected for a cohort of leases."""
    window = fiscal_year_window(target_month_year)
    if window.is_empty:
        logger.debug("Empty fiscal window for %s, nothing collected", target_month_year)
        return Decimal(0)
    if not lease_ids:
        return Decimal(0)
    return rent_collected_between(all_payments, window.start, window.end, lease_ids)


def monthly_rent_collected(
    all_payments: Iterable[RentPayment],
    lease_ids: Collection[str],
    target_month_year: str,
) -> Decimal:
    """Rent recorded during the target month for the rental period it settles."""
    rental_period = rental_period_for_target_month(target_month_year)
    month_start, month_end = period_bounds(target_month_year)
    return sum_paid(
        p for p in payments_for_period(all_payments, lease_ids, rental_period)
        if month_start <= p.payment_date <= month_end
    )
