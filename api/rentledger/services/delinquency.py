"""
Delinquency scanner — pure functions, no DB, fully unit-testable.

For every lease, walks each rental period from the later of the lease start
month and the tracking floor (``settings.min_tracked_period``) up to the
newest period that can be due for the target month, and records the periods
where rent collected fell short of the lease rent by more than the tolerance.

Arrears convention
──────────────────
Rent for period M is expected to be recorded in month M+1. Only payments that
claim period M *and* are dated in M+1 count toward it; a payment recorded two
months late leaves M delinquent.
"""
import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from rentledger.core.config import settings
from rentledger.schemas.analytics import (
    DelinquentPeriod,
    DelinquentUnitInfo,
    Lease,
    MultiMonthDelinquentUnitInfo,
    RentalInventory,
    RentPayment,
)
from rentledger.services.lease_activity import is_active_during_rental_period
from rentledger.services.payment_filter import payments_for_period, sum_paid
from rentledger.services.periods import (
    iter_periods,
    parse_period,
    payment_month_for_rental_period,
    period_bounds,
    period_of,
    rental_period_for_target_month,
)

logger = logging.getLogger(__name__)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _unit_numbers(inventory: Iterable[RentalInventory]) -> dict[str, str]:
    numbers: dict[str, str] = {}
    for unit in inventory:
        numbers.setdefault(unit.id, unit.unit_number)
    return numbers


def _unit_number(numbers: dict[str, str], unit_id: str) -> str:
    return numbers.get(unit_id) or settings.unit_not_available_label


def _paid_in_arrears_month(
    payments: Iterable[RentPayment],
    lease_id: str,
    rental_period: str,
) -> Decimal:
    """Rent paid for ``rental_period`` and recorded in the month after it."""
    month_start, month_end = period_bounds(payment_month_for_rental_period(rental_period))
    return sum_paid(
        p for p in payments_for_period(payments, {lease_id}, rental_period)
        if month_start <= p.payment_date <= month_end
    )


def _delinquent_periods_for_lease(
    lease: Lease,
    payments: Sequence[RentPayment],
    floor: str,
    latest: str,
    tolerance: Decimal,
) -> list[DelinquentPeriod]:
    # Leases without a complete window are never active
    if not lease.lease_start_date or not lease.lease_end_date:
        return []

    start = max(period_of(lease.lease_start_date), floor)
    delinquent: list[DelinquentPeriod] = []

    for period in iter_periods(start, latest):
        period_start, _ = period_bounds(period)
        if period_start > lease.lease_end_date:
            break
        if not is_active_during_rental_period(lease, period):
            continue

        amount_due = lease.rent_amount - _paid_in_arrears_month(payments, lease.id, period)
        if amount_due > tolerance:
            delinquent.append(DelinquentPeriod(period=period, amount_due=amount_due))

    return delinquent


# ── Public API ───────────────────────────────────────────────────────────────

def scan_delinquencies(
    leases: Iterable[Lease],
    inventory: Iterable[RentalInventory],
    all_payments: Iterable[RentPayment],
    target_month_year: str,
    *,
    min_tracked_period: str | None = None,
    tolerance: Decimal | None = None,
) -> list[MultiMonthDelinquentUnitInfo]:
    """
    Every past delinquent rental period, rolled up per lease.

    ``target_month_year`` is the month payments are being recorded in; the
    newest period considered is the month before it. Leases with no shortfall
    are omitted and each lease id appears at most once.
    """
    latest = rental_period_for_target_month(target_month_year)
    floor = min_tracked_period or settings.min_tracked_period
    parse_period(floor)
    if tolerance is None:
        tolerance = settings.delinquency_tolerance

    payments = list(all_payments)
    numbers = _unit_numbers(inventory)
    by_lease: dict[str, MultiMonthDelinquentUnitInfo] = {}
    scanned = 0

    for lease in leases:
        scanned += 1
        periods = _delinquent_periods_for_lease(lease, payments, floor, latest, tolerance)
        if not periods:
            continue

        periods.sort(key=lambda dp: dp.period)
        by_lease[lease.id] = MultiMonthDelinquentUnitInfo(
            unit_id=lease.unit_id,
            unit_number=_unit_number(numbers, lease.unit_id),
            tenant_name=lease.tenant_name,
            lease_id=lease.id,
            lease_rent_amount=lease.rent_amount,
            delinquent_periods=periods,
            total_overdue_amount=sum((dp.amount_due for dp in periods), Decimal(0)),
            count_delinquent_months=len(periods),
            last_lease_end_date=lease.lease_end_date,
        )

    logger.debug(
        "Delinquency scan for %s (periods %s..%s): %d leases, %d delinquent",
        target_month_year, floor, latest, scanned, len(by_lease),
    )
    return list(by_lease.values())


def current_period_delinquencies(
    leases: Iterable[Lease],
    inventory: Iterable[RentalInventory],
    all_payments: Iterable[RentPayment],
    target_month_year: str,
    *,
    tolerance: Decimal | None = None,
) -> list[DelinquentUnitInfo]:
    """
    Leases short on the rental period settled during ``target_month_year``.

    Only leases active during that rental period are considered, and only
    payments dated inside the target month count.
    """
    rental_period = rental_period_for_target_month(target_month_year)
    if tolerance is None:
        tolerance = settings.delinquency_tolerance

    payments = list(all_payments)
    numbers = _unit_numbers(inventory)
    delinquent: list[DelinquentUnitInfo] = []

    for lease in leases:
        if not is_active_during_rental_period(lease, rental_period):
            continue
        paid = _paid_in_arrears_month(payments, lease.id, rental_period)
        amount_due = lease.rent_amount - paid
        if amount_due <= tolerance:
            continue
        delinquent.append(
            DelinquentUnitInfo(
                unit_id=lease.unit_id,
                unit_number=_unit_number(numbers, lease.unit_id),
                tenant_name=lease.tenant_name,
                lease_id=lease.id,
                lease_rent_amount=lease.rent_amount,
                amount_paid_this_month=paid,
                amount_due_this_month=amount_due,
                lease_end_date=lease.lease_end_date,
            )
        )

    return delinquent
