"""
Summary report aggregates for the periodic landlord report.

Produces the figures the report template needs for one reporting period:

    total_rent_collected  – rent payments recorded within the period
    new_leases            – leases created within the period
    ended_leases          – leases whose end date falls within the period
    occupancy_rate        – active leases still running after the period / total units
    ytd_rent_collected    – fiscal-year-to-date rent up to the period's last month

Rendering and delivery of the report are handled by the caller.
"""
import logging
from calendar import monthrange
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Literal

from rentledger.core.errors import ValidationError
from rentledger.schemas.analytics import Lease, RentalInventory, RentPayment, SummaryReport
from rentledger.services.periods import period_of
from rentledger.services.rent_collection import rent_collected_between, ytd_rent_collected

logger = logging.getLogger(__name__)

ReportCadence = Literal["biweekly", "monthly", "quarterly"]

REPORT_CADENCES: tuple[str, ...] = ("biweekly", "monthly", "quarterly")


def period_dates(cadence: str, today: date) -> tuple[date, date]:
    """Return (start, end) of the reporting period containing ``today``."""
    if cadence == "biweekly":
        # Last 14 days, today included
        return today - timedelta(days=13), today
    if cadence == "monthly":
        last = monthrange(today.year, today.month)[1]
        return date(today.year, today.month, 1), date(today.year, today.month, last)
    if cadence == "quarterly":
        q_start_month = (today.month - 1) // 3 * 3 + 1
        q_end_month = q_start_month + 2
        last = monthrange(today.year, q_end_month)[1]
        return date(today.year, q_start_month, 1), date(today.year, q_end_month, last)
    raise ValidationError(
        f"Unknown report cadence {cadence!r}. Expected one of {', '.join(REPORT_CADENCES)}."
    )


def summary_report_data(
    leases: Sequence[Lease],
    payments: Sequence[RentPayment],
    inventory: Sequence[RentalInventory],
    period_start: date,
    period_end: date,
) -> SummaryReport:
    def in_period(d: date | None) -> bool:
        return d is not None and period_start <= d <= period_end

    new_leases = sum(1 for l in leases if in_period(l.created_at))
    ended_leases = sum(1 for l in leases if in_period(l.lease_end_date))

    # Occupancy: leases still running once the period is over
    active_leases = [
        l for l in leases
        if l.is_active and (l.lease_end_date is None or l.lease_end_date > period_end)
    ]
    total_units = len(inventory)
    occupancy_rate = round(len(active_leases) / total_units * 100) if total_units else 0

    report = SummaryReport(
        period=f"{period_start.isoformat()} to {period_end.isoformat()}",
        total_rent_collected=rent_collected_between(payments, period_start, period_end),
        new_leases=new_leases,
        ended_leases=ended_leases,
        occupancy_rate=occupancy_rate,
        ytd_rent_collected=ytd_rent_collected(
            payments, [l.id for l in leases], period_of(period_end)
        ),
    )
    logger.debug(
        "Summary report %s: collected=%s new=%d ended=%d occupancy=%d%%",
        report.period, report.total_rent_collected, new_leases, ended_leases, occupancy_rate,
    )
    return report
