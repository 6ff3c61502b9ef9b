"""
Per-property-group analytics for a target month.

A property group is the set of inventory units sharing a ``group_name``.
The monthly figures (occupancy, expected vs collected rent, delinquency rate)
look at the rental period settled during the target month; the YTD and
multi-month figures cover every lease ever attached to the group's units.
"""
import logging
from collections.abc import Sequence
from decimal import Decimal

from rentledger.core.config import settings
from rentledger.schemas.analytics import (
    Lease,
    PropertyGroupAnalytics,
    RentalInventory,
    RentPayment,
)
from rentledger.services.delinquency import current_period_delinquencies, scan_delinquencies
from rentledger.services.lease_activity import is_active_at_month_end, is_active_during_rental_period
from rentledger.services.periods import rental_period_for_target_month
from rentledger.services.rent_collection import monthly_rent_collected, ytd_rent_collected

logger = logging.getLogger(__name__)


def _group_of(unit: RentalInventory) -> str:
    return unit.group_name or settings.default_group_name


def property_group_analytics(
    group_name: str,
    inventory: Sequence[RentalInventory],
    leases: Sequence[Lease],
    payments: Sequence[RentPayment],
    target_month_year: str,
) -> PropertyGroupAnalytics:
    rental_period = rental_period_for_target_month(target_month_year)

    units = [u for u in inventory if _group_of(u) == group_name]
    unit_ids = {u.id for u in units}
    group_leases = [l for l in leases if l.unit_id in unit_ids]

    occupancy_rate: float | None = None
    if units:
        occupied = sum(1 for l in group_leases if is_active_at_month_end(l, target_month_year))
        occupancy_rate = occupied / len(units) * 100

    active_leases = [l for l in group_leases if is_active_during_rental_period(l, rental_period)]
    expected_rent = sum((l.rent_amount for l in active_leases), Decimal(0))
    rent_collected = monthly_rent_collected(
        payments, [l.id for l in active_leases], target_month_year
    )

    delinquency_rate: float | None = None
    if expected_rent > 0:
        delinquency_rate = float((expected_rent - rent_collected) / expected_rent * 100)

    return PropertyGroupAnalytics(
        group_name=group_name,
        target_month_year=target_month_year,
        rental_period=rental_period,
        total_units=len(units),
        occupancy_rate=occupancy_rate,
        expected_rent=expected_rent,
        rent_collected=rent_collected,
        delinquency_rate=delinquency_rate,
        delinquent_units=current_period_delinquencies(
            active_leases, units, payments, target_month_year
        ),
        ytd_rent_collected=ytd_rent_collected(
            payments, [l.id for l in group_leases], target_month_year
        ),
        multi_month_delinquencies=scan_delinquencies(
            group_leases, units, payments, target_month_year
        ),
    )


def portfolio_analytics(
    inventory: Sequence[RentalInventory],
    leases: Sequence[Lease],
    payments: Sequence[RentPayment],
    target_month_year: str,
) -> list[PropertyGroupAnalytics]:
    """One ``PropertyGroupAnalytics`` per group found in inventory, sorted by name."""
    rental_period_for_target_month(target_month_year)
    groups = sorted({_group_of(u) for u in inventory})
    logger.debug("Computing analytics for %d property groups (%s)", len(groups), target_month_year)
    return [
        property_group_analytics(name, inventory, leases, payments, target_month_year)
        for name in groups
    ]
