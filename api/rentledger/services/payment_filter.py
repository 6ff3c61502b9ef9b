from collections.abc import Collection, Iterable
from decimal import Decimal

from rentledger.core.config import settings
from rentledger.schemas.analytics import RentPayment


def is_rent_payment(payment: RentPayment) -> bool:
    # Legacy rows carry no payment type and are rent
    return not payment.payment_type or payment.payment_type == settings.rent_payment_type


def payments_for_period(
    all_payments: Iterable[RentPayment],
    lease_ids: Collection[str],
    rental_period: str,
) -> list[RentPayment]:
    """
    Rent payments for any of ``lease_ids`` that settle ``rental_period``.

    Partial payments for the same lease and period are all returned; callers
    sum them.
    """
    if not lease_ids or not rental_period:
        return []
    ids = set(lease_ids)
    return [
        p for p in all_payments
        if p.lease_id in ids
        and p.rental_period == rental_period
        and is_rent_payment(p)
    ]


def sum_paid(payments: Iterable[RentPayment]) -> Decimal:
    return sum((p.actual_rent_paid for p in payments), Decimal(0))
