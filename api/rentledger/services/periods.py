"""
Period arithmetic — pure functions over ``"YYYY-MM"`` tokens.

Rent is paid in arrears: payments recorded in a target month settle the
previous month's rental period. Fiscal years start on the first day of
``settings.fiscal_year_start_month`` (April by default), not on January 1.
"""
import re
from calendar import monthrange
from collections.abc import Iterator
from datetime import date

from rentledger.core.config import settings
from rentledger.core.errors import InvalidPeriodFormat
from rentledger.schemas.analytics import FiscalYearWindow

_PERIOD_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})", re.ASCII)

# Every period must map onto datetime.date
_YEAR_MIN = 1
_YEAR_MAX = 9999


def parse_period(token: str) -> tuple[int, int]:
    """Return ``(year, month)`` for a ``YYYY-MM`` token."""
    match = _PERIOD_PATTERN.fullmatch(token) if isinstance(token, str) else None
    if not match:
        raise InvalidPeriodFormat(f'Invalid period {token!r}. Expected "YYYY-MM".')
    year, month = int(match.group(1)), int(match.group(2))
    if year < _YEAR_MIN:
        raise InvalidPeriodFormat(f"Invalid period {token!r}: year must be 0001-9999.")
    if not 1 <= month <= 12:
        raise InvalidPeriodFormat(f"Invalid period {token!r}: month must be 01-12.")
    return year, month


def format_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def period_of(d: date) -> str:
    return format_period(d.year, d.month)


def add_months(period: str, months: int) -> str:
    year, month = parse_period(period)
    index = year * 12 + (month - 1) + months
    new_year = index // 12
    if not _YEAR_MIN <= new_year <= _YEAR_MAX:
        raise InvalidPeriodFormat(
            f"Shifting {period!r} by {months} months leaves years 0001-9999."
        )
    return format_period(new_year, index % 12 + 1)


def rental_period_for_target_month(target_month_year: str) -> str:
    """
    Rental period settled by payments recorded in ``target_month_year``.

    "2025-05" → "2025-04", "2025-01" → "2024-12"
    """
    return add_months(target_month_year, -1)


def payment_month_for_rental_period(rental_period: str) -> str:
    """Month in which rent for ``rental_period`` is expected to be recorded."""
    return add_months(rental_period, 1)


def period_bounds(period: str) -> tuple[date, date]:
    """Return (first_day, last_day) for a YYYY-MM token."""
    year, month = parse_period(period)
    last = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def month_end(period: str) -> date:
    return period_bounds(period)[1]


def iter_periods(start: str, end: str) -> Iterator[str]:
    """Yield every period token from ``start`` to ``end`` inclusive."""
    parse_period(start)
    parse_period(end)
    current = start
    while current <= end:
        yield current
        if current == end:
            break
        current = add_months(current, 1)


def fiscal_year_window(
    target_month_year: str,
    start_month: int | None = None,
) -> FiscalYearWindow:
    """
    Fiscal-year-to-date window ending with ``target_month_year``.

    The fiscal year containing a target month before the start month began in
    the previous calendar year: with an April start, "2025-02" → 2024-04-01.
    """
    if start_month is None:
        start_month = settings.fiscal_year_start_month
    year, month = parse_period(target_month_year)
    fiscal_start_year = year if month >= start_month else year - 1
    if fiscal_start_year < _YEAR_MIN:
        raise InvalidPeriodFormat(
            f"No fiscal year can start before {target_month_year!r}: year 0001 is the earliest."
        )
    return FiscalYearWindow(
        start=date(fiscal_start_year, start_month, 1),
        end=month_end(target_month_year),
    )
