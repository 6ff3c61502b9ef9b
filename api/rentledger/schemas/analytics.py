from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from rentledger.core.dates import normalize_date

CalendarDate = Annotated[date, BeforeValidator(normalize_date)]
OptionalCalendarDate = Annotated[date | None, BeforeValidator(normalize_date)]
Money = Annotated[Decimal, Field(ge=0)]


# ─── Source records ────────────────────────────────────────────────────────

class Lease(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    unit_id: str
    tenant_name: str = ""
    lease_start_date: OptionalCalendarDate = None
    lease_end_date: OptionalCalendarDate = None
    rent_amount: Money
    is_active: bool = True
    created_at: OptionalCalendarDate = None


class RentPayment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lease_id: str
    rental_period: str  # "YYYY-MM" the payment is for, not when it was made
    payment_date: CalendarDate
    actual_rent_paid: Money
    payment_type: str | None = None  # "Rent Payment" | "Bill Payment" | ... ; None on legacy rows


class RentalInventory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    unit_number: str
    group_name: str | None = None


# ─── Delinquency ───────────────────────────────────────────────────────────

class DelinquentPeriod(BaseModel):
    period: str
    amount_due: Decimal


class MultiMonthDelinquentUnitInfo(BaseModel):
    unit_id: str
    unit_number: str
    tenant_name: str
    lease_id: str
    lease_rent_amount: Decimal
    delinquent_periods: list[DelinquentPeriod]
    total_overdue_amount: Decimal
    count_delinquent_months: int
    last_lease_end_date: date | None


class DelinquentUnitInfo(BaseModel):
    """Shortfall for a single rental period."""
    unit_id: str
    unit_number: str
    tenant_name: str
    lease_id: str
    lease_rent_amount: Decimal
    amount_paid_this_month: Decimal
    amount_due_this_month: Decimal
    lease_end_date: date | None


# ─── Collections ───────────────────────────────────────────────────────────

class FiscalYearWindow(BaseModel):
    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


class PropertyGroupAnalytics(BaseModel):
    group_name: str
    target_month_year: str
    rental_period: str
    total_units: int
    occupancy_rate: float | None
    expected_rent: Decimal
    rent_collected: Decimal
    delinquency_rate: float | None
    delinquent_units: list[DelinquentUnitInfo]
    ytd_rent_collected: Decimal
    multi_month_delinquencies: list[MultiMonthDelinquentUnitInfo]


class SummaryReport(BaseModel):
    period: str
    total_rent_collected: Decimal
    new_leases: int
    ended_leases: int
    occupancy_rate: int
    ytd_rent_collected: Decimal


# ─── Request bodies ────────────────────────────────────────────────────────

class LedgerSnapshot(BaseModel):
    leases: list[Lease] = []
    payments: list[RentPayment] = []
    inventory: list[RentalInventory] = []


class DelinquencyRequest(LedgerSnapshot):
    target_month_year: str
    min_tracked_period: str | None = None


class GroupAnalyticsRequest(LedgerSnapshot):
    target_month_year: str


class YtdRequest(BaseModel):
    target_month_year: str
    lease_ids: list[str]
    payments: list[RentPayment] = []


class YtdResponse(BaseModel):
    target_month_year: str
    fiscal_year_start: date
    fiscal_year_end: date
    ytd_rent_collected: Decimal
