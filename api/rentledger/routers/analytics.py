"""
Rent ledger analytics router.

Each endpoint receives a snapshot of ledger records and returns the computed
report; nothing is stored.
Endpoints:
  POST /analytics/delinquencies
  POST /analytics/delinquencies/current
  POST /analytics/ytd
  POST /analytics/property-groups
  POST /reports/summary?cadence=monthly&as_of=2025-07-15
"""
import logging
from collections.abc import Callable
from datetime import date
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Query

from rentledger.core.errors import ValidationError
from rentledger.schemas.analytics import (
    DelinquencyRequest,
    DelinquentUnitInfo,
    GroupAnalyticsRequest,
    LedgerSnapshot,
    MultiMonthDelinquentUnitInfo,
    PropertyGroupAnalytics,
    SummaryReport,
    YtdRequest,
    YtdResponse,
)
from rentledger.services.delinquency import current_period_delinquencies, scan_delinquencies
from rentledger.services.group_analytics import portfolio_analytics
from rentledger.services.periods import fiscal_year_window
from rentledger.services.rent_collection import ytd_rent_collected
from rentledger.services.summary_report import ReportCadence, period_dates, summary_report_data

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])

T = TypeVar("T")


def _run(compute: Callable[[], T]) -> T:
    """Call an engine function, turning validation failures into HTTP 400."""
    try:
        return compute()
    except ValidationError as exc:
        logger.warning("Rejected analytics request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


# ─── Delinquency ──────────────────────────────────────────────────────────────

@router.post("/analytics/delinquencies", response_model=list[MultiMonthDelinquentUnitInfo])
async def delinquencies(payload: DelinquencyRequest):
    return _run(lambda: scan_delinquencies(
        payload.leases,
        payload.inventory,
        payload.payments,
        payload.target_month_year,
        min_tracked_period=payload.min_tracked_period,
    ))


@router.post("/analytics/delinquencies/current", response_model=list[DelinquentUnitInfo])
async def current_delinquencies(payload: DelinquencyRequest):
    return _run(lambda: current_period_delinquencies(
        payload.leases,
        payload.inventory,
        payload.payments,
        payload.target_month_year,
    ))


# ─── Collections ──────────────────────────────────────────────────────────────

@router.post("/analytics/ytd", response_model=YtdResponse)
async def ytd(payload: YtdRequest):
    window = _run(lambda: fiscal_year_window(payload.target_month_year))
    total = _run(lambda: ytd_rent_collected(
        payload.payments, payload.lease_ids, payload.target_month_year
    ))
    return YtdResponse(
        target_month_year=payload.target_month_year,
        fiscal_year_start=window.start,
        fiscal_year_end=window.end,
        ytd_rent_collected=total,
    )


@router.post("/analytics/property-groups", response_model=list[PropertyGroupAnalytics])
async def property_groups(payload: GroupAnalyticsRequest):
    return _run(lambda: portfolio_analytics(
        payload.inventory,
        payload.leases,
        payload.payments,
        payload.target_month_year,
    ))


# ─── Summary report ───────────────────────────────────────────────────────────

@router.post("/reports/summary", response_model=SummaryReport)
async def summary_report(
    payload: LedgerSnapshot,
    cadence: ReportCadence = Query("monthly"),
    as_of: date | None = Query(None, description="Report date, defaults to today"),
):
    start, end = _run(lambda: period_dates(cadence, as_of or date.today()))
    return _run(lambda: summary_report_data(
        payload.leases, payload.payments, payload.inventory, start, end
    ))
