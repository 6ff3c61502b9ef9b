from fastapi import APIRouter

from rentledger.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/health/config")
async def health_config():
    return {
        "status": "ok",
        "min_tracked_period": settings.min_tracked_period,
        "fiscal_year_start_month": settings.fiscal_year_start_month,
    }
