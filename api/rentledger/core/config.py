import re
import sys
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings

_PERIOD_PATTERN = re.compile(r"(?!0000)[0-9]{4}-(0[1-9]|1[0-2])", re.ASCII)


class Settings(BaseSettings):
    # ─── App ──────────────────────────────────────
    environment: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_log_level: str = "info"

    # ─── Domain ───────────────────────────────────
    domain: str = "localhost"

    # ─── Rate limiting ────────────────────────────
    rate_limit_storage_uri: str = "memory://"
    rate_limit_default: str = "120/minute"

    # ─── Delinquency engine ───────────────────────
    # Payment records are only reliable from this rental period onward
    min_tracked_period: str = "2025-03"
    fiscal_year_start_month: int = 4
    delinquency_tolerance: Decimal = Decimal("0.01")
    rent_payment_type: str = "Rent Payment"

    # ─── Reporting ────────────────────────────────
    unit_not_available_label: str = "N/A"
    default_group_name: str = "Ungrouped"
    report_timezone: str = "UTC"

    # Look for .env in current dir (Docker) or parent dir (local dev from api/)
    model_config = {"env_file": [".env", "../.env"], "extra": "ignore"}


def _validate_engine_settings(s: Settings) -> None:
    """Abort startup in production if the engine settings cannot produce correct reports."""
    errors: dict[str, str] = {}

    if not _PERIOD_PATTERN.fullmatch(s.min_tracked_period):
        errors["min_tracked_period"] = (
            f"MIN_TRACKED_PERIOD must be a YYYY-MM token, got {s.min_tracked_period!r}"
        )
    if not 1 <= s.fiscal_year_start_month <= 12:
        errors["fiscal_year_start_month"] = (
            f"FISCAL_YEAR_START_MONTH must be between 1 and 12, got {s.fiscal_year_start_month}"
        )
    if s.delinquency_tolerance < 0:
        errors["delinquency_tolerance"] = "DELINQUENCY_TOLERANCE must not be negative"
    try:
        ZoneInfo(s.report_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        errors["report_timezone"] = f"REPORT_TIMEZONE is not a known time zone: {s.report_timezone!r}"

    if errors:
        if s.environment == "production":
            # Hard fail in production — wrong reports must not reach users
            print("FATAL: Invalid engine configuration:", file=sys.stderr)
            for e in errors.values():
                print(f"  - {e}", file=sys.stderr)
            sys.exit(1)
        else:
            # Warn loudly in development and fall back to the defaults
            import logging
            log = logging.getLogger("rentledger.config")
            for field, e in errors.items():
                default = Settings.model_fields[field].default
                log.warning("ENGINE CONFIG WARNING: %s; using %r", e, default)
                setattr(s, field, default)


settings = Settings()
_validate_engine_settings(settings)
