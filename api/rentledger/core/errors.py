"""Error types raised by the rent ledger engine."""


class ValidationError(ValueError):
    """Input to the engine is malformed. Always surfaced, never defaulted."""


class InvalidPeriodFormat(ValidationError):
    """A period token is not ``YYYY-MM`` or its month is outside 1-12."""


class InvalidDateValue(ValidationError):
    """A date field could not be normalized to a calendar date."""
