"""Rate table construction and resolution."""

from epf_engine.calculators.rate_resolver import InvalidWagesError, RateResolver
from epf_engine.calculators.rate_table import (
    InvalidScheduleError,
    apply_method,
    build_rates,
    validate_rules,
)
from epf_engine.calculators.types import (
    SMALLEST_UNIT,
    CalculationMethod,
    Rate,
    RateRule,
)

__all__ = [
    "SMALLEST_UNIT",
    "CalculationMethod",
    "InvalidScheduleError",
    "InvalidWagesError",
    "Rate",
    "RateResolver",
    "RateRule",
    "apply_method",
    "build_rates",
    "validate_rules",
]
