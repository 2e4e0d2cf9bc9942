"""Expansion of schedule rules into discrete wage-band tables."""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal
from functools import lru_cache

from epf_engine.calculators.types import (
    SMALLEST_UNIT,
    CalculationMethod,
    Rate,
    RateRule,
)

logger = logging.getLogger(__name__)


class InvalidScheduleError(Exception):
    """Raised when a section's rule list cannot produce a valid table."""

    def __init__(self, section: str, reason: str):
        self.section = section
        self.reason = reason
        super().__init__(f"Invalid rules for section '{section}': {reason}")


def apply_method(method: CalculationMethod, base: Decimal, amount: Decimal) -> Decimal:
    """Calculate one side of a contribution.

    Percentages are taken of ``base`` and rounded up to a whole ringgit.
    Fixed and exact amounts are returned untouched.
    """
    if method is CalculationMethod.PERCENTAGE:
        return (base * amount).to_integral_value(rounding=ROUND_CEILING)
    return amount


def validate_rules(section: str, rules: tuple[RateRule, ...]) -> None:
    """Check that rules are non-empty, well-stepped and contiguous.

    Raises:
        InvalidScheduleError: On the first problem found
    """
    if not rules:
        raise InvalidScheduleError(section, "no rules defined")

    previous: RateRule | None = None
    for rule in rules:
        if rule.interval <= 0:
            raise InvalidScheduleError(
                section, f"interval {rule.interval} must be positive"
            )
        if rule.maximum <= rule.minimum:
            raise InvalidScheduleError(
                section, f"empty range {rule.minimum}-{rule.maximum}"
            )
        if (rule.maximum - rule.minimum) % rule.interval != 0:
            raise InvalidScheduleError(
                section,
                f"range {rule.minimum}-{rule.maximum} is not a multiple "
                f"of interval {rule.interval}",
            )
        if previous is not None and rule.minimum != previous.maximum:
            raise InvalidScheduleError(
                section,
                f"gap or overlap between {previous.maximum} and {rule.minimum}",
            )
        previous = rule


@lru_cache(maxsize=None)
def build_rates(rules: tuple[RateRule, ...]) -> tuple[Rate, ...]:
    """Expand rules into the ordered band table.

    Each rule contributes one band per interval step between its minimum
    and maximum. Order follows the rules, so the table ascends by wage.
    """
    rates: list[Rate] = []
    for rule in rules:
        start = rule.minimum
        while start < rule.maximum:
            to = start + rule.interval
            rates.append(
                Rate(
                    wages_from=start + SMALLEST_UNIT,
                    wages_to=to,
                    contribution_employer=apply_method(
                        rule.employer_method, to, rule.employer_amount
                    ),
                    contribution_employee=apply_method(
                        rule.employee_method, to, rule.employee_amount
                    ),
                )
            )
            start = to

    logger.debug("Built %d rates from %d rules", len(rates), len(rules))
    return tuple(rates)
