"""Contribution rate resolution against a section's band table."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from epf_engine.calculators.rate_table import apply_method
from epf_engine.calculators.types import Rate, to_decimal

if TYPE_CHECKING:
    from epf_engine.schedule import Section

logger = logging.getLogger(__name__)


class InvalidWagesError(ValueError):
    """Raised when wages cannot be resolved to a rate."""

    def __init__(self, wages: Any, reason: str = "wages must not be negative"):
        self.wages = wages
        self.reason = reason
        super().__init__(f"Invalid wages {wages}: {reason}")


class RateResolver:
    """Resolves the contribution rate for a wage within a section.

    Resolution order:
    1. Zero wages take the first band (the "not applicable" row)
    2. The band whose (lower, upper] range contains the wages
    3. Above the last band, the section's final rule is applied
       directly to the wages
    """

    def resolve(self, section: Section, wages: Any) -> Rate:
        """Resolve the rate for wages in a section.

        Args:
            section: The section whose table is searched
            wages: Monthly wages; int, float, str or Decimal

        Returns:
            The matching band, or a synthetic rate for wages above the table

        Raises:
            InvalidWagesError: If wages are negative
        """
        amount = self._normalize(wages)
        rates = section.rates()

        if amount == 0:
            return rates[0]

        for rate in rates:
            if rate.covers(amount):
                return rate

        return self.extrapolate(section, amount)

    def extrapolate(self, section: Section, wages: Decimal) -> Rate:
        """Apply the section's last rule to wages beyond the table."""
        rule = section.rules[-1]
        logger.debug(
            "Wages %s exceed section %s table, extrapolating from last rule",
            wages,
            section.name,
        )
        return Rate(
            wages_from=wages,
            wages_to=wages,
            contribution_employer=apply_method(
                rule.employer_method, wages, rule.employer_amount
            ),
            contribution_employee=apply_method(
                rule.employee_method, wages, rule.employee_amount
            ),
        )

    def _normalize(self, wages: Any) -> Decimal:
        try:
            amount = to_decimal(wages)
        except ArithmeticError as e:
            raise InvalidWagesError(wages, "not a number") from e
        if not amount.is_finite():
            raise InvalidWagesError(wages, "must be a finite amount")
        if amount < 0:
            raise InvalidWagesError(wages)
        return amount
