"""Type definitions for the contribution rate tables."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

# Smallest currency unit (one sen)
SMALLEST_UNIT = Decimal("0.01")


class CalculationMethod(str, Enum):
    """How a contribution amount is derived for a band."""

    FIXED = "FIXED"  # Amount as-is, used for the "not applicable" bands
    PERCENTAGE = "PERCENTAGE"  # Fraction of the base, rounded up
    EXACT_AMOUNT = "EXACT_AMOUNT"


@dataclass(frozen=True)
class RateRule:
    """One formula row of the schedule.

    Covers wages in [minimum, maximum), split into sub-bands of
    ``interval`` width.
    """

    minimum: Decimal
    maximum: Decimal
    interval: Decimal
    employer_method: CalculationMethod
    employer_amount: Decimal
    employee_method: CalculationMethod
    employee_amount: Decimal

    @classmethod
    def of(
        cls,
        minimum: Any,
        maximum: Any,
        interval: Any,
        employer_method: CalculationMethod,
        employer_amount: Any,
        employee_method: CalculationMethod,
        employee_amount: Any,
    ) -> RateRule:
        """Build a rule from plain numbers or strings."""
        return cls(
            minimum=to_decimal(minimum),
            maximum=to_decimal(maximum),
            interval=to_decimal(interval),
            employer_method=employer_method,
            employer_amount=to_decimal(employer_amount),
            employee_method=employee_method,
            employee_amount=to_decimal(employee_amount),
        )

    @property
    def band_count(self) -> int:
        return int((self.maximum - self.minimum) / self.interval)


@dataclass(frozen=True)
class Rate:
    """A resolved contribution pair for a wage range.

    ``wages_from`` is the sub-band start offset by one sen so that
    adjacent bands never share a boundary; ``wages_to`` is inclusive.
    """

    wages_from: Decimal
    wages_to: Decimal
    contribution_employer: Decimal
    contribution_employee: Decimal

    @property
    def contribution_total(self) -> Decimal:
        """Combined employer and employee contribution."""
        return self.contribution_employer + self.contribution_employee

    def covers(self, wages: Decimal) -> bool:
        """True when wages fall inside this band."""
        return self.wages_from - SMALLEST_UNIT < wages <= self.wages_to

    def to_dict(self) -> dict[str, str]:
        return {
            "wages_from": str(self.wages_from),
            "wages_to": str(self.wages_to),
            "contribution_employer": str(self.contribution_employer),
            "contribution_employee": str(self.contribution_employee),
            "contribution_total": str(self.contribution_total),
        }


def to_decimal(value: Any) -> Decimal:
    """Convert int/float/str to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
