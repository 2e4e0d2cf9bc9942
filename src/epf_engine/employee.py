"""Employees and the choice of Third Schedule section."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from epf_engine.calculators.types import Rate, to_decimal
from epf_engine.schedule import Section, SectionName, ThirdSchedule, get_schedule

# Age after which the senior sections (C and D) apply
SENIOR_AGE = 60


class Citizenship(str, Enum):
    """Citizenship categories used by the schedule."""

    UNKNOWN = "unknown"
    MALAYSIAN = "malaysian"
    PERMANENT_RESIDENT = "permanent_resident"
    NON_MALAYSIAN = "non_malaysian"


class IncompleteEmployeeError(ValueError):
    """Raised when a single section is requested without enough data."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Cannot determine section: employee {field} is unknown")


def anniversary(born: date, years: int) -> date:
    """Date a person born on ``born`` turns ``years`` old.

    A 29 February birthday falls on 1 March in non-leap years.
    """
    try:
        return born.replace(year=born.year + years)
    except ValueError:
        return date(born.year + years, 3, 1)


def age_on(born: date, as_of: date) -> int:
    """Completed years of age on a date."""
    years = as_of.year - born.year
    if as_of < anniversary(born, years):
        years -= 1
    return years


def is_senior(born: date, as_of: date) -> bool:
    """True once the evaluation date is past the sixtieth birthday."""
    return as_of > anniversary(born, SENIOR_AGE)


@dataclass(frozen=True)
class Employee:
    """An employee as far as contribution rates are concerned.

    ``contribution_before_cutoff`` only matters for non-Malaysians: it marks
    an election to contribute before 1 August 1998.
    """

    citizenship: Citizenship = Citizenship.UNKNOWN
    contribution_before_cutoff: bool = False
    date_of_birth: date | None = None
    wages: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.wages, Decimal):
            object.__setattr__(self, "wages", to_decimal(self.wages))

    @classmethod
    def malaysian(cls, date_of_birth: date | None, wages: Any) -> Employee:
        """Create a Malaysian employee."""
        return cls(
            citizenship=Citizenship.MALAYSIAN,
            date_of_birth=date_of_birth,
            wages=to_decimal(wages),
        )

    @classmethod
    def permanent_resident(cls, date_of_birth: date | None, wages: Any) -> Employee:
        """Create a permanent resident employee."""
        return cls(
            citizenship=Citizenship.PERMANENT_RESIDENT,
            date_of_birth=date_of_birth,
            wages=to_decimal(wages),
        )

    @classmethod
    def non_malaysian(
        cls,
        contribution_before_cutoff: bool,
        date_of_birth: date | None,
        wages: Any,
    ) -> Employee:
        """Create a non-Malaysian employee."""
        return cls(
            citizenship=Citizenship.NON_MALAYSIAN,
            contribution_before_cutoff=contribution_before_cutoff,
            date_of_birth=date_of_birth,
            wages=to_decimal(wages),
        )

    @property
    def citizen_rates_apply(self) -> bool:
        """Whether the citizen sections (A and C) apply."""
        return self.citizenship in (
            Citizenship.MALAYSIAN,
            Citizenship.PERMANENT_RESIDENT,
        ) or (
            self.citizenship == Citizenship.NON_MALAYSIAN
            and self.contribution_before_cutoff
        )

    def age(self, as_of: date | None = None) -> int | None:
        if self.date_of_birth is None:
            return None
        return age_on(self.date_of_birth, as_of or date.today())

    def section(
        self,
        as_of: date | None = None,
        schedule: ThirdSchedule | None = None,
    ) -> Section:
        """The single section applicable to this employee.

        Raises:
            IncompleteEmployeeError: If citizenship or date of birth is unknown
        """
        if self.citizenship == Citizenship.UNKNOWN:
            raise IncompleteEmployeeError("citizenship")
        if self.date_of_birth is None:
            raise IncompleteEmployeeError("date of birth")

        if schedule is None:
            schedule = get_schedule()
        senior = is_senior(self.date_of_birth, as_of or date.today())

        if self.citizen_rates_apply:
            name = SectionName.C if senior else SectionName.A
        else:
            name = SectionName.D if senior else SectionName.B
        return schedule.by_name(name)

    def sections(
        self,
        as_of: date | None = None,
        schedule: ThirdSchedule | None = None,
    ) -> list[Section]:
        """Sections consistent with what is known about the employee.

        One section when citizenship and date of birth are both known,
        otherwise every section matching the known attribute.
        """
        if schedule is None:
            schedule = get_schedule()
        known_citizenship = self.citizenship != Citizenship.UNKNOWN
        known_birth = self.date_of_birth is not None

        if known_citizenship and known_birth:
            return [self.section(as_of, schedule)]

        if known_citizenship:
            if self.citizen_rates_apply:
                return schedule.select(SectionName.A, SectionName.C)
            return schedule.select(SectionName.B, SectionName.D)

        if known_birth:
            if is_senior(self.date_of_birth, as_of or date.today()):
                return schedule.select(SectionName.C, SectionName.D)
            return schedule.select(SectionName.A, SectionName.B)

        return list(schedule)

    def rate(
        self,
        as_of: date | None = None,
        schedule: ThirdSchedule | None = None,
    ) -> Rate:
        """Contribution rate for this employee's wages."""
        return self.section(as_of, schedule).rate_for_wages(self.wages)
