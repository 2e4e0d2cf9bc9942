"""Third Schedule sections and their contribution rules.

The schedule is static configuration: four sections, each a fixed list of
rate rules. ``get_schedule()`` returns the single shared, immutable
instance; rate tables are built on first lookup and cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Iterator

from epf_engine.calculators.rate_resolver import RateResolver
from epf_engine.calculators.rate_table import build_rates, validate_rules
from epf_engine.calculators.types import CalculationMethod, Rate, RateRule

logger = logging.getLogger(__name__)

FIXED = CalculationMethod.FIXED
PERCENTAGE = CalculationMethod.PERCENTAGE
EXACT_AMOUNT = CalculationMethod.EXACT_AMOUNT

_resolver = RateResolver()


class SectionName(str, Enum):
    """Parts of the Third Schedule."""

    A = "A"  # Citizens and equivalents below sixty
    B = "B"  # Non-citizens electing on or after 1 August 1998, below sixty
    C = "C"  # Citizens and equivalents, sixty and above
    D = "D"  # Non-citizens electing on or after 1 August 1998, sixty and above


class SectionNotFoundError(LookupError):
    """Raised when no section has the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Section '{name}' not found in the Third Schedule")


@dataclass(frozen=True)
class Section:
    """One part of the Third Schedule."""

    name: SectionName
    description: str
    rules: tuple[RateRule, ...]

    def __post_init__(self) -> None:
        validate_rules(self.name.value, self.rules)

    def rates(self) -> tuple[Rate, ...]:
        """All rates listed in this section's table."""
        return build_rates(self.rules)

    def rate_for_wages(self, wages: Any) -> Rate:
        """Rate applicable to the given monthly wages."""
        return _resolver.resolve(self, wages)

    def __str__(self) -> str:
        return self.name.value


@dataclass(frozen=True)
class ThirdSchedule:
    """The full set of sections, ordered A to D."""

    sections: tuple[Section, ...]

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __getitem__(self, name: SectionName) -> Section:
        return self.by_name(name)

    def by_name(self, name: str | SectionName) -> Section:
        """Look up a section by its name.

        Raises:
            SectionNotFoundError: If no section carries the name
        """
        key = name.value if isinstance(name, SectionName) else str(name).strip().upper()
        for section in self.sections:
            if section.name.value == key:
                return section
        raise SectionNotFoundError(str(name))

    def select(self, *names: SectionName) -> list[Section]:
        """Sections for the given names, in schedule order."""
        wanted = set(names)
        return [s for s in self.sections if s.name in wanted]


_LIMITS_NOTE = """
In this Part:
- the wages on which each employer contributes for each employee are
  subject to any wage and contribution limits prescribed by the Board; and
- contributions for the purposes of subsection 43(3) and section 44A are
  subject to any limit on total contributions prescribed by the Board."""

_CITIZEN_GROUP = """- employees who are Malaysian citizens;
- employees who are not Malaysian citizens but are permanent residents
  of Malaysia; and
- employees who are not Malaysian citizens and elected to contribute
  before 1 August 1998"""

_NON_CITIZEN_GROUP = """- who elect to contribute on or after 1 August 1998;
- who elect to contribute under subsection 54(3) on or after
  1 August 1998; and
- who elect to contribute under paragraph 6 of the First Schedule on or
  after 1 August 2001"""

DESCRIPTIONS: dict[SectionName, str] = {
    SectionName.A: (
        "The rates of monthly contribution in this Part apply to:\n"
        f"{_CITIZEN_GROUP}\n"
        "until the employee attains the age of sixty years.\n"
        f"{_LIMITS_NOTE}"
    ),
    SectionName.B: (
        "The rates of monthly contribution in this Part apply to employees "
        "who are not Malaysian citizens:\n"
        f"{_NON_CITIZEN_GROUP}\n"
        "until the employee attains the age of sixty years.\n"
        f"{_LIMITS_NOTE}"
    ),
    SectionName.C: (
        "The rates of monthly contribution in this Part apply to:\n"
        f"{_CITIZEN_GROUP}\n"
        "who have attained the age of sixty years.\n"
        f"{_LIMITS_NOTE}"
    ),
    SectionName.D: (
        "The rates of monthly contribution in this Part apply to employees "
        "who are not Malaysian citizens:\n"
        f"{_NON_CITIZEN_GROUP}\n"
        "who have attained the age of sixty years.\n"
        f"{_LIMITS_NOTE}"
    ),
}

# (minimum, maximum, interval, employer method, employer amount,
#  employee method, employee amount)
RULES: dict[SectionName, list[tuple[Any, ...]]] = {
    SectionName.A: [
        ("0", "10", "10", FIXED, "0", FIXED, "0"),
        ("10", "20", "10", PERCENTAGE, "0.13", PERCENTAGE, "0.11"),
        ("20", "5000", "20", PERCENTAGE, "0.13", PERCENTAGE, "0.11"),
        ("5000", "20000", "100", PERCENTAGE, "0.12", PERCENTAGE, "0.11"),
    ],
    SectionName.B: [
        ("0", "10", "10", FIXED, "0", FIXED, "0"),
        ("10", "20", "10", EXACT_AMOUNT, "5", PERCENTAGE, "0.11"),
        ("20", "5000", "20", EXACT_AMOUNT, "5", PERCENTAGE, "0.11"),
        ("5000", "20000", "100", EXACT_AMOUNT, "5", PERCENTAGE, "0.11"),
    ],
    SectionName.C: [
        ("0", "10", "10", FIXED, "0", FIXED, "0"),
        ("10", "20", "10", PERCENTAGE, "0.065", PERCENTAGE, "0.055"),
        ("20", "5000", "20", PERCENTAGE, "0.065", PERCENTAGE, "0.055"),
        ("5000", "20000", "100", PERCENTAGE, "0.06", PERCENTAGE, "0.055"),
    ],
    SectionName.D: [
        ("0", "10", "10", FIXED, "0", FIXED, "0"),
        ("10", "20", "10", EXACT_AMOUNT, "5", PERCENTAGE, "0.055"),
        ("20", "5000", "20", EXACT_AMOUNT, "5", PERCENTAGE, "0.055"),
        ("5000", "20000", "100", EXACT_AMOUNT, "5", PERCENTAGE, "0.055"),
    ],
}


def make_section(name: SectionName, rows: list[tuple[Any, ...]]) -> Section:
    """Build a section from plain rule rows."""
    return Section(
        name=name,
        description=DESCRIPTIONS.get(name, ""),
        rules=tuple(RateRule.of(*row) for row in rows),
    )


@lru_cache(maxsize=1)
def get_schedule() -> ThirdSchedule:
    """Get the cached Third Schedule."""
    schedule = ThirdSchedule(
        sections=tuple(make_section(name, RULES[name]) for name in SectionName)
    )
    logger.debug("Loaded Third Schedule with %d sections", len(schedule))
    return schedule


def section_by_name(name: str | SectionName) -> Section:
    """Look up a section of the default schedule by name."""
    return get_schedule().by_name(name)
