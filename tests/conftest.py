"""Pytest fixtures for EPF engine tests."""

from __future__ import annotations

from datetime import date

import pytest

from epf_engine.calculators.types import CalculationMethod
from epf_engine.config import Settings
from epf_engine.employee import anniversary
from epf_engine.schedule import (
    Section,
    SectionName,
    ThirdSchedule,
    get_schedule,
    make_section,
)

# Fixed evaluation date so age-dependent tests do not drift
AS_OF = date(2024, 6, 15)


def born_years_ago(years: int, as_of: date = AS_OF) -> date:
    """Date of birth of someone turning ``years`` on ``as_of``."""
    return anniversary(as_of, -years)


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def born():
    """Factory for a date of birth some years before the evaluation date."""
    return born_years_ago


@pytest.fixture
def schedule() -> ThirdSchedule:
    return get_schedule()


@pytest.fixture
def section_a(schedule) -> Section:
    return schedule.by_name(SectionName.A)


@pytest.fixture
def section_b(schedule) -> Section:
    return schedule.by_name(SectionName.B)


@pytest.fixture
def section_c(schedule) -> Section:
    return schedule.by_name(SectionName.C)


@pytest.fixture
def section_d(schedule) -> Section:
    return schedule.by_name(SectionName.D)


@pytest.fixture
def small_section() -> Section:
    """A three-band section that is easy to reason about.

    Bands: 0.01-10 (0/0), 10.01-20 (2/2), 20.01-30 (3/2)
    """
    return make_section(
        SectionName.A,
        [
            ("0", "10", "10", CalculationMethod.FIXED, "0", CalculationMethod.FIXED, "0"),
            (
                "10",
                "30",
                "10",
                CalculationMethod.PERCENTAGE,
                "0.1",
                CalculationMethod.EXACT_AMOUNT,
                "2",
            ),
        ],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        engine_version="9.9.9",
        log_level="WARNING",
        output_format="text",
        debug=False,
    )
