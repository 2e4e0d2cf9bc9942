"""EPF Third Schedule contribution engine."""

from epf_engine.calculators import (
    CalculationMethod,
    InvalidScheduleError,
    InvalidWagesError,
    Rate,
    RateResolver,
    RateRule,
)
from epf_engine.employee import Citizenship, Employee, IncompleteEmployeeError
from epf_engine.schedule import (
    Section,
    SectionName,
    SectionNotFoundError,
    ThirdSchedule,
    get_schedule,
    section_by_name,
)

__all__ = [
    "CalculationMethod",
    "Citizenship",
    "Employee",
    "IncompleteEmployeeError",
    "InvalidScheduleError",
    "InvalidWagesError",
    "Rate",
    "RateResolver",
    "RateRule",
    "Section",
    "SectionName",
    "SectionNotFoundError",
    "ThirdSchedule",
    "get_schedule",
    "section_by_name",
]
