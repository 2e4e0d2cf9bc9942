"""Tests for contribution rate resolver."""

from decimal import Decimal

import pytest

from epf_engine.calculators.rate_resolver import InvalidWagesError, RateResolver
from epf_engine.calculators.types import Rate


class TestRateResolver:
    """Test band matching and extrapolation."""

    def test_wages_inside_band(self, small_section):
        """Wages strictly inside a band return that band."""
        rate = RateResolver().resolve(small_section, Decimal("15"))

        assert rate.wages_from == Decimal("10.01")
        assert rate.wages_to == Decimal("20")

    def test_upper_bound_is_inclusive(self, small_section):
        """Wages equal to a band's upper bound return that band."""
        rate = RateResolver().resolve(small_section, Decimal("20"))

        assert rate.wages_to == Decimal("20")

    def test_sub_band_start_belongs_to_previous_band(self, small_section):
        """The sub-band start (before the one-sen offset) is exclusive."""
        rate = RateResolver().resolve(small_section, Decimal("10"))

        assert rate.wages_to == Decimal("10")
        assert rate.contribution_total == Decimal("0")

    def test_wages_between_boundary_and_offset(self, small_section):
        """Fractions of a sen above a boundary fall into the next band."""
        rate = RateResolver().resolve(small_section, Decimal("10.005"))

        assert rate.wages_from == Decimal("10.01")

    def test_zero_wages_take_first_band(self, small_section):
        """Zero wages resolve to the not-applicable band."""
        rate = RateResolver().resolve(small_section, 0)

        assert rate == small_section.rates()[0]

    def test_wages_above_table_extrapolate(self, small_section):
        """Above the last band the final rule is applied to the wages."""
        rate = RateResolver().resolve(small_section, Decimal("45"))

        assert rate == Rate(Decimal("45"), Decimal("45"), Decimal("5"), Decimal("2"))

    def test_wages_just_above_table(self, section_a):
        """One sen above the table already extrapolates."""
        rate = RateResolver().resolve(section_a, Decimal("20000.01"))

        assert rate.wages_from == rate.wages_to == Decimal("20000.01")
        assert rate.contribution_employer == Decimal("2401")  # ceil(2400.0012)
        assert rate.contribution_employee == Decimal("2201")  # ceil(2200.0011)

    def test_accepts_float_int_and_str(self, section_a):
        """Wages are normalized to Decimal."""
        resolver = RateResolver()
        expected = resolver.resolve(section_a, Decimal("550"))

        assert resolver.resolve(section_a, 550) == expected
        assert resolver.resolve(section_a, 550.0) == expected
        assert resolver.resolve(section_a, "550.00") == expected

    def test_negative_wages_rejected(self, section_a):
        """Negative wages fail fast."""
        with pytest.raises(InvalidWagesError) as exc_info:
            RateResolver().resolve(section_a, Decimal("-1"))

        assert exc_info.value.wages == Decimal("-1")

    @pytest.mark.parametrize("wages", ["abc", "NaN", "Infinity"])
    def test_non_numeric_wages_rejected(self, section_a, wages):
        with pytest.raises(InvalidWagesError):
            RateResolver().resolve(section_a, wages)

    def test_invalid_wages_is_value_error(self, section_a):
        with pytest.raises(ValueError):
            section_a.rate_for_wages(-100)


class TestScheduleRates:
    """End-to-end lookups against the Third Schedule."""

    def test_section_a(self, section_a):
        rate = section_a.rate_for_wages(550.0)
        assert rate.contribution_employer == Decimal("73")
        assert rate.contribution_employee == Decimal("62")

    def test_section_a_above_table(self, section_a):
        rate = section_a.rate_for_wages(25000.0)
        assert rate.contribution_employer == Decimal("3000")
        assert rate.contribution_employee == Decimal("2750")
        assert rate.wages_from == rate.wages_to == Decimal("25000.0")

    def test_section_b(self, section_b):
        rate = section_b.rate_for_wages(720.0)
        assert rate.contribution_employee == Decimal("80")
        assert rate.contribution_employer == Decimal("5")

    def test_section_b_above_table_keeps_exact_amount(self, section_b):
        rate = section_b.rate_for_wages(25000)
        assert rate.contribution_employer == Decimal("5")
        assert rate.contribution_employee == Decimal("2750")

    def test_section_c(self, section_c):
        rate = section_c.rate_for_wages(1050.0)
        assert rate.contribution_employee == Decimal("59")
        assert rate.contribution_employer == Decimal("69")

    def test_section_d(self, section_d):
        rate = section_d.rate_for_wages(1150.0)
        assert rate.contribution_employee == Decimal("64")

    def test_band_edges_section_a(self, section_a):
        """540 is the top of 520.01-540; 540.01 starts the next band."""
        at_edge = section_a.rate_for_wages(Decimal("540"))
        past_edge = section_a.rate_for_wages(Decimal("540.01"))

        assert at_edge.wages_from == Decimal("520.01")
        assert at_edge.contribution_employer == Decimal("71")
        assert past_edge.wages_from == Decimal("540.01")
        assert past_edge.contribution_employer == Decimal("73")

    def test_every_wage_in_table_matches_one_band(self, schedule):
        """Band bounds resolve to their own band for every section."""
        for section in schedule:
            rates = section.rates()
            for rate in rates[:40] + rates[240:260] + rates[-40:]:
                assert section.rate_for_wages(rate.wages_to) == rate
                assert section.rate_for_wages(rate.wages_from) == rate


class TestRateModel:
    """Test Rate helpers."""

    def test_contribution_total_zero(self):
        rate = Rate(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))
        assert rate.contribution_total == Decimal("0")

    def test_contribution_total(self):
        rate = Rate(Decimal("0"), Decimal("0"), Decimal("1300"), Decimal("1100"))
        assert rate.contribution_total == Decimal("2400")

    def test_covers(self):
        rate = Rate(Decimal("10.01"), Decimal("20"), Decimal("0"), Decimal("0"))

        assert rate.covers(Decimal("10")) is False
        assert rate.covers(Decimal("10.001")) is True
        assert rate.covers(Decimal("20")) is True
        assert rate.covers(Decimal("20.001")) is False

    def test_to_dict(self):
        rate = Rate(Decimal("540.01"), Decimal("560"), Decimal("73"), Decimal("62"))

        assert rate.to_dict() == {
            "wages_from": "540.01",
            "wages_to": "560",
            "contribution_employer": "73",
            "contribution_employee": "62",
            "contribution_total": "135",
        }
