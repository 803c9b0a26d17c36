"""
Tests for contribution base resolution and insurance breakdowns.
"""

import pytest

from paycalc.models.city_policy import BaseRange, get_city_policy
from paycalc.models.contributions import (
    calc_employer_insurance,
    calc_personal_insurance,
    resolve_base,
)
from paycalc.models.money import clamp, percent_change, round2


class TestMoneyHelpers:
    """Test cent rounding and clamping."""

    def test_round2_halves_round_up(self):
        assert round2(0.125) == 0.13
        assert round2(0.375) == 0.38
        assert round2(1005.0) == 1005.0
        assert round2(-1.5) == -1.5

    def test_round2_is_not_bankers_rounding(self):
        """Python's round() sends exact halves to even; cent rounding does not."""
        assert round(0.125, 2) == 0.12
        assert round2(0.125) == 0.13

    def test_clamp(self):
        assert clamp(5, 1, 10) == 5
        assert clamp(0, 1, 10) == 1
        assert clamp(11, 1, 10) == 10

    def test_percent_change(self):
        assert percent_change(120, 100) == 20.0
        assert percent_change(50, 0) == 0.0
        assert percent_change(50, -10) == 0.0


class TestResolveBase:
    """Test contribution base resolution."""

    base_range = BaseRange(min=7162, max=35811)

    def test_monthly_base_within_range(self):
        assert resolve_base(10000, None, self.base_range) == 10000

    def test_monthly_base_clamped_low(self):
        assert resolve_base(5000, None, self.base_range) == 7162

    def test_monthly_base_clamped_high(self):
        assert resolve_base(80000, None, self.base_range) == 35811

    def test_custom_base_overrides_monthly_base(self):
        assert resolve_base(30000, 12000, self.base_range) == 12000

    def test_custom_base_is_clamped(self):
        assert resolve_base(10000, 50000, self.base_range) == 35811
        assert resolve_base(10000, 1000, self.base_range) == 7162

    def test_non_positive_custom_base_ignored(self):
        """A zero or negative custom base falls back to the monthly base."""
        assert resolve_base(10000, 0, self.base_range) == 10000
        assert resolve_base(10000, -5, self.base_range) == 10000

    def test_schemes_clamp_independently(self):
        """The same custom base can land differently per scheme."""
        policy = get_city_policy("beijing")
        si = resolve_base(3000, None, policy.social_insurance.base)
        hf = resolve_base(3000, None, policy.housing_fund.base)

        assert si == 7162
        assert hf == 3000


class TestPersonalInsurance:
    """Test employee contributions."""

    def test_beijing_10000(self):
        """Test the standard Beijing example."""
        policy = get_city_policy("beijing")
        ins = calc_personal_insurance(10000, 10000, 12, policy)

        assert ins.pension == 800
        assert ins.medical == 200
        assert ins.unemployment == 50
        assert ins.housing_fund == 1200
        assert ins.total == 2250

    def test_components_rounded_before_summing(self):
        """Total is the sum of the rounded lines, not of the raw products."""
        policy = get_city_policy("beijing")
        ins = calc_personal_insurance(7162, 6000, 12, policy)

        assert ins.pension == pytest.approx(572.96)
        assert ins.medical == pytest.approx(143.24)
        assert ins.unemployment == pytest.approx(35.81)
        assert ins.housing_fund == pytest.approx(720)
        assert ins.total == pytest.approx(1472.01)
        assert ins.total == round2(
            ins.pension + ins.medical + ins.unemployment + ins.housing_fund
        )

    def test_housing_fund_rate_in_percent(self):
        policy = get_city_policy("beijing")
        ins = calc_personal_insurance(10000, 10000, 5, policy)

        assert ins.housing_fund == 500


class TestEmployerInsurance:
    """Test employer contributions."""

    def test_beijing_10000(self):
        policy = get_city_policy("beijing")
        ins = calc_employer_insurance(10000, 10000, 12, policy)

        assert ins.pension == 1600
        assert ins.medical == pytest.approx(1037)
        assert ins.unemployment == 50
        assert ins.injury == 20
        assert ins.housing_fund == 1200
        assert ins.total == pytest.approx(3907)

    def test_shanghai_injury_rate(self):
        policy = get_city_policy("shanghai")
        ins = calc_employer_insurance(10000, 10000, 7, policy)

        assert ins.injury == 16
        assert ins.housing_fund == 700
