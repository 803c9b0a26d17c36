"""
Tests for the city policy table and tax bracket tables.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from paycalc.models.city_policy import (
    BASIC_DEDUCTION_MONTHLY,
    BONUS_TAX_BRACKETS,
    CITY_LIST,
    CITY_POLICIES,
    TAX_BRACKETS,
    BaseRange,
    BracketTable,
    TaxBracket,
    get_city_policy,
    list_city_policies,
)
from paycalc.models.exceptions import PayCalcError, UnknownCityError


class TestGetCityPolicy:
    """Test policy lookup."""

    def test_beijing_policy(self):
        """Test the Beijing 2025 parameters."""
        policy = get_city_policy("beijing")

        assert policy.id == "beijing"
        assert policy.short_name == "北京"
        assert policy.social_insurance.base.min == 7162
        assert policy.social_insurance.base.max == 35811
        assert policy.social_insurance.personal.pension == 0.08
        assert policy.social_insurance.personal.medical == 0.02
        assert policy.social_insurance.personal.unemployment == 0.005
        assert policy.social_insurance.employer.medical == 0.1037
        assert policy.social_insurance.employer.injury == 0.002
        assert policy.housing_fund.base.min == 2540
        assert policy.housing_fund.base.max == 35811
        assert policy.housing_fund.rate_range.min == 5
        assert policy.housing_fund.rate_range.max == 12
        assert policy.housing_fund.default_rate == 12

    def test_unknown_city_raises(self):
        """Test that an unsupported city fails fast."""
        with pytest.raises(UnknownCityError) as exc_info:
            get_city_policy("atlantis")

        assert exc_info.value.city_id == "atlantis"
        assert "atlantis" in str(exc_info.value)

    def test_unknown_city_error_hierarchy(self):
        """Unknown city errors are both engine errors and key errors."""
        with pytest.raises(PayCalcError):
            get_city_policy("nowhere")
        with pytest.raises(KeyError):
            get_city_policy("nowhere")

    def test_all_cities_present(self):
        """Every listed city has a policy, in canonical order."""
        policies = list_city_policies()

        assert [p.id for p in policies] == CITY_LIST
        assert len(policies) == 10

    def test_default_rates_within_range(self):
        """Default housing fund rates lie inside each city's range."""
        for policy in list_city_policies():
            rate_range = policy.housing_fund.rate_range
            assert rate_range.min <= policy.housing_fund.default_rate <= rate_range.max

    def test_policies_are_immutable(self):
        """The policy table and its entries cannot be modified."""
        with pytest.raises(TypeError):
            CITY_POLICIES["beijing"] = get_city_policy("shanghai")  # type: ignore[index]

        with pytest.raises(ValidationError):
            get_city_policy("beijing").name = "changed"


class TestPolicyValidation:
    """Test the invariants enforced at construction."""

    def test_base_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            BaseRange(min=100, max=50)

    def test_rate_above_one_rejected(self):
        with pytest.raises(ValidationError):
            TaxBracket(upper=1000, rate=1.5, deduction=0)


class TestBracketTables:
    """Test the progressive rate tables."""

    def test_basic_deduction(self):
        assert BASIC_DEDUCTION_MONTHLY == 5000

    def test_annual_table_shape(self):
        """Annual table has seven brackets ending unbounded."""
        assert len(TAX_BRACKETS) == 7
        assert TAX_BRACKETS[0].upper == 36000
        assert TAX_BRACKETS[-1].upper == float("inf")
        assert [b.rate for b in TAX_BRACKETS] == [0.03, 0.10, 0.20, 0.25, 0.30, 0.35, 0.45]

    def test_bonus_table_shape(self):
        assert len(BONUS_TAX_BRACKETS) == 7
        assert [b.upper for b in BONUS_TAX_BRACKETS][:6] == [
            3000, 12000, 25000, 35000, 55000, 80000
        ]
        assert [b.deduction for b in BONUS_TAX_BRACKETS] == [
            0, 210, 1410, 2660, 4410, 7160, 15160
        ]

    def test_upper_bound_is_inclusive(self):
        """An income equal to a bound falls in that bracket."""
        assert TAX_BRACKETS.find(36000).rate == 0.03
        assert TAX_BRACKETS.find(36000.01).rate == 0.10
        assert BONUS_TAX_BRACKETS.find(3000).rate == 0.03
        assert BONUS_TAX_BRACKETS.find(3000.01).rate == 0.10

    def test_find_agrees_with_index_of(self):
        for income in (0, 36000, 36000.01, 500000, 5_000_000):
            assert TAX_BRACKETS.find(income) == TAX_BRACKETS[TAX_BRACKETS.index_of(income)]
        assert TAX_BRACKETS.index_of(5_000_000) == len(TAX_BRACKETS) - 1

    def test_top_bracket(self):
        assert TAX_BRACKETS.find(5_000_000).rate == 0.45
        assert TAX_BRACKETS.find(5_000_000).deduction == 181920

    def test_exactly_one_bracket_matches(self):
        """For any income the found bracket is the only one it fits first."""
        uppers = [b.upper for b in TAX_BRACKETS]
        for income in np.linspace(0, 1_200_000, 241):
            bracket = TAX_BRACKETS.find(float(income))
            index = uppers.index(bracket.upper)
            assert income <= bracket.upper
            assert all(u < income for u in uppers[:index])

    def test_non_increasing_bounds_rejected(self):
        with pytest.raises(ValueError):
            BracketTable(
                [
                    TaxBracket(upper=1000, rate=0.1, deduction=0),
                    TaxBracket(upper=1000, rate=0.2, deduction=100),
                    TaxBracket(upper=float("inf"), rate=0.3, deduction=200),
                ]
            )

    def test_bounded_last_bracket_rejected(self):
        with pytest.raises(ValueError):
            BracketTable([TaxBracket(upper=1000, rate=0.1, deduction=0)])
