"""
Annual breakdown of arbitrary compensation structures.

A structure may pay part of the salary outside official payroll (the
alternate channel: untaxed, but charged a flat fee), contribute on the
minimum or a custom base, and include stock valued at a discount. The
resulting ``comprehensive_value`` weighs cash, housing fund and pension so
that structures can be compared and converted into one another.
"""

import logging
from types import MappingProxyType
from typing import Optional

from .bonus_tax import BonusTaxOptimizer
from .city_policy import BaseRange, get_city_policy
from .contributions import calc_employer_insurance, calc_personal_insurance
from .money import clamp, round2
from .salary import BaseType, SalaryStructure, StructureBreakdown
from .withholding import MONTHS_PER_YEAR, WithholdingTaxEngine

logger = logging.getLogger(__name__)

# Weight of each component in the comprehensive value
VALUE_WEIGHTS = MappingProxyType(
    {
        "cash": 1.0,
        "housing_fund": 1.0,
        "pension": 0.5,
        "medical": 0.0,
        "unemployment": 0.0,
        "injury": 0.0,
    }
)


def resolve_structure_base(
    base_type: BaseType,
    monthly_base: float,
    custom_base: Optional[float],
    base_range: BaseRange,
) -> float:
    """Contribution base for a structure's base type.

    ``custom`` with a missing or zero custom base behaves like ``full``; a
    negative custom base is clamped like any other.
    """
    if base_type == "minimum":
        return base_range.min
    if base_type == "custom" and custom_base:
        return clamp(custom_base, base_range.min, base_range.max)
    return clamp(monthly_base, base_range.min, base_range.max)


def calc_structure_breakdown(structure: SalaryStructure) -> StructureBreakdown:
    """
    Compute the annual figures of a compensation structure.

    The bonus is always taxed under the cheaper regime.

    Args:
        structure: Complete compensation structure

    Returns:
        Annual breakdown including comprehensive value and employer cost

    Raises:
        UnknownCityError: If the structure's city has no policy
    """
    policy = get_city_policy(structure.city)
    monthly_base = structure.monthly_base
    months = structure.months

    si_base = resolve_structure_base(
        structure.social_insurance_base_type,
        monthly_base,
        structure.custom_social_insurance_base,
        policy.social_insurance.base,
    )
    hf_base = resolve_structure_base(
        structure.housing_fund_base_type,
        monthly_base,
        structure.custom_housing_fund_base,
        policy.housing_fund.base,
    )

    # Official payroll share
    official_monthly = round2(monthly_base * (1 - structure.alt_channel_ratio / 100))

    # Contributions are only made for someone on the official payroll
    hf_rate = structure.housing_fund_rate if official_monthly > 0 else 0.0
    if official_monthly <= 0:
        si_base = hf_base = 0.0
    personal = calc_personal_insurance(si_base, hf_base, hf_rate, policy)
    employer = calc_employer_insurance(si_base, hf_base, hf_rate, policy)

    official_annual = round2(official_monthly * months)
    official_bonus = round2(official_monthly * max(0, months - MONTHS_PER_YEAR))

    withholding = WithholdingTaxEngine().run(
        gross_salary=official_monthly,
        insurance_total=personal.total,
        additional_deduction=structure.special_deduction,
    )
    bonus_tax = BonusTaxOptimizer().cheapest_tax(
        official_bonus, withholding.effective_cumulative_income
    )
    income_tax = round2(withholding.cumulative_tax_paid + bonus_tax)

    official_take_home = round2(
        official_annual - personal.total * MONTHS_PER_YEAR - income_tax
    )

    # Alternate channel
    alt_channel_annual = round2(
        monthly_base * (structure.alt_channel_ratio / 100) * months
    )
    alt_channel_fee = round2(alt_channel_annual * (structure.alt_channel_fee_rate / 100))
    alt_take_home = round2(alt_channel_annual - alt_channel_fee)

    take_home_cash = round2(official_take_home + alt_take_home)
    gross_annual = round2(monthly_base * months)

    stock_face_value = structure.annual_stock_value
    stock_value = round2(stock_face_value * (structure.stock_discount / 100))

    comprehensive_value = round2(
        take_home_cash * VALUE_WEIGHTS["cash"]
        + (personal.housing_fund + employer.housing_fund)
        * MONTHS_PER_YEAR
        * VALUE_WEIGHTS["housing_fund"]
        + (personal.pension + employer.pension) * MONTHS_PER_YEAR * VALUE_WEIGHTS["pension"]
        + stock_value
    )
    employer_total_cost = round2(gross_annual + employer.total * MONTHS_PER_YEAR)

    logger.debug(
        f"Structure {structure.city} base {monthly_base}: "
        f"cash {take_home_cash}, value {comprehensive_value}"
    )

    return StructureBreakdown(
        gross_annual=gross_annual,
        official_salary_annual=official_annual,
        alt_channel_annual=alt_channel_annual,
        alt_channel_fee=alt_channel_fee,
        social_insurance_personal=round2(personal.total * MONTHS_PER_YEAR),
        housing_fund_personal=round2(personal.housing_fund * MONTHS_PER_YEAR),
        pension_personal=round2(personal.pension * MONTHS_PER_YEAR),
        income_tax=income_tax,
        take_home_cash=take_home_cash,
        social_insurance_employer=round2(employer.total * MONTHS_PER_YEAR),
        housing_fund_employer=round2(employer.housing_fund * MONTHS_PER_YEAR),
        pension_employer=round2(employer.pension * MONTHS_PER_YEAR),
        employer_total_cost=employer_total_cost,
        stock_face_value=stock_face_value,
        stock_value=stock_value,
        comprehensive_value=comprehensive_value,
    )
