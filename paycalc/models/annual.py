"""
Annual salary summary: the primary calculation entry point.

``calculate_all`` composes the city policy, contribution, withholding and
bonus calculations into an ``AnnualSummary``. Contributions are constant
across the twelve months in this model.
"""

import logging

from .bonus_tax import BonusTaxOptimizer
from .city_policy import get_city_policy
from .contributions import calc_employer_insurance, calc_personal_insurance, resolve_base
from .exceptions import InputValidationError
from .money import round2
from .salary import AnnualSummary, MonthlyBreakdown, SalaryInput
from .withholding import MONTHS_PER_YEAR, WithholdingTaxEngine

logger = logging.getLogger(__name__)

ENTERPRISE_ANNUITY_WEIGHT = 0.5


def calculate_all(salary_input: SalaryInput) -> AnnualSummary:
    """
    Compute the full-year breakdown of a salary package.

    Args:
        salary_input: Salary package and city

    Returns:
        Twelve monthly payslips, bonus taxation under both regimes and totals

    Raises:
        UnknownCityError: If the input's city has no policy
    """
    policy = get_city_policy(salary_input.city)
    monthly_base = salary_input.monthly_base

    si_base = resolve_base(
        monthly_base, salary_input.social_insurance_base, policy.social_insurance.base
    )
    hf_base = resolve_base(
        monthly_base, salary_input.housing_fund_base, policy.housing_fund.base
    )

    personal = calc_personal_insurance(
        si_base, hf_base, salary_input.housing_fund_rate, policy
    )
    employer = calc_employer_insurance(
        si_base, hf_base, salary_input.housing_fund_rate, policy
    )

    withholding = WithholdingTaxEngine().run(
        gross_salary=monthly_base,
        insurance_total=personal.total,
        additional_deduction=salary_input.additional_deduction,
    )
    monthly_details = [
        MonthlyBreakdown(
            month=m.month,
            gross_salary=monthly_base,
            social_insurance_base=si_base,
            housing_fund_base=hf_base,
            personal_insurance=personal.model_copy(),
            employer_insurance=employer.model_copy(),
            taxable_income=m.taxable_income,
            cumulative_taxable_income=m.cumulative_taxable_income,
            cumulative_tax=m.cumulative_tax,
            monthly_tax=m.monthly_tax,
            net_salary=m.net_salary,
        )
        for m in withholding.months
    ]

    # Bonus
    bonus_amount = round2(monthly_base * (salary_input.total_months - MONTHS_PER_YEAR))
    optimizer = BonusTaxOptimizer()
    bonus_result = optimizer.evaluate(
        bonus_amount, withholding.effective_cumulative_income
    )
    bonus_tax = optimizer.effective_tax(bonus_result, salary_input.bonus_tax_mode)

    # Cash totals
    total_salary_gross = round2(monthly_base * MONTHS_PER_YEAR)
    total_gross_income = round2(total_salary_gross + bonus_amount)
    total_personal_insurance = round2(personal.total * MONTHS_PER_YEAR)
    salary_tax = round2(withholding.cumulative_tax_paid)
    total_tax = round2(salary_tax + bonus_tax)
    bonus_net_cash = round2(bonus_amount - bonus_tax)
    total_net_cash = round2(withholding.total_net_salary + bonus_net_cash)

    # Pension and housing fund by payer
    total_pension_personal = round2(personal.pension * MONTHS_PER_YEAR)
    total_pension_employer = round2(employer.pension * MONTHS_PER_YEAR)
    total_hf_personal = round2(personal.housing_fund * MONTHS_PER_YEAR)
    total_hf_employer = round2(employer.housing_fund * MONTHS_PER_YEAR)
    total_pension = round2(total_pension_personal + total_pension_employer)
    total_housing_fund = round2(total_hf_personal + total_hf_employer)

    # Supplements are quoted as one rate applied to both payers, hence x2
    total_supplement_hf = round2(
        hf_base * (salary_input.supplement_hf_rate / 100) * 2 * MONTHS_PER_YEAR
    )
    total_enterprise_annuity = round2(
        monthly_base * (salary_input.enterprise_annuity_rate / 100) * 2 * MONTHS_PER_YEAR
    )

    total_value = round2(
        total_net_cash
        + total_pension
        + total_housing_fund
        + total_supplement_hf
        + total_enterprise_annuity * ENTERPRISE_ANNUITY_WEIGHT
    )

    logger.debug(
        f"{salary_input.city}: base {monthly_base} x {salary_input.total_months} "
        f"-> net cash {total_net_cash}, value {total_value}"
    )

    return AnnualSummary(
        total_gross_income=total_gross_income,
        total_salary_gross=total_salary_gross,
        bonus_gross=bonus_amount,
        total_personal_insurance=total_personal_insurance,
        total_tax=total_tax,
        salary_tax=salary_tax,
        bonus_tax=bonus_tax,
        total_net_cash=total_net_cash,
        total_pension_personal=total_pension_personal,
        total_pension_employer=total_pension_employer,
        total_housing_fund_personal=total_hf_personal,
        total_housing_fund_employer=total_hf_employer,
        total_pension=total_pension,
        total_housing_fund=total_housing_fund,
        total_value=total_value,
        bonus_tax_result=bonus_result,
        monthly_details=monthly_details,
        total_supplement_hf=total_supplement_hf if total_supplement_hf > 0 else None,
        total_enterprise_annuity=(
            total_enterprise_annuity if total_enterprise_annuity > 0 else None
        ),
    )


def validate_salary_input(salary_input: SalaryInput) -> None:
    """
    Check the preconditions callers are expected to guard before calculating.

    ``calculate_all`` never calls this; it accepts degenerate input and lets
    the arithmetic flow through.

    Raises:
        InputValidationError: If the base is not positive or the housing fund
            rate lies outside the city's range
        UnknownCityError: If the city has no policy
    """
    policy = get_city_policy(salary_input.city)
    if not salary_input.monthly_base > 0:
        raise InputValidationError("monthly_base must be greater than 0")

    rate_range = policy.housing_fund.rate_range
    if not rate_range.min <= salary_input.housing_fund_rate <= rate_range.max:
        raise InputValidationError(
            f"housing_fund_rate {salary_input.housing_fund_rate} outside "
            f"{policy.short_name} range [{rate_range.min}, {rate_range.max}]"
        )
