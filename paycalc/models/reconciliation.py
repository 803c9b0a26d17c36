"""
Year-end reconciliation of comprehensive income tax.

Compares the tax actually due on a year's comprehensive income (salary,
bonus, labour remuneration, royalties, other income) with what was withheld
through payroll, giving the amount to pay or refund at settlement.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .bonus_tax import calc_bonus_tax_separate
from .city_policy import BASIC_DEDUCTION_MONTHLY, TAX_BRACKETS, CityId, get_city_policy
from .contributions import calc_personal_insurance, resolve_base
from .money import round2
from .withholding import MONTHS_PER_YEAR, WithholdingTaxEngine, calc_cumulative_tax

# Labour remuneration and royalties count at 80%; royalties a further 70%
LABOR_INCOME_RATIO = 0.8
ROYALTY_INCOME_RATIO = 0.8 * 0.7

BRACKET_LABELS = ("3%", "10%", "20%", "25%", "30%", "35%", "45%")


class ReconciliationInput(BaseModel):
    """A year of income to settle."""

    city: CityId = Field(default="beijing")
    monthly_base: float = Field(..., description="Monthly gross salary")
    total_months: float = Field(default=12, ge=12, le=24)
    housing_fund_rate: float = Field(default=12, ge=0, le=100)
    additional_deduction: float = Field(default=0, ge=0, description="Monthly")
    other_income: float = Field(default=0, ge=0)
    labor_income: float = Field(default=0, ge=0)
    royalty_income: float = Field(default=0, ge=0)
    itemized_deductions: float = Field(default=0, ge=0, description="Annual")


class ReconciliationResult(BaseModel):
    annual_gross: float
    annual_insurance: float
    annual_basic_deduction: float
    annual_additional_deduction: float
    annual_other_income: float = Field(
        ..., description="Other, labour and royalty income after their ratios"
    )
    labor_after_deduction: float
    royalty_after_deduction: float
    total_taxable_income: float
    annual_tax_due: float
    withheld_salary_tax: float
    withheld_bonus_tax: float
    total_withheld: float
    difference: float = Field(
        ..., description="Positive: tax to pay at settlement; negative: refund"
    )
    bracket_name: str
    effective_rate: float = Field(..., description="Tax due over gross, percent")


def bracket_label(taxable_income: float) -> str:
    """Marginal rate label for an annual taxable income."""
    if taxable_income <= 0:
        return "exempt"
    index = min(TAX_BRACKETS.index_of(taxable_income), len(BRACKET_LABELS) - 1)
    return BRACKET_LABELS[index]


def reconcile_annual_tax(
    recon_input: ReconciliationInput,
    withheld_bonus_tax: Optional[float] = None,
) -> ReconciliationResult:
    """
    Settle a year's comprehensive income tax against payroll withholding.

    The bonus is assumed withheld under the separate regime unless
    ``withheld_bonus_tax`` is given.
    """
    policy = get_city_policy(recon_input.city)
    monthly_base = recon_input.monthly_base

    si_base = resolve_base(monthly_base, None, policy.social_insurance.base)
    hf_base = resolve_base(monthly_base, None, policy.housing_fund.base)
    hf_rate = min(recon_input.housing_fund_rate, policy.housing_fund.rate_range.max)

    personal = calc_personal_insurance(si_base, hf_base, hf_rate, policy)
    # Plain sum of the rounded lines, as printed on the payslip
    monthly_insurance = (
        personal.pension + personal.medical + personal.unemployment + personal.housing_fund
    )
    annual_insurance = round2(monthly_insurance * MONTHS_PER_YEAR)

    withholding = WithholdingTaxEngine().run(
        gross_salary=monthly_base,
        insurance_total=monthly_insurance,
        additional_deduction=recon_input.additional_deduction,
    )
    withheld_salary_tax = round2(withholding.cumulative_tax_paid)

    bonus_amount = round2(
        monthly_base * max(0, recon_input.total_months - MONTHS_PER_YEAR)
    )
    if withheld_bonus_tax is None:
        withheld_bonus_tax = calc_bonus_tax_separate(bonus_amount)

    annual_salary_gross = round2(monthly_base * MONTHS_PER_YEAR)
    annual_gross = round2(annual_salary_gross + bonus_amount)
    annual_basic_deduction = BASIC_DEDUCTION_MONTHLY * MONTHS_PER_YEAR
    annual_additional_deduction = round2(
        recon_input.additional_deduction * MONTHS_PER_YEAR
    )

    labor_after = (
        round2(recon_input.labor_income * LABOR_INCOME_RATIO)
        if recon_input.labor_income > 0
        else 0.0
    )
    royalty_after = (
        round2(recon_input.royalty_income * ROYALTY_INCOME_RATIO)
        if recon_input.royalty_income > 0
        else 0.0
    )
    other_income = round2(recon_input.other_income)

    total_taxable = round2(
        max(
            0.0,
            annual_gross
            + other_income
            + labor_after
            + royalty_after
            - annual_insurance
            - annual_basic_deduction
            - annual_additional_deduction
            - recon_input.itemized_deductions,
        )
    )

    annual_tax_due = calc_cumulative_tax(total_taxable)
    total_withheld = round2(withheld_salary_tax + withheld_bonus_tax)
    effective_rate = (
        round2(annual_tax_due / annual_gross * 100) if annual_gross > 0 else 0.0
    )

    return ReconciliationResult(
        annual_gross=annual_gross,
        annual_insurance=annual_insurance,
        annual_basic_deduction=annual_basic_deduction,
        annual_additional_deduction=annual_additional_deduction,
        annual_other_income=round2(other_income + labor_after + royalty_after),
        labor_after_deduction=labor_after,
        royalty_after_deduction=royalty_after,
        total_taxable_income=total_taxable,
        annual_tax_due=annual_tax_due,
        withheld_salary_tax=withheld_salary_tax,
        withheld_bonus_tax=withheld_bonus_tax,
        total_withheld=total_withheld,
        difference=round2(annual_tax_due - total_withheld),
        bracket_name=bracket_label(total_taxable),
        effective_rate=effective_rate,
    )
