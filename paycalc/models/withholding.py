"""
Cumulative withholding of individual income tax on salary.

Each month the year-to-date taxable income is taxed against the annual rate
table and the month's tax is the increase over what has already been
withheld. Rates therefore step up through the year as cumulative income
crosses bracket bounds, and early months may owe nothing.
"""

import logging
from typing import List

from pydantic import BaseModel, Field

from .city_policy import BASIC_DEDUCTION_MONTHLY, TAX_BRACKETS, BracketTable
from .money import round2

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def calc_cumulative_tax(
    cumulative_taxable_income: float, brackets: BracketTable = TAX_BRACKETS
) -> float:
    """
    Tax due on a year-to-date taxable income.

    Non-positive income owes nothing. Otherwise the first bracket whose upper
    bound is >= income applies its quick deduction.
    """
    if cumulative_taxable_income <= 0:
        return 0.0
    bracket = brackets.find(cumulative_taxable_income)
    return round2(cumulative_taxable_income * bracket.rate - bracket.deduction)


class WithholdingMonth(BaseModel):
    """Withholding state after one month."""

    month: int = Field(..., ge=1)
    taxable_income: float = Field(..., description="This month's taxable income")
    cumulative_taxable_income: float = Field(
        ..., description="Year-to-date taxable income, floored at 0"
    )
    cumulative_tax: float = Field(..., ge=0, description="Tax withheld so far")
    monthly_tax: float = Field(..., ge=0)
    net_salary: float


class WithholdingResult(BaseModel):
    """A full year of cumulative withholding."""

    months: List[WithholdingMonth]
    cumulative_taxable_income: float = Field(
        ..., description="Unfloored year-end taxable income (may be negative)"
    )
    cumulative_tax_paid: float = Field(..., ge=0)

    @property
    def effective_cumulative_income(self) -> float:
        return max(0.0, self.cumulative_taxable_income)

    @property
    def total_net_salary(self) -> float:
        return sum(m.net_salary for m in self.months)


class WithholdingTaxEngine:
    """Runs the cumulative withholding method over the months of a year."""

    def __init__(
        self,
        brackets: BracketTable = TAX_BRACKETS,
        basic_deduction: float = BASIC_DEDUCTION_MONTHLY,
    ):
        self.brackets = brackets
        self.basic_deduction = basic_deduction

    def run(
        self,
        gross_salary: float,
        insurance_total: float,
        additional_deduction: float = 0.0,
        months: int = MONTHS_PER_YEAR,
    ) -> WithholdingResult:
        """
        Withhold tax on a constant monthly salary.

        Args:
            gross_salary: Monthly gross pay subject to withholding
            insurance_total: Employee social insurance + housing fund per month
            additional_deduction: Monthly special additional deduction
            months: Number of payroll months to run

        Returns:
            Per-month withholding and the year-end state
        """
        cumulative_taxable = 0.0
        cumulative_paid = 0.0
        records: List[WithholdingMonth] = []

        for month in range(1, months + 1):
            month_taxable = (
                gross_salary
                - self.basic_deduction
                - insurance_total
                - additional_deduction
            )
            # Carried unclamped; only the bracket lookup sees the floor
            cumulative_taxable += month_taxable
            effective = max(0.0, cumulative_taxable)

            due = calc_cumulative_tax(effective, self.brackets)
            monthly_tax = round2(max(0.0, due - cumulative_paid))
            cumulative_paid += monthly_tax

            records.append(
                WithholdingMonth(
                    month=month,
                    taxable_income=round2(month_taxable),
                    cumulative_taxable_income=round2(effective),
                    cumulative_tax=round2(cumulative_paid),
                    monthly_tax=monthly_tax,
                    net_salary=round2(gross_salary - insurance_total - monthly_tax),
                )
            )

        logger.debug(
            f"Withheld {cumulative_paid:.2f} over {months} months "
            f"on cumulative taxable income {cumulative_taxable:.2f}"
        )
        return WithholdingResult(
            months=records,
            cumulative_taxable_income=cumulative_taxable,
            cumulative_tax_paid=cumulative_paid,
        )
