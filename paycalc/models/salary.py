"""
Pydantic models for salary calculation inputs and results.

Inputs carry every optional field with an explicit default so calculators
never have to probe for missing attributes. Results are plain value objects
built fresh on each call.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .city_policy import CityId

BonusTaxMode = Literal["separate", "combined", "auto"]
BonusRegime = Literal["separate", "combined"]
BaseType = Literal["full", "minimum", "custom"]


class SalaryInput(BaseModel):
    """Monthly salary package evaluated by ``calculate_all``."""

    model_config = ConfigDict(frozen=True)

    monthly_base: float = Field(..., description="Monthly gross salary")
    total_months: float = Field(
        default=12,
        ge=12,
        le=24,
        description="Months paid per year; months beyond 12 are bonus",
    )
    housing_fund_rate: float = Field(
        default=12, ge=0, le=100, description="Housing fund rate in percent"
    )
    additional_deduction: float = Field(
        default=0, ge=0, description="Monthly special additional deduction"
    )
    social_insurance_base: Optional[float] = Field(
        default=None, description="Custom social insurance base (None = monthly base)"
    )
    housing_fund_base: Optional[float] = Field(
        default=None, description="Custom housing fund base (None = monthly base)"
    )
    bonus_tax_mode: BonusTaxMode = Field(
        default="auto", description="How the year-end bonus is taxed"
    )
    city: CityId = Field(default="beijing", description="City whose policy applies")
    supplement_hf_rate: float = Field(
        default=0, ge=0, le=100, description="Supplementary housing fund rate, percent"
    )
    enterprise_annuity_rate: float = Field(
        default=0, ge=0, le=100, description="Enterprise annuity rate, percent"
    )


class InsuranceBreakdown(BaseModel):
    """Monthly social insurance and housing fund contributions of one payer."""

    pension: float
    medical: float
    unemployment: float
    housing_fund: float
    total: float


class EmployerInsuranceBreakdown(InsuranceBreakdown):
    injury: float


class MonthlyBreakdown(BaseModel):
    """One payslip month under cumulative withholding."""

    month: int = Field(..., ge=1, le=12)
    gross_salary: float
    social_insurance_base: float
    housing_fund_base: float
    personal_insurance: InsuranceBreakdown
    employer_insurance: EmployerInsuranceBreakdown
    taxable_income: float = Field(..., description="Taxable income of this month")
    cumulative_taxable_income: float = Field(
        ..., description="Year-to-date taxable income, floored at 0"
    )
    cumulative_tax: float = Field(..., ge=0, description="Year-to-date tax withheld")
    monthly_tax: float = Field(..., ge=0)
    net_salary: float


class BonusTaxResult(BaseModel):
    """Bonus tax under both regimes and the cheaper choice."""

    bonus_amount: float
    separate_tax: float
    combined_tax: float
    recommended_mode: BonusRegime
    separate_net_bonus: float
    combined_net_bonus: float


class AnnualSummary(BaseModel):
    """Annual totals produced by ``calculate_all``."""

    total_gross_income: float
    total_salary_gross: float
    bonus_gross: float
    total_personal_insurance: float
    total_tax: float
    salary_tax: float
    bonus_tax: float
    total_net_cash: float
    total_pension_personal: float
    total_pension_employer: float
    total_housing_fund_personal: float
    total_housing_fund_employer: float
    total_pension: float
    total_housing_fund: float
    total_value: float = Field(..., description="Comprehensive value")
    bonus_tax_result: BonusTaxResult
    monthly_details: List[MonthlyBreakdown]
    total_supplement_hf: Optional[float] = None
    total_enterprise_annuity: Optional[float] = None


class SalaryStructureTemplate(BaseModel):
    """A compensation structure without its monthly base.

    This is what the conversion solver searches over.
    """

    model_config = ConfigDict(frozen=True)

    city: CityId = Field(default="beijing")
    months: float = Field(default=12, ge=0, le=36, description="Months paid per year")
    social_insurance_base_type: BaseType = Field(default="full")
    housing_fund_base_type: BaseType = Field(default="full")
    custom_social_insurance_base: Optional[float] = Field(default=None)
    custom_housing_fund_base: Optional[float] = Field(default=None)
    housing_fund_rate: float = Field(default=12, ge=0, le=100)
    alt_channel_ratio: float = Field(
        default=0, ge=0, le=100, description="Percent of pay outside official payroll"
    )
    alt_channel_fee_rate: float = Field(
        default=0, ge=0, le=100, description="Fee charged on alternate-channel pay, percent"
    )
    annual_stock_value: float = Field(default=0, ge=0, description="Face value per year")
    stock_discount: float = Field(
        default=70, ge=0, le=100, description="Percent of face value counted"
    )
    special_deduction: float = Field(default=0, ge=0, description="Monthly deduction")

    def with_base(self, monthly_base: float) -> "SalaryStructure":
        fields = self.model_dump(exclude={"monthly_base"})
        return SalaryStructure(**fields, monthly_base=monthly_base)


class SalaryStructure(SalaryStructureTemplate):
    """A complete compensation structure."""

    monthly_base: float = Field(..., description="Monthly gross salary")

    def without_base(self) -> SalaryStructureTemplate:
        return SalaryStructureTemplate(**self.model_dump(exclude={"monthly_base"}))


class StructureBreakdown(BaseModel):
    """Annual figures for one compensation structure."""

    gross_annual: float
    official_salary_annual: float
    alt_channel_annual: float
    alt_channel_fee: float
    social_insurance_personal: float
    housing_fund_personal: float
    pension_personal: float
    income_tax: float
    take_home_cash: float
    social_insurance_employer: float
    housing_fund_employer: float
    pension_employer: float
    employer_total_cost: float
    stock_face_value: float
    stock_value: float
    comprehensive_value: float


class ConversionResult(BaseModel):
    """Outcome of converting one structure into another at a given raise."""

    target_monthly_base: int
    current_breakdown: StructureBreakdown
    target_breakdown: StructureBreakdown
    raise_percent: float
    target_comprehensive_value: float
    cash_raise_percent: float
    employer_cost_change_percent: float
    saturated: bool = Field(
        default=False,
        description="True when the solver hit its upper bound short of the target",
    )
