"""Salary, tax and contribution calculation engine."""

from .annual import calculate_all, validate_salary_input
from .bonus_tax import BonusTaxOptimizer, calc_bonus_tax_combined, calc_bonus_tax_separate
from .city_policy import (
    BASIC_DEDUCTION_MONTHLY,
    BONUS_TAX_BRACKETS,
    CITY_LIST,
    TAX_BRACKETS,
    CityPolicy,
    TaxBracket,
    get_city_policy,
    list_city_policies,
)
from .comparison import CityComparison, OfferComparison, compare_cities, compare_offers
from .contributions import calc_employer_insurance, calc_personal_insurance, resolve_base
from .converter import convert_salary_structure, solve_monthly_base
from .exceptions import (
    InputValidationError,
    PayCalcError,
    SolverSaturatedError,
    UnknownCityError,
)
from .reconciliation import ReconciliationInput, ReconciliationResult, reconcile_annual_tax
from .salary import (
    AnnualSummary,
    BonusTaxResult,
    ConversionResult,
    EmployerInsuranceBreakdown,
    InsuranceBreakdown,
    MonthlyBreakdown,
    SalaryInput,
    SalaryStructure,
    SalaryStructureTemplate,
    StructureBreakdown,
)
from .structure import VALUE_WEIGHTS, calc_structure_breakdown
from .withholding import WithholdingTaxEngine, calc_cumulative_tax

__all__ = [
    "SalaryInput",
    "InsuranceBreakdown",
    "EmployerInsuranceBreakdown",
    "MonthlyBreakdown",
    "BonusTaxResult",
    "AnnualSummary",
    "SalaryStructure",
    "SalaryStructureTemplate",
    "StructureBreakdown",
    "ConversionResult",
    "CityPolicy",
    "TaxBracket",
    "TAX_BRACKETS",
    "BONUS_TAX_BRACKETS",
    "BASIC_DEDUCTION_MONTHLY",
    "CITY_LIST",
    "get_city_policy",
    "list_city_policies",
    "resolve_base",
    "calc_personal_insurance",
    "calc_employer_insurance",
    "WithholdingTaxEngine",
    "calc_cumulative_tax",
    "BonusTaxOptimizer",
    "calc_bonus_tax_separate",
    "calc_bonus_tax_combined",
    "calculate_all",
    "validate_salary_input",
    "VALUE_WEIGHTS",
    "calc_structure_breakdown",
    "solve_monthly_base",
    "convert_salary_structure",
    "ReconciliationInput",
    "ReconciliationResult",
    "reconcile_annual_tax",
    "CityComparison",
    "OfferComparison",
    "compare_cities",
    "compare_offers",
    "PayCalcError",
    "UnknownCityError",
    "InputValidationError",
    "SolverSaturatedError",
]
