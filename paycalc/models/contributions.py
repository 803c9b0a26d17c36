"""
Social insurance and housing fund contributions.

Each component is rounded to the cent on its own before the total is taken,
matching how payroll systems print the individual payslip lines.
"""

from typing import Optional

from .city_policy import BaseRange, CityPolicy
from .money import clamp, round2
from .salary import EmployerInsuranceBreakdown, InsuranceBreakdown


def resolve_base(
    monthly_base: float, custom_base: Optional[float], base_range: BaseRange
) -> float:
    """
    Pick the contribution base for one scheme.

    A positive custom base wins over the monthly salary; either way the result
    is clamped into the city's range.
    """
    if custom_base is not None and custom_base > 0:
        return clamp(custom_base, base_range.min, base_range.max)
    return clamp(monthly_base, base_range.min, base_range.max)


def calc_personal_insurance(
    si_base: float, hf_base: float, hf_rate: float, policy: CityPolicy
) -> InsuranceBreakdown:
    """
    Employee contributions for one month.

    Args:
        si_base: Social insurance base
        hf_base: Housing fund base
        hf_rate: Housing fund rate in percent (e.g. 12)
        policy: City policy supplying the employee rates

    Returns:
        Per-component contributions and their total
    """
    rates = policy.social_insurance.personal
    pension = round2(si_base * rates.pension)
    medical = round2(si_base * rates.medical)
    unemployment = round2(si_base * rates.unemployment)
    housing_fund = round2(hf_base * (hf_rate / 100))
    return InsuranceBreakdown(
        pension=pension,
        medical=medical,
        unemployment=unemployment,
        housing_fund=housing_fund,
        total=round2(pension + medical + unemployment + housing_fund),
    )


def calc_employer_insurance(
    si_base: float, hf_base: float, hf_rate: float, policy: CityPolicy
) -> EmployerInsuranceBreakdown:
    """Employer contributions for one month, including injury insurance."""
    rates = policy.social_insurance.employer
    pension = round2(si_base * rates.pension)
    medical = round2(si_base * rates.medical)
    unemployment = round2(si_base * rates.unemployment)
    injury = round2(si_base * rates.injury)
    housing_fund = round2(hf_base * (hf_rate / 100))
    return EmployerInsuranceBreakdown(
        pension=pension,
        medical=medical,
        unemployment=unemployment,
        injury=injury,
        housing_fund=housing_fund,
        total=round2(pension + medical + unemployment + injury + housing_fund),
    )
