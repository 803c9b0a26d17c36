"""
Per-city social insurance and housing fund policies, and the income tax tables.

All data here is compiled-in configuration for the 2025 policy year
(2025.7 ~ 2026.6) as published by each city's human resources bureau. The
policy map is built once at import and exposed read-only.
"""

from types import MappingProxyType
from typing import List, Literal, Mapping, get_args

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .exceptions import UnknownCityError

CityId = Literal[
    "beijing",
    "shanghai",
    "guangzhou",
    "shenzhen",
    "hangzhou",
    "chengdu",
    "nanjing",
    "wuhan",
    "suzhou",
    "tianjin",
]

BASIC_DEDUCTION_MONTHLY = 5000


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class BaseRange(_Frozen):
    """Inclusive contribution base bounds."""

    min: float = Field(..., ge=0, description="Lower bound of the base")
    max: float = Field(..., ge=0, description="Upper bound of the base")

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min > self.max:
            raise ValueError(f"Base min {self.min} exceeds max {self.max}")
        return self


class InsuranceRates(_Frozen):
    """Social insurance rates paid by the employee."""

    pension: float = Field(..., ge=0, le=1)
    medical: float = Field(..., ge=0, le=1)
    unemployment: float = Field(..., ge=0, le=1)


class EmployerInsuranceRates(InsuranceRates):
    """Social insurance rates paid by the employer."""

    injury: float = Field(..., ge=0, le=1)


class SocialInsurancePolicy(_Frozen):
    base: BaseRange
    personal: InsuranceRates
    employer: EmployerInsuranceRates


class HousingFundPolicy(_Frozen):
    """Housing fund base bounds and the allowed rate range, in percent."""

    base: BaseRange
    rate_range: BaseRange
    default_rate: float = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def validate_default_rate(self):
        if not self.rate_range.min <= self.default_rate <= self.rate_range.max:
            raise ValueError("Default housing fund rate must lie within rate_range")
        return self


class CityPolicy(_Frozen):
    """Contribution policy for one city."""

    id: CityId
    name: str
    short_name: str
    policy_year: str
    policy_period: str
    social_insurance: SocialInsurancePolicy
    housing_fund: HousingFundPolicy


class TaxBracket(_Frozen):
    """One row of a progressive rate table; ``upper`` is inclusive."""

    upper: float = Field(..., gt=0)
    rate: float = Field(..., ge=0, le=1)
    deduction: float = Field(..., ge=0)


class BracketTable:
    """Ordered, immutable bracket table with a vectorised bound search."""

    def __init__(self, brackets: List[TaxBracket]):
        uppers = [b.upper for b in brackets]
        if any(lo >= hi for lo, hi in zip(uppers, uppers[1:])):
            raise ValueError("Bracket upper bounds must be strictly increasing")
        if uppers[-1] != float("inf"):
            raise ValueError("Last bracket must be unbounded")
        self._brackets = tuple(brackets)
        self._uppers = np.array(uppers, dtype=np.float64)

    def find(self, amount: float) -> TaxBracket:
        """Return the first bracket whose upper bound is >= amount."""
        return self._brackets[self.index_of(amount)]

    def index_of(self, amount: float) -> int:
        index = int(np.searchsorted(self._uppers, amount, side="left"))
        return min(index, len(self._brackets) - 1)

    def __iter__(self):
        return iter(self._brackets)

    def __len__(self) -> int:
        return len(self._brackets)

    def __getitem__(self, index: int) -> TaxBracket:
        return self._brackets[index]


_INF = float("inf")

# Cumulative withholding / annual comprehensive income table
TAX_BRACKETS = BracketTable(
    [
        TaxBracket(upper=36000, rate=0.03, deduction=0),
        TaxBracket(upper=144000, rate=0.10, deduction=2520),
        TaxBracket(upper=300000, rate=0.20, deduction=16920),
        TaxBracket(upper=420000, rate=0.25, deduction=31920),
        TaxBracket(upper=660000, rate=0.30, deduction=52920),
        TaxBracket(upper=960000, rate=0.35, deduction=85920),
        TaxBracket(upper=_INF, rate=0.45, deduction=181920),
    ]
)

# Separately taxed annual bonus, looked up by bonus / 12
BONUS_TAX_BRACKETS = BracketTable(
    [
        TaxBracket(upper=3000, rate=0.03, deduction=0),
        TaxBracket(upper=12000, rate=0.10, deduction=210),
        TaxBracket(upper=25000, rate=0.20, deduction=1410),
        TaxBracket(upper=35000, rate=0.25, deduction=2660),
        TaxBracket(upper=55000, rate=0.30, deduction=4410),
        TaxBracket(upper=80000, rate=0.35, deduction=7160),
        TaxBracket(upper=_INF, rate=0.45, deduction=15160),
    ]
)


def _policy(
    city_id: str,
    name: str,
    short_name: str,
    si_base: tuple,
    personal: tuple,
    employer: tuple,
    hf_base: tuple,
    hf_default_rate: float,
) -> CityPolicy:
    return CityPolicy(
        id=city_id,
        name=name,
        short_name=short_name,
        policy_year="2025",
        policy_period="2025.7 ~ 2026.6",
        social_insurance=SocialInsurancePolicy(
            base=BaseRange(min=si_base[0], max=si_base[1]),
            personal=InsuranceRates(
                pension=personal[0], medical=personal[1], unemployment=personal[2]
            ),
            employer=EmployerInsuranceRates(
                pension=employer[0],
                medical=employer[1],
                unemployment=employer[2],
                injury=employer[3],
            ),
        ),
        housing_fund=HousingFundPolicy(
            base=BaseRange(min=hf_base[0], max=hf_base[1]),
            rate_range=BaseRange(min=5, max=12),
            default_rate=hf_default_rate,
        ),
    )


CITY_LIST: List[str] = list(get_args(CityId))

_POLICIES = {
    p.id: p
    for p in [
        _policy("beijing", "北京市", "北京", (7162, 35811),
                (0.08, 0.02, 0.005), (0.16, 0.1037, 0.005, 0.002), (2540, 35811), 12),
        _policy("shanghai", "上海市", "上海", (7384, 36921),
                (0.08, 0.02, 0.005), (0.16, 0.095, 0.005, 0.0016), (2690, 36921), 7),
        _policy("guangzhou", "广州市", "广州", (5284, 27501),
                (0.08, 0.02, 0.002), (0.14, 0.055, 0.0032, 0.002), (2300, 41472), 12),
        _policy("shenzhen", "深圳市", "深圳", (2360, 27501),
                (0.08, 0.02, 0.003), (0.14, 0.05, 0.007, 0.002), (2360, 41190), 5),
        _policy("hangzhou", "杭州市", "杭州", (4812, 24060),
                (0.08, 0.02, 0.005), (0.14, 0.095, 0.005, 0.002), (2490, 38322), 12),
        _policy("chengdu", "成都市", "成都", (4246, 21228),
                (0.08, 0.02, 0.004), (0.16, 0.069, 0.006, 0.002), (2280, 30456), 12),
        _policy("nanjing", "南京市", "南京", (4879, 24396),
                (0.08, 0.02, 0.005), (0.16, 0.08, 0.005, 0.004), (2490, 36000), 12),
        _policy("wuhan", "武汉市", "武汉", (4494, 22467),
                (0.08, 0.02, 0.003), (0.16, 0.08, 0.007, 0.004), (2210, 29230), 12),
        _policy("suzhou", "苏州市", "苏州", (4879, 24396),
                (0.08, 0.02, 0.005), (0.16, 0.07, 0.005, 0.004), (2490, 36000), 12),
        _policy("tianjin", "天津市", "天津", (5310, 26541),
                (0.08, 0.02, 0.005), (0.16, 0.09, 0.005, 0.002), (2320, 30420), 11),
    ]
}

CITY_POLICIES: Mapping[str, CityPolicy] = MappingProxyType(_POLICIES)


def get_city_policy(city_id: str) -> CityPolicy:
    """
    Look up the policy for a city.

    Args:
        city_id: Supported city id, e.g. ``"beijing"``

    Returns:
        The city's immutable policy

    Raises:
        UnknownCityError: If the city has no compiled policy
    """
    try:
        return CITY_POLICIES[city_id]
    except KeyError:
        raise UnknownCityError(city_id) from None


def list_city_policies() -> List[CityPolicy]:
    """All policies in canonical city order."""
    return [CITY_POLICIES[city_id] for city_id in CITY_LIST]
