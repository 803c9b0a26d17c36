"""
Side-by-side comparisons built on the annual and structure calculators.

``compare_cities`` runs one salary package through several cities' policies;
``compare_offers`` ranks several compensation structures by comprehensive
value.
"""

from typing import List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, Field

from .annual import calculate_all
from .city_policy import CityId, CityPolicy, get_city_policy
from .exceptions import InputValidationError
from .money import round2
from .salary import AnnualSummary, SalaryInput, SalaryStructure, StructureBreakdown
from .structure import calc_structure_breakdown

MIN_COMPARE_CITIES = 2
MAX_COMPARE_CITIES = 6
MAX_COMPARE_OFFERS = 4


class CityResult(BaseModel):
    city: CityId
    policy: CityPolicy
    housing_fund_rate: float = Field(..., description="Rate after capping to the city's max")
    summary: AnnualSummary


class CityComparison(BaseModel):
    results: List[CityResult]
    best_city: CityId = Field(..., description="Highest total net cash")


class OfferComparison(BaseModel):
    breakdowns: List[Optional[StructureBreakdown]] = Field(
        ..., description="One per offer; None where the offer has no positive base"
    )
    best_index: Optional[int] = Field(
        default=None, description="Offer with the highest comprehensive value"
    )
    value_gaps: List[Optional[float]] = Field(
        default_factory=list, description="Comprehensive value behind the best offer"
    )


def _best_index(values: Sequence[float]) -> int:
    # argmax returns the first maximum, so earlier entries win ties
    return int(np.argmax(np.asarray(values, dtype=np.float64)))


def compare_cities(salary_input: SalaryInput, cities: Sequence[str]) -> CityComparison:
    """
    Evaluate the same package in several cities.

    The input's housing fund rate is capped at each city's maximum; its own
    city field is ignored.

    Raises:
        InputValidationError: If fewer than 2 or more than 6 cities are given
        UnknownCityError: If any city has no policy
    """
    if not MIN_COMPARE_CITIES <= len(cities) <= MAX_COMPARE_CITIES:
        raise InputValidationError(
            f"Compare between {MIN_COMPARE_CITIES} and {MAX_COMPARE_CITIES} cities"
        )

    results = []
    for city_id in cities:
        policy = get_city_policy(city_id)
        hf_rate = min(salary_input.housing_fund_rate, policy.housing_fund.rate_range.max)
        city_input = salary_input.model_copy(
            update={"city": city_id, "housing_fund_rate": hf_rate}
        )
        results.append(
            CityResult(
                city=city_id,
                policy=policy,
                housing_fund_rate=hf_rate,
                summary=calculate_all(city_input),
            )
        )

    best = _best_index([r.summary.total_net_cash for r in results])
    return CityComparison(results=results, best_city=results[best].city)


def compare_offers(offers: Sequence[SalaryStructure]) -> OfferComparison:
    """
    Rank compensation structures by comprehensive value.

    Raises:
        InputValidationError: If no offers or more than 4 are given
        UnknownCityError: If any offer's city has no policy
    """
    if not 1 <= len(offers) <= MAX_COMPARE_OFFERS:
        raise InputValidationError(f"Compare between 1 and {MAX_COMPARE_OFFERS} offers")

    breakdowns: List[Optional[StructureBreakdown]] = [
        calc_structure_breakdown(offer) if offer.monthly_base > 0 else None
        for offer in offers
    ]
    valid = [i for i, b in enumerate(breakdowns) if b is not None]
    if not valid:
        return OfferComparison(breakdowns=breakdowns, value_gaps=[None] * len(offers))

    values = [breakdowns[i].comprehensive_value for i in valid]
    best_index = valid[_best_index(values)]
    best_value = breakdowns[best_index].comprehensive_value
    gaps = [
        round2(best_value - b.comprehensive_value) if b is not None else None
        for b in breakdowns
    ]
    return OfferComparison(breakdowns=breakdowns, best_index=best_index, value_gaps=gaps)
