"""
Salary structure conversion.

Answers "what monthly base under structure B is worth X% more than my
current structure A" by inverting ``calc_structure_breakdown`` with a
fixed-iteration binary search over integer monthly bases.
"""

import logging
import math

from .exceptions import SolverSaturatedError
from .money import percent_change, round2
from .salary import ConversionResult, SalaryStructure, SalaryStructureTemplate
from .structure import calc_structure_breakdown

logger = logging.getLogger(__name__)

SOLVER_LOWER_BOUND = 0
SOLVER_UPPER_BOUND = 500000
SOLVER_MAX_ITERATIONS = 50


def _midpoint(lo: int, hi: int) -> int:
    # Halves round up
    return math.floor((lo + hi) / 2 + 0.5)


def solve_monthly_base(
    template: SalaryStructureTemplate,
    target_value: float,
    strict: bool = False,
) -> int:
    """
    Find the smallest integer monthly base whose comprehensive value reaches
    ``target_value``.

    Comprehensive value is assumed non-decreasing in the monthly base. The
    search keeps ``value(lo) < target <= value(hi)`` and returns ``hi``. A
    target above what the upper bound can produce saturates at
    ``SOLVER_UPPER_BOUND``.

    Args:
        template: Structure to solve for, without its monthly base
        target_value: Comprehensive value to reach
        strict: Raise instead of saturating silently

    Returns:
        The solved monthly base

    Raises:
        SolverSaturatedError: If ``strict`` and the target is unreachable
    """
    lo, hi = SOLVER_LOWER_BOUND, SOLVER_UPPER_BOUND

    for _ in range(SOLVER_MAX_ITERATIONS):
        mid = _midpoint(lo, hi)
        if mid == lo:
            break
        value = calc_structure_breakdown(template.with_base(mid)).comprehensive_value
        if value < target_value:
            lo = mid
        else:
            hi = mid

    if hi == SOLVER_UPPER_BOUND:
        reached = calc_structure_breakdown(template.with_base(hi)).comprehensive_value
        if reached < target_value:
            logger.warning(
                f"Solver saturated at {hi}: value {reached} below target {target_value}"
            )
            if strict:
                raise SolverSaturatedError(target_value, hi, reached)

    return hi


def is_saturated(template: SalaryStructureTemplate, base: int, target_value: float) -> bool:
    """True when ``base`` is the solver's upper bound and still misses the target."""
    if base < SOLVER_UPPER_BOUND:
        return False
    return calc_structure_breakdown(template.with_base(base)).comprehensive_value < target_value


def convert_salary_structure(
    current: SalaryStructure,
    target: SalaryStructureTemplate,
    raise_percent: float,
) -> ConversionResult:
    """
    Convert a current structure into a target structure at a given raise.

    Args:
        current: The structure being paid today
        target: The new structure, without its monthly base
        raise_percent: Desired increase in comprehensive value, percent

    Returns:
        The solved monthly base with both breakdowns and the resulting cash
        and employer-cost changes
    """
    current_breakdown = calc_structure_breakdown(current)
    target_value = round2(
        current_breakdown.comprehensive_value * (1 + raise_percent / 100)
    )

    target_base = solve_monthly_base(target, target_value)
    target_breakdown = calc_structure_breakdown(target.with_base(target_base))

    logger.info(
        f"Converted base {current.monthly_base} ({current.city}) at "
        f"{raise_percent}% raise to base {target_base} ({target.city})"
    )

    return ConversionResult(
        target_monthly_base=target_base,
        current_breakdown=current_breakdown,
        target_breakdown=target_breakdown,
        raise_percent=raise_percent,
        target_comprehensive_value=target_value,
        cash_raise_percent=percent_change(
            target_breakdown.take_home_cash, current_breakdown.take_home_cash
        ),
        employer_cost_change_percent=percent_change(
            target_breakdown.employer_total_cost, current_breakdown.employer_total_cost
        ),
        saturated=is_saturated(target, target_base, target_value),
    )
