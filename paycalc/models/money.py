"""
Money helpers shared by every calculator.

Amounts are floats in yuan. Every intermediate figure is rounded to the cent
with ``round2`` at the same points the reference payslip calculation does, so
results match published figures exactly.
"""

import math


def round2(value: float) -> float:
    """Round to 2 decimals, halves toward positive infinity.

    This is ``floor(x * 100 + 0.5) / 100``, not Python's banker's ``round``.
    """
    return math.floor(value * 100 + 0.5) / 100


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def percent_change(new: float, old: float) -> float:
    """Percentage change from old to new, 0 when old is not positive."""
    if old <= 0:
        return 0.0
    return round2((new - old) / old * 100)
