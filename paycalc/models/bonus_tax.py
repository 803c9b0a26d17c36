"""
Year-end bonus taxation under the two permitted regimes.

``separate``: the bonus is taxed alone, with the rate found by looking up the
monthly average (bonus / 12) in the bonus rate table.

``combined``: the bonus is added to the year's cumulative taxable income and
the extra annual tax it causes is its tax.
"""

from typing import Literal

from .city_policy import BONUS_TAX_BRACKETS, TAX_BRACKETS, BracketTable
from .money import round2
from .salary import BonusRegime, BonusTaxMode, BonusTaxResult
from .withholding import calc_cumulative_tax


def calc_bonus_tax_separate(
    bonus: float, brackets: BracketTable = BONUS_TAX_BRACKETS
) -> float:
    """Tax on a bonus taxed on its own."""
    if bonus <= 0:
        return 0.0
    bracket = brackets.find(bonus / 12)
    return round2(bonus * bracket.rate - bracket.deduction)


def calc_bonus_tax_combined(
    cumulative_taxable_income: float,
    bonus: float,
    brackets: BracketTable = TAX_BRACKETS,
) -> float:
    """Extra annual tax caused by merging the bonus into comprehensive income."""
    base = max(0.0, cumulative_taxable_income)
    tax_without = calc_cumulative_tax(base, brackets)
    tax_with = calc_cumulative_tax(max(0.0, base + bonus), brackets)
    return round2(tax_with - tax_without)


class BonusTaxOptimizer:
    """Compares both bonus regimes and resolves the applicable one."""

    def __init__(
        self,
        bonus_brackets: BracketTable = BONUS_TAX_BRACKETS,
        annual_brackets: BracketTable = TAX_BRACKETS,
    ):
        self.bonus_brackets = bonus_brackets
        self.annual_brackets = annual_brackets

    def evaluate(
        self, bonus_amount: float, cumulative_taxable_income: float
    ) -> BonusTaxResult:
        """
        Tax a bonus both ways.

        Args:
            bonus_amount: Gross bonus
            cumulative_taxable_income: Year-end taxable income before the bonus

        Returns:
            Both taxes, both net amounts and the cheaper regime (ties: separate)
        """
        separate_tax = calc_bonus_tax_separate(bonus_amount, self.bonus_brackets)
        combined_tax = calc_bonus_tax_combined(
            cumulative_taxable_income, bonus_amount, self.annual_brackets
        )
        recommended: BonusRegime = (
            "separate" if separate_tax <= combined_tax else "combined"
        )
        return BonusTaxResult(
            bonus_amount=bonus_amount,
            separate_tax=separate_tax,
            combined_tax=combined_tax,
            recommended_mode=recommended,
            separate_net_bonus=round2(bonus_amount - separate_tax),
            combined_net_bonus=round2(bonus_amount - combined_tax),
        )

    @staticmethod
    def resolve_mode(
        result: BonusTaxResult, mode: BonusTaxMode
    ) -> Literal["separate", "combined"]:
        """``auto`` follows the recommendation; explicit modes are forced."""
        if mode == "auto":
            return result.recommended_mode
        return mode

    @classmethod
    def effective_tax(cls, result: BonusTaxResult, mode: BonusTaxMode) -> float:
        if cls.resolve_mode(result, mode) == "separate":
            return result.separate_tax
        return result.combined_tax

    def cheapest_tax(self, bonus_amount: float, cumulative_taxable_income: float) -> float:
        """The lower of the two regimes' taxes."""
        result = self.evaluate(bonus_amount, cumulative_taxable_income)
        return min(result.separate_tax, result.combined_tax)
