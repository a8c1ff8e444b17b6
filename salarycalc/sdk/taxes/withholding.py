"""Individual income tax withholding, cumulative (year-to-date) method.

Each month's withholding is the tax due on year-to-date taxable income minus
the tax already due through the prior month. The caller carries the
cumulative state between months; nothing here keeps state of its own.
"""

import logging
from decimal import Decimal
from typing import Tuple

from ..money import ZERO, Number, round2, to_decimal
from .schemas import MonthlyTaxResult, TaxBracket

logger = logging.getLogger(__name__)

# Flat monthly exemption, subtracted every month before accumulating
MONTHLY_THRESHOLD = Decimal("5000")

# Cumulative withholding rate table
# Format: (inclusive upper bound, rate, quick deduction)
_BRACKET_ROWS = [
    (Decimal("36000"), Decimal("0.03"), Decimal("0")),
    (Decimal("144000"), Decimal("0.10"), Decimal("2520")),
    (Decimal("300000"), Decimal("0.20"), Decimal("16920")),
    (Decimal("420000"), Decimal("0.25"), Decimal("31920")),
    (Decimal("660000"), Decimal("0.30"), Decimal("52920")),
    (Decimal("960000"), Decimal("0.35"), Decimal("85920")),
    (None, Decimal("0.45"), Decimal("181920")),
]

TAX_BRACKETS: Tuple[TaxBracket, ...] = tuple(
    TaxBracket(upper_bound=bound, rate=rate, quick_deduction=deduction)
    for bound, rate, deduction in _BRACKET_ROWS
)


def select_bracket(cumulative_taxable_income: Number) -> TaxBracket:
    """Return the first bracket whose upper bound is >= the amount.

    Upper bounds are inclusive: exactly 36000 is taxed at 3%, not 10%.
    """
    amount = to_decimal(cumulative_taxable_income)
    for bracket in TAX_BRACKETS:
        if bracket.contains(amount):
            return bracket
    return TAX_BRACKETS[-1]


def calculate_monthly_taxable_income(
    salary: Number,
    contribution_total: Number,
    special_deductions: Number = 0,
) -> Decimal:
    """Taxable income for a single month, floored at zero."""
    taxable = (
        to_decimal(salary)
        - to_decimal(contribution_total)
        - MONTHLY_THRESHOLD
        - to_decimal(special_deductions)
    )
    return max(ZERO, taxable)


def calculate_monthly_tax(
    month: int,
    salary: Number,
    contribution_total: Number,
    special_deductions: Number = 0,
    cumulative_taxable_income: Number = 0,
    cumulative_tax: Number = 0,
) -> MonthlyTaxResult:
    """Calculate this month's withholding under the cumulative method.

    Steps:
        1. monthly taxable = max(0, salary - contributions - 5000 - special deductions)
        2. cumulative taxable = prior cumulative taxable + monthly taxable
        3. bracket = first bracket with upper bound >= cumulative taxable
        4. cumulative tax due = max(0, cumulative taxable * rate - quick deduction)
        5. tax = max(0, round2(cumulative tax due - prior cumulative tax))

    The 5000 exemption is flat per month; it is not compared against
    5000 * month.

    Args:
        month: Month number (1-12). Used for logging only.
        salary: Gross salary for the month
        contribution_total: MonthlyContribution.total for the month
        special_deductions: Special additional deductions for the month
        cumulative_taxable_income: Cumulative taxable income through the prior month
        cumulative_tax: Cumulative tax due through the prior month

    Returns:
        MonthlyTaxResult with this month's tax and the new cumulative values
    """
    monthly_taxable = calculate_monthly_taxable_income(
        salary, contribution_total, special_deductions
    )
    new_cumulative_taxable = to_decimal(cumulative_taxable_income) + monthly_taxable

    bracket = select_bracket(new_cumulative_taxable)
    cumulative_tax_due = max(
        ZERO, new_cumulative_taxable * bracket.rate - bracket.quick_deduction
    )

    tax = max(ZERO, round2(cumulative_tax_due - to_decimal(cumulative_tax)))

    logger.debug(
        "month %s: taxable=%s cumulative=%s rate=%s tax=%s",
        month, monthly_taxable, new_cumulative_taxable, bracket.rate, tax,
    )

    return MonthlyTaxResult(
        tax=tax,
        cumulative_taxable_income=new_cumulative_taxable,
        cumulative_tax=cumulative_tax_due,
        monthly_taxable_income=monthly_taxable,
        rate=bracket.rate,
        quick_deduction=bracket.quick_deduction,
    )
