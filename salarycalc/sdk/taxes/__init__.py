"""taxes - Individual income tax withholding.

Scope:
- Fixed cumulative withholding bracket table (7 brackets, 3%-45%)
- Per-month withholding under the cumulative (year-to-date) method

Constraints:
- Pure calculation - no config, no file access
- Cumulative state is passed in and returned, never stored here
- One bracket table only; rates and threshold are not configurable

Usage:
    from salarycalc.sdk.taxes import calculate_monthly_tax

    result = calculate_monthly_tax(1, salary=10000, contribution_total=2050)
    next_month = calculate_monthly_tax(
        2, 10000, 2050,
        cumulative_taxable_income=result.cumulative_taxable_income,
        cumulative_tax=result.cumulative_tax,
    )
"""

from .schemas import MonthlyTaxResult, TaxBracket

from .withholding import (
    MONTHLY_THRESHOLD,
    TAX_BRACKETS,
    calculate_monthly_tax,
    calculate_monthly_taxable_income,
    select_bracket,
)

__all__ = [
    # Schemas
    "MonthlyTaxResult",
    "TaxBracket",
    # Withholding
    "MONTHLY_THRESHOLD",
    "TAX_BRACKETS",
    "calculate_monthly_tax",
    "calculate_monthly_taxable_income",
    "select_bracket",
]
