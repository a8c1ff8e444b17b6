"""Pydantic schemas for withholding results and the bracket table."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..schemas import Amount, CumulativeTaxState


class TaxBracket(BaseModel):
    """Single cumulative withholding bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    upper_bound: Optional[Amount] = Field(
        default=None, description="Inclusive upper bound on cumulative taxable income (None if top bracket)"
    )
    rate: Amount = Field(..., description="Tax rate as decimal")
    quick_deduction: Amount = Field(..., description="Quick deduction for this bracket")

    def contains(self, cumulative_taxable_income) -> bool:
        """True if the amount falls at or below this bracket's upper bound."""
        return self.upper_bound is None or cumulative_taxable_income <= self.upper_bound


class MonthlyTaxResult(BaseModel):
    """Withholding for one month plus the cumulative state to carry forward."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    tax: Amount = Field(..., description="Tax withheld this month (>= 0, cents)")
    cumulative_taxable_income: Amount = Field(..., description="Taxable income from January through this month")
    cumulative_tax: Amount = Field(..., description="Cumulative tax due through this month (unrounded)")
    monthly_taxable_income: Amount = Field(..., description="This month's taxable income")
    rate: Amount = Field(..., description="Rate of the selected bracket")
    quick_deduction: Amount = Field(..., description="Quick deduction of the selected bracket")

    @property
    def state(self) -> CumulativeTaxState:
        """State to pass to the next month's calculation."""
        return CumulativeTaxState(
            taxable_income=self.cumulative_taxable_income,
            tax=self.cumulative_tax,
        )
