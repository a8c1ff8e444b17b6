"""Pydantic schemas for the payroll computation engine.

All schemas are frozen: every month produces new values from the previous
ones, nothing is updated in place. Amounts are Decimal; floats given as input
are converted through str() (see money.to_decimal).

The engine does not validate business ranges (salary limits, fund ratio
5-12). That happens in validation.py before the engine is called, so these
models deliberately carry no range constraints on amounts.
"""

from decimal import Decimal
from typing import Annotated, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .money import ZERO


def _float_to_decimal(value):
    """Floats go through str() so 0.1 stays 0.1; pydantic handles the rest."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Amount = Annotated[Decimal, BeforeValidator(_float_to_decimal)]

DEFAULT_FUND_RATIO = Decimal("10")
# 2023 Beijing contribution base cap
DEFAULT_BASE_CAP = Decimal("31884")


# =============================================================================
# Inputs
# =============================================================================


class SalaryProfile(BaseModel):
    """Inputs for one schedule computation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    salary: Amount = Field(..., description="Gross monthly salary")
    fund_ratio: Amount = Field(
        default=DEFAULT_FUND_RATIO,
        description="Housing fund contribution ratio, as a percentage (e.g. 10 = 10%)",
    )
    special_deductions: Amount = Field(
        default=ZERO, description="Monthly special additional deductions"
    )
    social_security_cap: Amount = Field(
        default=DEFAULT_BASE_CAP,
        description="Cap on the base for pension, medical and unemployment",
    )
    housing_fund_cap: Amount = Field(
        default=DEFAULT_BASE_CAP, description="Cap on the base for the housing fund"
    )


# =============================================================================
# Per-month values
# =============================================================================


class MonthlyContribution(BaseModel):
    """Personal contributions for one month, each rounded to cents.

    total is the sum of the already-rounded components, rounded again.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pension: Amount
    medical: Amount
    unemployment: Amount
    housing_fund: Amount
    total: Amount


class CumulativeTaxState(BaseModel):
    """Year-to-date values carried from one month to the next.

    Never persisted. Each year starts from CumulativeTaxState.zero().
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    taxable_income: Amount = Field(default=ZERO, description="Cumulative taxable income")
    tax: Amount = Field(default=ZERO, description="Cumulative tax due so far")

    @classmethod
    def zero(cls) -> "CumulativeTaxState":
        """Start-of-year state."""
        return cls(taxable_income=ZERO, tax=ZERO)


class MonthlyRecord(BaseModel):
    """One row of the twelve-month schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(..., ge=1, le=12)
    pre_tax_salary: Amount
    contribution: MonthlyContribution
    tax: Amount = Field(..., description="Tax withheld this month")
    after_tax_salary: Amount
    cumulative_taxable_income: Amount
    cumulative_tax: Amount

    @property
    def state(self) -> CumulativeTaxState:
        """Cumulative state after this month."""
        return CumulativeTaxState(
            taxable_income=self.cumulative_taxable_income,
            tax=self.cumulative_tax,
        )


# =============================================================================
# Annual
# =============================================================================


class AnnualSummary(BaseModel):
    """Totals across the schedule, each rounded to cents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_pre_tax: Amount
    total_fund: Amount = Field(..., description="Sum of monthly contribution totals")
    total_tax: Amount
    total_after_tax: Amount


class MonthlySchedule(BaseModel):
    """Profile, its twelve records and their summary."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    profile: SalaryProfile
    records: Tuple[MonthlyRecord, ...]
    summary: AnnualSummary
