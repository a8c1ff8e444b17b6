"""Twelve-month schedule generation and annual summary.

The schedule is a left fold over months 1..12. The fold state is a
CumulativeTaxState value: each month consumes the state returned by the
previous month and returns a new one. Salary and fund ratio are the same for
every month.
"""

import logging
from typing import Iterable, Iterator, List

from .contributions import calculate_contributions
from .money import Number, round2
from .schemas import (
    DEFAULT_BASE_CAP,
    DEFAULT_FUND_RATIO,
    AnnualSummary,
    CumulativeTaxState,
    MonthlyRecord,
    MonthlySchedule,
    SalaryProfile,
)
from .taxes import calculate_monthly_tax

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def calculate_month(
    profile: SalaryProfile,
    month: int,
    state: CumulativeTaxState,
) -> MonthlyRecord:
    """Compute one month's record from the prior month's cumulative state.

    Args:
        profile: Salary inputs
        month: Month number (1-12)
        state: Cumulative state through the prior month

    Returns:
        MonthlyRecord; its ``state`` property is the input for month + 1
    """
    contribution = calculate_contributions(
        profile.salary,
        profile.fund_ratio,
        profile.social_security_cap,
        profile.housing_fund_cap,
    )
    tax_result = calculate_monthly_tax(
        month,
        profile.salary,
        contribution.total,
        profile.special_deductions,
        state.taxable_income,
        state.tax,
    )

    return MonthlyRecord(
        month=month,
        pre_tax_salary=profile.salary,
        contribution=contribution,
        tax=tax_result.tax,
        after_tax_salary=round2(profile.salary - contribution.total - tax_result.tax),
        cumulative_taxable_income=tax_result.cumulative_taxable_income,
        cumulative_tax=tax_result.cumulative_tax,
    )


def iter_monthly_records(profile: SalaryProfile) -> Iterator[MonthlyRecord]:
    """Yield the records for months 1..12 in order.

    Each call starts from CumulativeTaxState.zero(), so iterating again
    reproduces the same sequence.
    """
    state = CumulativeTaxState.zero()
    for month in range(1, MONTHS_PER_YEAR + 1):
        record = calculate_month(profile, month, state)
        state = record.state
        yield record


def generate_schedule(profile: SalaryProfile) -> List[MonthlyRecord]:
    """Generate the twelve-month schedule for a profile."""
    records = list(iter_monthly_records(profile))
    logger.debug(
        "Generated %d months for salary %s (cumulative taxable %s)",
        len(records), profile.salary, records[-1].cumulative_taxable_income,
    )
    return records


def generate_monthly_schedule(
    salary: Number,
    fund_ratio: Number = DEFAULT_FUND_RATIO,
    special_deductions: Number = 0,
    social_security_cap: Number = DEFAULT_BASE_CAP,
    housing_fund_cap: Number = DEFAULT_BASE_CAP,
) -> List[MonthlyRecord]:
    """Generate the twelve-month schedule from plain arguments.

    Args:
        salary: Gross monthly salary
        fund_ratio: Housing fund ratio as a percentage
        special_deductions: Monthly special additional deductions
        social_security_cap: Social security contribution base cap
        housing_fund_cap: Housing fund contribution base cap

    Returns:
        List of 12 MonthlyRecord, months 1 through 12
    """
    profile = SalaryProfile(
        salary=salary,
        fund_ratio=fund_ratio,
        special_deductions=special_deductions,
        social_security_cap=social_security_cap,
        housing_fund_cap=housing_fund_cap,
    )
    return generate_schedule(profile)


def summarize_annual(records: Iterable[MonthlyRecord]) -> AnnualSummary:
    """Sum the schedule into annual totals, each rounded to cents."""
    records = list(records)
    return AnnualSummary(
        total_pre_tax=round2(sum(r.pre_tax_salary for r in records)),
        total_fund=round2(sum(r.contribution.total for r in records)),
        total_tax=round2(sum(r.tax for r in records)),
        total_after_tax=round2(sum(r.after_tax_salary for r in records)),
    )


def compute_schedule(profile: SalaryProfile) -> MonthlySchedule:
    """Generate the schedule and its summary in one call."""
    records = generate_schedule(profile)
    return MonthlySchedule(
        profile=profile,
        records=tuple(records),
        summary=summarize_annual(records),
    )
