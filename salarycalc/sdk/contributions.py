"""Personal social insurance and housing fund contributions for one month."""

from decimal import Decimal

from .money import Number, round2, to_decimal
from .schemas import DEFAULT_BASE_CAP, MonthlyContribution

# Personal contribution rates
PENSION_RATE = Decimal("0.08")
MEDICAL_RATE = Decimal("0.02")
UNEMPLOYMENT_RATE = Decimal("0.005")


def calculate_contributions(
    salary: Number,
    fund_ratio: Number,
    social_security_cap: Number = DEFAULT_BASE_CAP,
    housing_fund_cap: Number = DEFAULT_BASE_CAP,
) -> MonthlyContribution:
    """Calculate the four personal contributions and their total.

    Pension, medical and unemployment use min(salary, social_security_cap)
    as their base; the housing fund uses min(salary, housing_fund_cap). The
    two caps are independent.

    Each amount is rounded to cents on its own, then the total is computed
    from the rounded amounts and rounded again. Changing this order changes
    cent-level output.

    Args:
        salary: Gross monthly salary
        fund_ratio: Housing fund ratio as a percentage (10 means 10%)
        social_security_cap: Social security contribution base cap
        housing_fund_cap: Housing fund contribution base cap

    Returns:
        MonthlyContribution
    """
    salary = to_decimal(salary)
    social_security_base = min(salary, to_decimal(social_security_cap))
    housing_fund_base = min(salary, to_decimal(housing_fund_cap))

    pension = round2(social_security_base * PENSION_RATE)
    medical = round2(social_security_base * MEDICAL_RATE)
    unemployment = round2(social_security_base * UNEMPLOYMENT_RATE)
    housing_fund = round2(housing_fund_base * (to_decimal(fund_ratio) / 100))

    return MonthlyContribution(
        pension=pension,
        medical=medical,
        unemployment=unemployment,
        housing_fund=housing_fund,
        total=round2(pension + medical + unemployment + housing_fund),
    )
