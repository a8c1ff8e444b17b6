"""Input validation at the boundary, before the engine is called.

The engine itself never validates: given out-of-range input it returns
well-defined but meaningless numbers. The CLI and MCP server call these
functions first and report the message without running any computation.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .money import Number, to_decimal
from .schemas import DEFAULT_BASE_CAP, SalaryProfile

MAX_SALARY = Decimal("100000")
MIN_FUND_RATIO = 5
MAX_FUND_RATIO = 12

SALARY_MESSAGE = "请输入有效的月薪（0-100000）"

# Digits with at most two decimal places
_SALARY_PATTERN = re.compile(r"^\d*(\.\d{0,2})?$")


class ValidationError(Exception):
    """Base class for input validation failures."""
    pass


class InputValidationError(ValidationError):
    """Raised when a user-supplied value is out of range or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class UnknownDeductionError(ValidationError):
    """Raised when a special deduction key is not in the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown special deduction: {key}")


def validate_salary(value: Number) -> Decimal:
    """Parse and check a monthly salary.

    Must be > 0 and <= 100000 with at most two decimal places.

    Raises:
        InputValidationError: With the user-facing message on any violation
    """
    if isinstance(value, str):
        text = value.strip()
        if not text or not _SALARY_PATTERN.match(text) or text == ".":
            raise InputValidationError("salary", SALARY_MESSAGE)
        salary = Decimal(text)
    else:
        try:
            salary = to_decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InputValidationError("salary", SALARY_MESSAGE)
        if not salary.is_finite():
            raise InputValidationError("salary", SALARY_MESSAGE)

    # Range first: quantize fails on values wider than the decimal context
    if salary <= 0 or salary > MAX_SALARY:
        raise InputValidationError("salary", SALARY_MESSAGE)
    if salary != salary.quantize(Decimal("0.01")):
        raise InputValidationError("salary", SALARY_MESSAGE)
    return salary


def validate_fund_ratio(value) -> int:
    """Check the housing fund ratio is an integer percentage in [5, 12]."""
    try:
        ratio = int(str(value).strip())
    except ValueError:
        raise InputValidationError(
            "fund_ratio", f"公积金缴纳比例必须为{MIN_FUND_RATIO}-{MAX_FUND_RATIO}之间的整数"
        )
    if not MIN_FUND_RATIO <= ratio <= MAX_FUND_RATIO:
        raise InputValidationError(
            "fund_ratio", f"公积金缴纳比例必须为{MIN_FUND_RATIO}-{MAX_FUND_RATIO}之间的整数"
        )
    return ratio


def validate_deduction_amount(value, field: str = "deduction") -> int:
    """Check a special deduction amount is a non-negative integer."""
    try:
        amount = int(str(value).strip())
    except ValueError:
        raise InputValidationError(field, "专项附加扣除金额必须为非负整数")
    if amount < 0:
        raise InputValidationError(field, "专项附加扣除金额必须为非负整数")
    return amount


def validate_base_cap(value: Number, field: str) -> Decimal:
    """Check a contribution base cap is a positive amount."""
    try:
        cap = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InputValidationError(field, "缴费基数上限必须为正数")
    if not cap.is_finite() or cap <= 0:
        raise InputValidationError(field, "缴费基数上限必须为正数")
    return cap


def validate_special_deductions(value: Number) -> Decimal:
    """Check the monthly special deduction total is a non-negative amount."""
    try:
        deductions = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InputValidationError("special_deductions", "专项附加扣除金额必须为非负数")
    if not deductions.is_finite() or deductions < 0:
        raise InputValidationError("special_deductions", "专项附加扣除金额必须为非负数")
    return deductions


def build_profile(
    salary: Number,
    fund_ratio=10,
    special_deductions: Number = 0,
    social_security_cap: Optional[Number] = None,
    housing_fund_cap: Optional[Number] = None,
) -> SalaryProfile:
    """Validate all inputs and build a SalaryProfile.

    Raises:
        InputValidationError: On the first invalid value
    """
    return SalaryProfile(
        salary=validate_salary(salary),
        fund_ratio=validate_fund_ratio(fund_ratio),
        special_deductions=validate_special_deductions(special_deductions),
        social_security_cap=validate_base_cap(
            DEFAULT_BASE_CAP if social_security_cap is None else social_security_cap,
            "social_security_cap",
        ),
        housing_fund_cap=validate_base_cap(
            DEFAULT_BASE_CAP if housing_fund_cap is None else housing_fund_cap,
            "housing_fund_cap",
        ),
    )
