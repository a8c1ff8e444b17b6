"""Special additional deductions (专项附加扣除).

The catalog lists the five monthly deductions with their default amounts.
Users enable the ones that apply and may override the amount; the enabled
total is what the engine receives as ``special_deductions``.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .validation import UnknownDeductionError, validate_deduction_amount


class DeductionItem(BaseModel):
    """One special additional deduction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str = Field(..., description="Stable identifier (e.g. 'children')")
    name: str = Field(..., description="Display name")
    amount: int = Field(..., ge=0, description="Monthly amount")
    enabled: bool = Field(default=False)


# Format: key -> (display name, default monthly amount)
DEDUCTION_CATALOG: Dict[str, tuple] = {
    "children": ("子女教育", 1000),
    "education": ("继续教育", 400),
    "housing_loan": ("住房贷款利息", 1000),
    "housing_rent": ("住房租金", 1500),
    "elderly": ("赡养老人", 2000),
}


def default_deductions() -> List[DeductionItem]:
    """The full catalog with default amounts, all disabled."""
    return [
        DeductionItem(key=key, name=name, amount=amount, enabled=False)
        for key, (name, amount) in DEDUCTION_CATALOG.items()
    ]


def total_deductions(items: Iterable[DeductionItem]) -> Decimal:
    """Sum of amounts for enabled items."""
    return Decimal(sum(item.amount for item in items if item.enabled))


def resolve_deductions(
    enabled: Iterable[str] = (),
    amounts: Optional[Dict[str, int]] = None,
) -> List[DeductionItem]:
    """Build the catalog with the given keys enabled and amounts overridden.

    Args:
        enabled: Keys to enable
        amounts: Custom monthly amounts by key (enabled or not)

    Returns:
        List of DeductionItem in catalog order

    Raises:
        UnknownDeductionError: If a key is not in the catalog
        InputValidationError: If an amount is not a non-negative integer
    """
    enabled = set(enabled)
    amounts = dict(amounts or {})

    for key in enabled | set(amounts):
        if key not in DEDUCTION_CATALOG:
            raise UnknownDeductionError(key)

    items = []
    for item in default_deductions():
        amount = item.amount
        if item.key in amounts:
            amount = validate_deduction_amount(amounts[item.key], field=item.key)
        items.append(item.model_copy(update={
            "amount": amount,
            "enabled": item.key in enabled,
        }))
    return items
