"""Salary Calc MCP Server - FastMCP tools for the contribution and withholding engine."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from salarycalc.sdk import (
    DEDUCTION_CATALOG,
    TAX_BRACKETS,
    ValidationError,
    build_profile,
    compute_schedule,
    render_schedule_csv,
    resolve_deductions,
    total_deductions,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("salary-calc")


def _profile_from_args(salary, fund_ratio, deductions, deduction_amounts,
                       social_security_cap, housing_fund_cap):
    items = resolve_deductions(deductions or [], deduction_amounts or {})
    return build_profile(
        salary,
        fund_ratio=fund_ratio,
        special_deductions=total_deductions(items),
        social_security_cap=social_security_cap,
        housing_fund_cap=housing_fund_cap,
    )


# --- Tools ---

@mcp.tool()
async def calculate_schedule(
    salary: str = Field(description="Gross monthly salary, > 0 and <= 100000 (e.g. '10000')"),
    fund_ratio: int = Field(default=10, description="Housing fund ratio as a percentage, 5-12"),
    deductions: list[str] | None = Field(
        default=None, description=f"Special deductions to enable: {', '.join(DEDUCTION_CATALOG)}"
    ),
    deduction_amounts: dict[str, int] | None = Field(
        default=None, description="Override amounts by deduction key"
    ),
    social_security_cap: str | None = Field(default=None, description="Social security base cap (default 31884)"),
    housing_fund_cap: str | None = Field(default=None, description="Housing fund base cap (default 31884)"),
    include_csv: bool = Field(default=False, description="Also return the CSV export text"),
) -> dict[str, Any]:
    """Compute the twelve-month contribution and withholding schedule with annual totals."""
    try:
        profile = _profile_from_args(salary, fund_ratio, deductions, deduction_amounts,
                                     social_security_cap, housing_fund_cap)
        schedule = compute_schedule(profile)

        result = schedule.model_dump(mode="json")
        if include_csv:
            result["csv"] = render_schedule_csv(schedule.records, schedule.summary)
        return result

    except ValidationError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"Error calculating schedule: {e}")
        return {"error": str(e)}


@mcp.tool()
async def calculate_month(
    salary: str = Field(description="Gross monthly salary, > 0 and <= 100000"),
    month: int = Field(description="Month number, 1-12"),
    fund_ratio: int = Field(default=10, description="Housing fund ratio as a percentage, 5-12"),
    deductions: list[str] | None = Field(default=None, description="Special deductions to enable"),
    deduction_amounts: dict[str, int] | None = Field(default=None, description="Override amounts by key"),
    social_security_cap: str | None = Field(default=None, description="Social security base cap"),
    housing_fund_cap: str | None = Field(default=None, description="Housing fund base cap"),
) -> dict[str, Any]:
    """Get one month's record, including cumulative taxable income and tax."""
    if not 1 <= month <= 12:
        return {"error": f"Month must be 1-12, got {month}", "record": None}
    try:
        profile = _profile_from_args(salary, fund_ratio, deductions, deduction_amounts,
                                     social_security_cap, housing_fund_cap)
        record = compute_schedule(profile).records[month - 1]
        return {"record": record.model_dump(mode="json")}

    except ValidationError as e:
        return {"error": str(e), "record": None}
    except Exception as e:
        logger.error(f"Error calculating month {month}: {e}")
        return {"error": str(e), "record": None}


@mcp.tool()
async def list_deductions() -> dict[str, Any]:
    """List special additional deductions with their default monthly amounts."""
    items = resolve_deductions()
    return {"deductions": [item.model_dump() for item in items]}


# --- Resources ---

@mcp.resource("salarycalc://tax/brackets")
async def tax_brackets_resource() -> str:
    """Cumulative withholding bracket table."""
    return json.dumps(
        {"brackets": [bracket.model_dump(mode="json") for bracket in TAX_BRACKETS]},
        indent=2,
    )


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
