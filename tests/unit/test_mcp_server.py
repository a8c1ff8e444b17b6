"""Tests for the MCP tool functions.

The tools are called directly; FastMCP's decorators return the original
coroutine functions. Parameters use pydantic Field defaults, so every
argument is passed explicitly.
"""

import asyncio
import json
from decimal import Decimal

import pytest

pytest.importorskip("mcp")

from salarycalc.mcp import server  # noqa: E402
from salarycalc.sdk import InputValidationError, UnknownDeductionError  # noqa: E402


def schedule_args(**overrides):
    args = {
        "salary": "10000",
        "fund_ratio": 10,
        "deductions": None,
        "deduction_amounts": None,
        "social_security_cap": None,
        "housing_fund_cap": None,
        "include_csv": False,
    }
    args.update(overrides)
    return args


def month_args(month, **overrides):
    args = schedule_args(**overrides)
    del args["include_csv"]
    args["month"] = month
    return args


class TestProfileFromArgs:

    def test_defaults(self):
        profile = server._profile_from_args("10000", 10, None, None, None, None)

        assert profile.salary == Decimal("10000")
        assert profile.special_deductions == Decimal("0")
        assert profile.housing_fund_cap == Decimal("31884")

    def test_deductions_and_overrides(self):
        profile = server._profile_from_args(
            "10000", 12, ["children", "elderly"], {"elderly": 1500}, None, None
        )
        assert profile.special_deductions == Decimal("2500")

    def test_invalid_salary(self):
        with pytest.raises(InputValidationError):
            server._profile_from_args("0", 10, None, None, None, None)

    def test_unknown_deduction(self):
        with pytest.raises(UnknownDeductionError):
            server._profile_from_args("10000", 10, ["pets"], None, None, None)


class TestCalculateSchedule:

    def test_reference_schedule(self):
        result = asyncio.run(server.calculate_schedule(**schedule_args()))

        assert "error" not in result
        assert len(result["records"]) == 12
        assert result["records"][0]["tax"] == "88.50"
        assert result["summary"]["total_after_tax"] == "94338.00"
        assert "csv" not in result

    def test_include_csv(self):
        result = asyncio.run(server.calculate_schedule(**schedule_args(include_csv=True)))

        assert result["csv"].startswith("\ufeff月份,")
        assert result["csv"].endswith("年度汇总,120000,,,,24600,,1062,94338\n")

    @pytest.mark.parametrize("overrides", [
        {"salary": "100000.01"},
        {"salary": "abc"},
        {"fund_ratio": 20},
        {"deductions": ["pets"]},
        {"deduction_amounts": {"children": -1}},
        {"social_security_cap": "0"},
    ])
    def test_invalid_input_returns_error(self, overrides):
        result = asyncio.run(server.calculate_schedule(**schedule_args(**overrides)))

        assert set(result) == {"error"}
        assert result["error"]


class TestCalculateMonth:

    def test_month_record(self):
        result = asyncio.run(server.calculate_month(**month_args(4, salary="20000", fund_ratio=12)))

        assert result["record"]["month"] == 4
        assert result["record"]["tax"] == "735.00"

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_out_of_range(self, month):
        result = asyncio.run(server.calculate_month(**month_args(month)))

        assert result["record"] is None
        assert "1-12" in result["error"]

    def test_invalid_salary(self):
        result = asyncio.run(server.calculate_month(**month_args(1, salary="0")))

        assert result["record"] is None
        assert result["error"]


def test_list_deductions():
    result = asyncio.run(server.list_deductions())

    keys = [item["key"] for item in result["deductions"]]
    assert keys == ["children", "education", "housing_loan", "housing_rent", "elderly"]
    assert not any(item["enabled"] for item in result["deductions"])


def test_tax_brackets_resource():
    data = json.loads(asyncio.run(server.tax_brackets_resource()))

    assert len(data["brackets"]) == 7
    assert data["brackets"][0]["upper_bound"] == "36000"
    assert data["brackets"][-1]["upper_bound"] is None
