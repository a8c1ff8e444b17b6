"""Tests for boundary validation, special deductions and money helpers."""

from decimal import Decimal

import pytest

from salarycalc.sdk import (
    InputValidationError,
    UnknownDeductionError,
    ValidationError,
    build_profile,
    default_deductions,
    format_currency,
    format_plain,
    resolve_deductions,
    round2,
    total_deductions,
    validate_fund_ratio,
    validate_salary,
)
from salarycalc.sdk.validation import SALARY_MESSAGE


class TestSalary:

    @pytest.mark.parametrize("value,expected", [
        ("10000", Decimal("10000")),
        ("0.01", Decimal("0.01")),
        ("100000", Decimal("100000")),
        ("8888.8", Decimal("8888.8")),
        (" 12000.50 ", Decimal("12000.50")),
        (12000, Decimal("12000")),
        (12000.5, Decimal("12000.5")),
    ])
    def test_valid(self, value, expected):
        assert validate_salary(value) == expected

    @pytest.mark.parametrize("value", [
        "0", "0.00", "-1", "100000.01", "1.234", "abc", "", ".", "1e5", 0, -500, 100001, 1.234,
    ])
    def test_invalid(self, value):
        with pytest.raises(InputValidationError) as exc:
            validate_salary(value)
        assert exc.value.field == "salary"
        assert exc.value.message == SALARY_MESSAGE

    @pytest.mark.parametrize("value", [
        10**30,
        Decimal("1E+40"),
        float("nan"),
        Decimal("NaN"),
        float("inf"),
        12000.125,
        Decimal("0.001"),
        "1" * 40,
    ])
    def test_invalid_non_string_and_wide_values(self, value):
        with pytest.raises(InputValidationError) as exc:
            validate_salary(value)
        assert exc.value.field == "salary"

    def test_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            validate_salary("0")


class TestFundRatio:

    @pytest.mark.parametrize("value", [5, 8, 12, "10", " 7 "])
    def test_valid(self, value):
        assert 5 <= validate_fund_ratio(value) <= 12

    @pytest.mark.parametrize("value", [4, 13, "10.5", "ten", 0])
    def test_invalid(self, value):
        with pytest.raises(InputValidationError) as exc:
            validate_fund_ratio(value)
        assert exc.value.field == "fund_ratio"


class TestBuildProfile:

    def test_defaults(self):
        profile = build_profile("10000")

        assert profile.salary == Decimal("10000")
        assert profile.fund_ratio == Decimal("10")
        assert profile.special_deductions == Decimal("0")
        assert profile.social_security_cap == Decimal("31884")
        assert profile.housing_fund_cap == Decimal("31884")

    def test_custom_caps(self):
        profile = build_profile("10000", 12, 1000, "25000", 30000)

        assert profile.social_security_cap == Decimal("25000")
        assert profile.housing_fund_cap == Decimal("30000")

    def test_rejects_non_positive_cap(self):
        with pytest.raises(InputValidationError) as exc:
            build_profile("10000", social_security_cap=0)
        assert exc.value.field == "social_security_cap"

    def test_rejects_negative_deductions(self):
        with pytest.raises(InputValidationError):
            build_profile("10000", special_deductions=-1)

    @pytest.mark.parametrize("value", ["abc", "", None, float("nan"), Decimal("-0.01")])
    def test_rejects_malformed_deductions(self, value):
        with pytest.raises(InputValidationError) as exc:
            build_profile("10000", special_deductions=value)
        assert exc.value.field == "special_deductions"

    def test_accepts_fractional_deductions(self):
        profile = build_profile("10000", special_deductions="1500.50")
        assert profile.special_deductions == Decimal("1500.50")

    def test_first_invalid_value_wins(self):
        with pytest.raises(InputValidationError) as exc:
            build_profile("0", fund_ratio=99)
        assert exc.value.field == "salary"


class TestDeductions:

    def test_catalog(self):
        items = default_deductions()

        assert [i.key for i in items] == [
            "children", "education", "housing_loan", "housing_rent", "elderly",
        ]
        assert [i.amount for i in items] == [1000, 400, 1000, 1500, 2000]
        assert not any(i.enabled for i in items)
        assert total_deductions(items) == Decimal("0")

    def test_enabled_total(self):
        items = resolve_deductions(["children", "elderly"])
        assert total_deductions(items) == Decimal("3000")

    def test_amount_override(self):
        items = resolve_deductions(["housing_rent"], {"housing_rent": "1100", "elderly": 1000})
        by_key = {i.key: i for i in items}

        assert by_key["housing_rent"].amount == 1100
        # Overridden but not enabled
        assert by_key["elderly"].amount == 1000
        assert not by_key["elderly"].enabled
        assert total_deductions(items) == Decimal("1100")

    def test_unknown_key(self):
        with pytest.raises(UnknownDeductionError):
            resolve_deductions(["pets"])

    def test_unknown_override_key(self):
        with pytest.raises(UnknownDeductionError):
            resolve_deductions([], {"pets": 100})

    @pytest.mark.parametrize("amount", [-1, "1.5", "x"])
    def test_invalid_amount(self, amount):
        with pytest.raises(InputValidationError) as exc:
            resolve_deductions(["children"], {"children": amount})
        assert exc.value.field == "children"


class TestMoney:

    @pytest.mark.parametrize("value,expected", [
        ("0.125", Decimal("0.13")),
        ("2.675", Decimal("2.68")),
        ("-0.125", Decimal("-0.13")),
        (1.005, Decimal("1.01")),
        (7, Decimal("7.00")),
    ])
    def test_round2_half_up(self, value, expected):
        assert round2(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (Decimal("800.00"), "800"),
        (Decimal("88.50"), "88.5"),
        (Decimal("0.00"), "0"),
        (Decimal("120000.00"), "120000"),
        (Decimal("7861.05"), "7861.05"),
        (Decimal("-3.10"), "-3.1"),
    ])
    def test_format_plain(self, value, expected):
        assert format_plain(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (10000, "¥10,000.00"),
        (Decimal("88.5"), "¥88.50"),
        (0, "¥0.00"),
        (Decimal("-5.5"), "-¥5.50"),
        (Decimal("1234567.891"), "¥1,234,567.89"),
    ])
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected
