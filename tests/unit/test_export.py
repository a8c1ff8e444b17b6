"""Tests for the CSV export file layout.

The layout (BOM, header, column order, empty summary fields) is read by
spreadsheet tools and must not drift.
"""

from datetime import date

import pytest

from salarycalc.sdk import (
    SalaryProfile,
    compute_schedule,
    default_export_filename,
    render_schedule_csv,
    write_schedule_csv,
)

HEADER = "月份,税前薪资,养老保险,医疗保险,失业保险,住房公积金,五险一金合计,个人所得税,税后薪资"


@pytest.fixture
def reference():
    return compute_schedule(SalaryProfile(salary=10000, fund_ratio=10))


class TestRenderCsv:

    def test_starts_with_bom_and_header(self, reference):
        content = render_schedule_csv(reference.records, reference.summary)

        assert content.startswith("\ufeff")
        assert content[1:].split("\n")[0] == HEADER

    def test_line_count(self, reference):
        content = render_schedule_csv(reference.records, reference.summary)
        lines = content.split("\n")

        # header + 12 months + summary, then the trailing newline
        assert len(lines) == 15
        assert lines[-1] == ""

    def test_month_rows(self, reference):
        lines = render_schedule_csv(reference.records, reference.summary).split("\n")

        assert lines[1] == "1月,10000,800,200,50,1000,2050,88.5,7861.5"
        assert lines[12] == "12月,10000,800,200,50,1000,2050,88.5,7861.5"

    def test_summary_row(self, reference):
        lines = render_schedule_csv(reference.records, reference.summary).split("\n")

        assert lines[13] == "年度汇总,120000,,,,24600,,1062,94338"

    def test_summary_row_field_positions(self):
        result = compute_schedule(SalaryProfile(salary="23456.78", fund_ratio=7))
        summary_line = render_schedule_csv(result.records, result.summary).split("\n")[13]
        fields = summary_line.split(",")

        assert len(fields) == 9
        assert fields[0] == "年度汇总"
        assert fields[2:5] == ["", "", ""]
        assert fields[6] == ""
        assert all(fields[i] for i in (1, 5, 7, 8))

    def test_cents_are_kept(self):
        result = compute_schedule(SalaryProfile(salary="333.33", fund_ratio=5))
        row = render_schedule_csv(result.records, result.summary).split("\n")[1]

        assert row == "1月,333.33,26.67,6.67,1.67,16.67,51.68,0,281.65"


class TestWriteCsv:

    def test_write_to_file(self, tmp_path, reference):
        output = tmp_path / "schedule.csv"
        written = write_schedule_csv(reference.records, reference.summary, output)

        assert written == output
        raw = output.read_bytes()
        assert raw.startswith(b"\xef\xbb\xbf")
        assert output.read_text(encoding="utf-8") == render_schedule_csv(
            reference.records, reference.summary
        )

    def test_write_to_directory_uses_default_name(self, tmp_path, reference):
        written = write_schedule_csv(reference.records, reference.summary, tmp_path)

        assert written.parent == tmp_path
        assert written.name.startswith("五险一金计算结果_")
        assert written.suffix == ".csv"

    def test_no_carriage_returns(self, tmp_path, reference):
        output = write_schedule_csv(reference.records, reference.summary, tmp_path / "x.csv")
        assert b"\r" not in output.read_bytes()


def test_default_export_filename():
    assert default_export_filename(date(2026, 3, 5)) == "五险一金计算结果_2026-03-05.csv"
