"""CSV export of a schedule and its annual summary.

The file layout is a compatibility contract with spreadsheet tools and with
files produced by earlier versions:

- UTF-8 with a leading byte-order mark
- header row, 12 month rows, one summary row, each ending in "\\n"
- the summary row leaves pension, medical and unemployment empty and
  also leaves the contribution-total column after the fund total empty

Numbers are written in their shortest plain form (800, 88.5, 7861.5).
"""

import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from .money import format_plain
from .schemas import AnnualSummary, MonthlyRecord

logger = logging.getLogger(__name__)

BOM = "\ufeff"

CSV_HEADER = [
    "月份",
    "税前薪资",
    "养老保险",
    "医疗保险",
    "失业保险",
    "住房公积金",
    "五险一金合计",
    "个人所得税",
    "税后薪资",
]

SUMMARY_LABEL = "年度汇总"


def _record_row(record: MonthlyRecord) -> List[str]:
    contribution = record.contribution
    return [
        f"{record.month}月",
        format_plain(record.pre_tax_salary),
        format_plain(contribution.pension),
        format_plain(contribution.medical),
        format_plain(contribution.unemployment),
        format_plain(contribution.housing_fund),
        format_plain(contribution.total),
        format_plain(record.tax),
        format_plain(record.after_tax_salary),
    ]


def _summary_row(summary: AnnualSummary) -> List[str]:
    # Only the fund total is aggregated; its components stay empty.
    return [
        SUMMARY_LABEL,
        format_plain(summary.total_pre_tax),
        "",
        "",
        "",
        format_plain(summary.total_fund),
        "",
        format_plain(summary.total_tax),
        format_plain(summary.total_after_tax),
    ]


def _write_schedule_rows(writer, records: Iterable[MonthlyRecord], summary: AnnualSummary) -> None:
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(_record_row(record))
    writer.writerow(_summary_row(summary))


def render_schedule_csv(records: Iterable[MonthlyRecord], summary: AnnualSummary) -> str:
    """Render the export file contents as a string (BOM included)."""
    buffer = io.StringIO()
    buffer.write(BOM)
    writer = csv.writer(buffer, lineterminator="\n")
    _write_schedule_rows(writer, records, summary)
    return buffer.getvalue()


def default_export_filename(today: Optional[date] = None) -> str:
    """Default file name, e.g. 五险一金计算结果_2026-10-18.csv."""
    today = today or date.today()
    return f"五险一金计算结果_{today.isoformat()}.csv"


def write_schedule_csv(
    records: Iterable[MonthlyRecord],
    summary: AnnualSummary,
    output_path: Path,
) -> Path:
    """Write the export file.

    Args:
        records: The twelve MonthlyRecord
        summary: AnnualSummary of the same records
        output_path: File to write; a directory gets the default file name

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    if output_path.is_dir():
        output_path = output_path / default_export_filename()

    content = render_schedule_csv(records, summary)
    with open(output_path, "w", encoding="utf-8", newline="") as csvfile:
        csvfile.write(content)

    logger.debug("Wrote schedule export to %s", output_path)
    return output_path
