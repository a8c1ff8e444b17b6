"""Rich renderer for monthly schedules.

Transforms SDK models into formatted Rich tables.
"""

from typing import Iterable, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from salarycalc.sdk import (
    AnnualSummary,
    DeductionItem,
    MonthlyRecord,
    MonthlySchedule,
    format_currency,
    total_deductions,
)


def render_schedule(console: Console, schedule: MonthlySchedule, detail: bool = False) -> None:
    """Render inputs, the twelve months and the annual summary.

    Args:
        console: Rich Console instance
        schedule: SDK output from compute_schedule()
        detail: Show pension, medical, unemployment and housing fund columns
    """
    _render_inputs(console, schedule)
    _render_months(console, schedule.records, detail)
    render_summary(console, schedule.summary)


def _render_inputs(console: Console, schedule: MonthlySchedule) -> None:
    profile = schedule.profile
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("月薪", format_currency(profile.salary))
    table.add_row("公积金比例", f"{profile.fund_ratio}%")
    table.add_row("专项附加扣除", format_currency(profile.special_deductions))
    table.add_row("社保基数上限", format_currency(profile.social_security_cap))
    table.add_row("公积金基数上限", format_currency(profile.housing_fund_cap))

    console.print(Panel(table, title="Inputs", border_style="dim"))


def _render_months(console: Console, records: Sequence[MonthlyRecord], detail: bool) -> None:
    table = Table(box=box.SIMPLE_HEAVY, title="Monthly Schedule")
    table.add_column("月份", justify="right")
    table.add_column("税前薪资", justify="right")
    if detail:
        table.add_column("养老", justify="right", style="dim")
        table.add_column("医疗", justify="right", style="dim")
        table.add_column("失业", justify="right", style="dim")
        table.add_column("公积金", justify="right", style="dim")
    table.add_column("五险一金", justify="right")
    table.add_column("个税", justify="right", style="red")
    table.add_column("税后薪资", justify="right", style="green")

    for record in records:
        c = record.contribution
        row = [f"{record.month}月", format_currency(record.pre_tax_salary)]
        if detail:
            row += [
                format_currency(c.pension),
                format_currency(c.medical),
                format_currency(c.unemployment),
                format_currency(c.housing_fund),
            ]
        row += [
            format_currency(c.total),
            format_currency(record.tax),
            format_currency(record.after_tax_salary),
        ]
        table.add_row(*row)

    console.print(table)


def render_summary(console: Console, summary: AnnualSummary) -> None:
    """Render the annual totals panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("年度税前收入", format_currency(summary.total_pre_tax))
    table.add_row("年度五险一金", format_currency(summary.total_fund))
    table.add_row("年度个人所得税", f"[red]{format_currency(summary.total_tax)}[/red]")
    table.add_row("年度税后收入", f"[green]{format_currency(summary.total_after_tax)}[/green]")

    console.print(Panel(table, title="年度汇总", border_style="blue"))


def render_month(console: Console, record: MonthlyRecord) -> None:
    """Render a single month's record."""
    c = record.contribution
    table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("税前薪资", format_currency(record.pre_tax_salary))
    table.add_row("养老保险", format_currency(c.pension))
    table.add_row("医疗保险", format_currency(c.medical))
    table.add_row("失业保险", format_currency(c.unemployment))
    table.add_row("住房公积金", format_currency(c.housing_fund))
    table.add_row("五险一金合计", format_currency(c.total))
    table.add_row("个人所得税", f"[red]{format_currency(record.tax)}[/red]")
    table.add_row("税后薪资", f"[green]{format_currency(record.after_tax_salary)}[/green]")
    table.add_row("累计应纳税所得额", format_currency(record.cumulative_taxable_income))
    table.add_row("累计应纳税额", format_currency(record.cumulative_tax))

    console.print(Panel(table, title=f"{record.month}月", border_style="blue"))


def render_deductions(console: Console, items: Iterable[DeductionItem]) -> None:
    """Render the special deduction catalog."""
    items = list(items)
    table = Table(box=box.SIMPLE_HEAVY, title="专项附加扣除")
    table.add_column("Key")
    table.add_column("项目")
    table.add_column("金额", justify="right")
    table.add_column("Enabled", justify="center")

    for item in items:
        table.add_row(
            item.key,
            item.name,
            format_currency(item.amount),
            "[green]yes[/green]" if item.enabled else "[dim]no[/dim]",
        )

    console.print(table)
    console.print(f"Enabled total: {format_currency(total_deductions(items))}")
