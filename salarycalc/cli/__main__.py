"""Salary Calc CLI - Command-line interface for the contribution and withholding engine."""

import json
import logging
import sys
from pathlib import Path

import click
import pydantic
import yaml
from rich.console import Console

from salarycalc import __version__
from salarycalc.sdk import (
    DEDUCTION_CATALOG,
    InputValidationError,
    UnknownDeductionError,
    build_profile,
    compute_schedule,
    generate_schedule,
    get_default_output_format,
    load_defaults,
    render_schedule_csv,
    resolve_deductions,
    total_deductions,
    write_schedule_csv,
)

from .config_commands import config as config_group
from .renderers.schedule_renderer import render_deductions, render_month, render_schedule

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="salary-calc")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Salary Calc - 五险一金 and cumulative income tax withholding.

    Computes the personal pension, medical, unemployment and housing fund
    contributions for a monthly salary, and the income tax withheld each
    month under the cumulative (year-to-date) method.

    Defaults for fund ratio, base caps and special deductions are loaded from
    (in order):

    \b
    1. SALARY_CALC_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/salary-calc/profile.yaml (XDG default)

    Run 'salary-calc config show' to see the effective defaults.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


cli.add_command(config_group)


# =============================================================================
# Shared option handling
# =============================================================================


def _profile_options(func):
    """Options shared by commands that build a SalaryProfile."""
    options = [
        click.option("--fund-ratio", "-f", type=str, default=None,
                     help="Housing fund ratio, integer 5-12 (default: profile or 10)."),
        click.option("--deduction", "-d", "deductions", multiple=True,
                     type=click.Choice(sorted(DEDUCTION_CATALOG)),
                     help="Enable a special deduction (repeatable)."),
        click.option("--deduction-amount", "deduction_amounts", multiple=True, metavar="KEY=AMOUNT",
                     help="Override a special deduction amount (repeatable)."),
        click.option("--social-security-cap", type=str, default=None,
                     help="Social security base cap (default: profile or 31884)."),
        click.option("--housing-fund-cap", type=str, default=None,
                     help="Housing fund base cap (default: profile or 31884)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _parse_amount_overrides(values) -> dict:
    """Parse KEY=AMOUNT pairs."""
    overrides = {}
    for value in values:
        if "=" not in value:
            raise click.BadParameter(
                f"Expected KEY=AMOUNT, got '{value}'", param_hint="--deduction-amount"
            )
        key, amount = value.split("=", 1)
        overrides[key.strip()] = amount.strip()
    return overrides


def _load_defaults():
    try:
        return load_defaults()
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in profile: {e}")
    except pydantic.ValidationError as e:
        raise click.ClickException(f"Invalid profile:\n{e}")


def _build_profile(salary, fund_ratio, deductions, deduction_amounts,
                   social_security_cap, housing_fund_cap):
    """Validate CLI inputs, falling back to profile defaults."""
    defaults = _load_defaults()

    enabled = {item.key for item in defaults.deduction_items() if item.enabled}
    enabled.update(deductions)
    amounts = {
        key: setting.amount
        for key, setting in defaults.deductions.items()
        if setting.amount is not None
    }
    amounts.update(_parse_amount_overrides(deduction_amounts))

    try:
        items = resolve_deductions(enabled, amounts)
        profile = build_profile(
            salary,
            fund_ratio=defaults.fund_ratio if fund_ratio is None else fund_ratio,
            special_deductions=total_deductions(items),
            social_security_cap=(
                defaults.social_security_cap if social_security_cap is None else social_security_cap
            ),
            housing_fund_cap=(
                defaults.housing_fund_cap if housing_fund_cap is None else housing_fund_cap
            ),
        )
    except UnknownDeductionError as e:
        raise click.BadParameter(str(e), param_hint="--deduction-amount")
    except InputValidationError as e:
        raise click.ClickException(e.message)

    logger.debug("Resolved profile: %s", profile)
    return profile


# =============================================================================
# Commands
# =============================================================================


@cli.command("calc")
@click.argument("salary")
@_profile_options
@click.option("--format", "output_format", type=click.Choice(["table", "json", "csv"]),
              default=None, help="Output format (default: settings.json or table).")
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Write CSV export to this file or directory.")
@click.option("--detail", is_flag=True, help="Show individual contribution columns.")
def calc(salary, fund_ratio, deductions, deduction_amounts, social_security_cap,
         housing_fund_cap, output_format, output, detail):
    """Compute the twelve-month schedule for a monthly SALARY.

    SALARY must be greater than 0 and at most 100000, with at most two
    decimal places.

    \b
    Examples:
        salary-calc calc 10000
        salary-calc calc 25000 -f 12 -d children -d housing_rent
        salary-calc calc 10000 --deduction-amount elderly=1500 -d elderly
        salary-calc calc 10000 -o ~/Downloads/
    """
    profile = _build_profile(salary, fund_ratio, deductions, deduction_amounts,
                             social_security_cap, housing_fund_cap)
    schedule = compute_schedule(profile)

    if output:
        output_path = Path(output).expanduser()
        written = write_schedule_csv(schedule.records, schedule.summary, output_path)
        click.echo(f"Exported: {written}", err=True)
        if output_format is None:
            return

    output_format = output_format or get_default_output_format()

    if output_format == "json":
        click.echo(json.dumps(schedule.model_dump(mode="json"), indent=2, ensure_ascii=False))
    elif output_format == "csv":
        click.echo(render_schedule_csv(schedule.records, schedule.summary), nl=False)
    else:
        render_schedule(Console(), schedule, detail=detail)


@cli.command("month")
@click.argument("salary")
@click.argument("month", type=click.IntRange(1, 12))
@_profile_options
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def month(salary, month, fund_ratio, deductions, deduction_amounts,
          social_security_cap, housing_fund_cap, as_json):
    """Show the record for a single MONTH (1-12) of the schedule."""
    profile = _build_profile(salary, fund_ratio, deductions, deduction_amounts,
                             social_security_cap, housing_fund_cap)

    record = generate_schedule(profile)[month - 1]

    if as_json:
        click.echo(json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        render_month(Console(), record)


@cli.command("deductions")
@click.option("--json", "as_json", is_flag=True, help="Output JSON.")
def deductions_cmd(as_json):
    """List special additional deductions and which are enabled by default."""
    items = _load_defaults().deduction_items()

    if as_json:
        click.echo(json.dumps([item.model_dump() for item in items], indent=2, ensure_ascii=False))
    else:
        render_deductions(Console(), items)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
